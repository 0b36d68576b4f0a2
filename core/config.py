# =============================================================================
# core/config.py  -  Environment-driven settings
# =============================================================================
#
# Every knob is an environment variable.  main.py loads a .env file first
# (python-dotenv), so the same variables can live there during development.
#
#   DROID_BIN_DIR        Where the droid binary is installed (~/.droid/bin)
#   DROID_INSTALL_URL    Installer script fetched with curl when missing
#   DROID_SKIP_INSTALL   "true" to skip provisioning at startup
#   DROID_MCP_LOG_LEVEL  Root log level (INFO)
#
# The executable name and the per-call timeout are not configurable:
# they are constants of the droidExec tool (see core/droid_exec.py).
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BIN_DIR = os.path.join("~", ".droid", "bin")
DEFAULT_INSTALL_URL = "https://app.factory.ai/cli"


@dataclass(frozen=True)
class Settings:
    bin_dir: str
    install_url: str = DEFAULT_INSTALL_URL
    skip_install: bool = False
    log_level: str = "INFO"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `environ` (defaults to os.environ)."""
    env = os.environ if environ is None else environ
    return Settings(
        bin_dir=os.path.expanduser(env.get("DROID_BIN_DIR") or DEFAULT_BIN_DIR),
        install_url=env.get("DROID_INSTALL_URL") or DEFAULT_INSTALL_URL,
        skip_install=_flag(env.get("DROID_SKIP_INSTALL", "false")),
        log_level=(env.get("DROID_MCP_LOG_LEVEL") or "INFO").upper(),
    )
