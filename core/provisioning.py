# =============================================================================
# core/provisioning.py  -  Make sure the droid binary is available
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Runs ONCE at startup, before the MCP server starts listening.  If
#   <bin_dir>/droid is missing it downloads Factory's installer and runs it
#   inside bin_dir.  Either way it puts bin_dir on PATH, so that the request
#   handler can launch plain "droid" by name.
#
#   This is setup glue: nothing in the request path calls it.
#
# STDOUT IS SACRED:
#   The MCP transport is this process's stdout.  The installer's output is
#   sent to stderr so it cannot corrupt the protocol stream.
# =============================================================================

import logging
import os
import subprocess
import sys

from core.config import Settings

logger = logging.getLogger(__name__)

BINARY_NAME = "droid"


class ProvisioningError(RuntimeError):
    """The droid binary could not be installed."""


def binary_path(settings: Settings) -> str:
    return os.path.join(settings.bin_dir, BINARY_NAME)


def add_to_path(directory: str) -> None:
    """Prepend `directory` to PATH unless it is already there."""
    entries = os.environ.get("PATH", "").split(os.pathsep)
    if directory in entries:
        return
    os.environ["PATH"] = os.pathsep.join([directory, *[e for e in entries if e]])


def ensure_droid_installed(settings: Settings) -> str:
    """Install droid into settings.bin_dir if needed and return the binary path.

    Raises:
        ProvisioningError: If the installer could not be run or failed.
    """
    path = binary_path(settings)

    if os.path.exists(path):
        logger.info("Droid binary already installed at: %s", path)
    else:
        logger.info("Downloading Droid binary...")
        os.makedirs(settings.bin_dir, exist_ok=True)
        try:
            subprocess.run(
                f"curl -fsSL {settings.install_url} | sh",
                shell=True,
                check=True,
                cwd=settings.bin_dir,
                stdin=subprocess.DEVNULL,
                stdout=sys.stderr,
                stderr=sys.stderr,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise ProvisioningError(f"Failed to download Droid binary: {e}") from e
        logger.info("Droid binary downloaded successfully")

    add_to_path(settings.bin_dir)
    return path
