# =============================================================================
# main.py  -  Entry Point for the droid MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the `droid-mcp` console script)
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (python-dotenv)
#   2. Reads settings (core/config.py) and configures logging on stderr
#   3. Makes sure the droid binary is installed and on PATH
#      (core/provisioning.py), unless DROID_SKIP_INSTALL=true
#   4. Serves the droidExec tool over stdio (tools/mcp_server.py)
#
# A failure before the server starts is logged and exits with status 1.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import load_settings
from core.provisioning import ProvisioningError, ensure_droid_installed
from tools.mcp_server import configure_logging, mcp

logger = logging.getLogger(__name__)


def main() -> None:
    """Provision droid, then run the MCP server on stdio until the client disconnects."""
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)

    if settings.skip_install:
        logger.info("Skipping droid provisioning (DROID_SKIP_INSTALL is set)")
    else:
        try:
            ensure_droid_installed(settings)
        except ProvisioningError as e:
            logger.error("%s", e)
            sys.exit(1)

    logger.info("Droid MCP server running on stdio")
    mcp.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
