# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (the droidExec tool)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the single MCP tool this server exposes, droidExec.  The tool
#   is a thin wrapper around core/droid_exec.py: FastMCP validates the
#   request against the signature below, the wrapper hands the parameters
#   to the core handler, and the handler's ToolResult is translated back
#   into an MCP result.
#
# HOW IT WORKS (the flow):
#   1. The MCP client calls "droidExec" with {prompt, model?, cwd?}
#   2. FastMCP validates the arguments (prompt required and non-empty)
#   3. droid_exec() builds a ToolInvocationRequest and awaits execute_droid()
#   4. Success  -> the sanitized text is returned as one text block
#      Failure  -> a ToolError is raised with the diagnostic text, which
#                  FastMCP serializes as a result with isError: true
#
# RUNNING THIS SERVER:
#   Use main.py (or the `droid-mcp` console script); it provisions the
#   droid binary first and then calls mcp.run() on stdio.
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.droid_exec import execute_droid
from core.models import ToolInvocationRequest

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# A log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
#     - RED for error responses
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error responses
_RESET = "\033[0m"     # Reset to default terminal color

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON, GREEN on success and RED on error."""
    color = _RED if result.get("isError") else _GREEN
    logger.info(f"{color}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("droid-mcp")

MODEL_DESCRIPTION = (
    "Model ID to use (default: claude-sonnet-4-5-20250929). Available: "
    "gpt-5.1-codex, gpt-5.1, gpt-5-codex, claude-sonnet-4-5-20250929, "
    "gpt-5-2025-08-07, claude-opus-4-1-20250805, claude-haiku-4-5-20251001, glm-4.6"
)


# =============================================================================
# TOOL: droidExec
# =============================================================================
# The model list above is documentation for the LLM only.  Any string is
# passed through to `droid -m`; droid itself decides whether it is valid.
# =============================================================================
@mcp.tool(name="droidExec", description="Execute a command via droid exec with the given prompt")
async def droid_exec(
    prompt: Annotated[str, Field(min_length=1, description="The prompt to execute via droid exec")],
    model: Annotated[Optional[str], Field(description=MODEL_DESCRIPTION)] = None,
    cwd: Annotated[Optional[str], Field(description="Working directory path")] = None,
) -> str:
    _log_request("droidExec", prompt=prompt, model=model, cwd=cwd)

    result = await execute_droid(ToolInvocationRequest(prompt=prompt, model=model, cwd=cwd))
    _log_status(f"droid finished, is_error={result.is_error}")
    _log_response("droidExec", result.to_dict())

    if result.is_error:
        raise ToolError(result.text_value)
    return result.text_value
