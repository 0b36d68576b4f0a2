# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the logic behind the droidExec tool: data models,
# the process runner, the output sanitizer, the request handler, and the
# startup-only configuration and provisioning helpers.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any protocol framework.
#   The handler takes a ToolInvocationRequest and returns a ToolResult;
#   tools/ is the only layer that knows about MCP.
# =============================================================================
