# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrapper.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  mcp_server.py:
#     1. Declares the droidExec tool (name, description, parameter schema)
#     2. Lets FastMCP validate incoming arguments
#     3. Calls core.droid_exec.execute_droid()
#     4. Turns the ToolResult into an MCP result (text or isError)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build droid arguments or run processes (that's in core/)
#   - They do NOT re-validate the schema (FastMCP already did)
# =============================================================================
