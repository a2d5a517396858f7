# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP translation layer.
#
# ARCHITECTURAL ROLE:
#   tools/ sits between the MCP transport and core/.  It:
#     1. Turns each core/registry.py entry into an MCP tool
#     2. Passes the raw argument object to core.dispatcher.Dispatcher
#     3. Converts the resulting envelope into MCP text content
#     4. Owns stderr logging setup
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments (the dispatcher does)
#   - They do NOT talk to Trello (core/trello_client.py does)
# =============================================================================
