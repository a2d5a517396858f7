# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything that is NOT MCP plumbing:
#
#   config.py         → TrelloConfig, read once from the environment
#   errors.py         → the error taxonomy
#   models.py         → descriptors, envelopes, per-tool request types
#   trello_client.py  → async HTTP calls to the Trello REST API
#   registry.py       → the static table of tools
#   dispatcher.py     → validate → forward → wrap
#
# Nothing in here imports FastMCP.  The dispatcher can be driven directly
# from a test or a REPL with any object that has TrelloClient's methods.
# =============================================================================
