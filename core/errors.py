# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure the server can report falls into one of four buckets:
#
#   ConfigurationMissing  → fatal, raised before the server starts
#   InvalidArgument       → the caller left out a required field
#   UnknownTool           → the caller asked for a tool we don't have
#   DownstreamFailure     → Trello rejected the call or was unreachable
#
# Only ConfigurationMissing ever ends the process.  The other three are
# caught by the dispatcher and turned into an {"error": ...} envelope.
# =============================================================================


class BoardToolError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationMissing(BoardToolError):
    """Required environment configuration is absent or unusable."""


class InvalidArgument(BoardToolError):
    """A tool was invoked without its required arguments."""


class UnknownTool(BoardToolError):
    """A tool name that is not in the registry."""

    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class DownstreamFailure(BoardToolError):
    """The Trello API returned an error or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
