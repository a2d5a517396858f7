# =============================================================================
# core/config.py  —  Startup Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Trello credentials and board ID from the environment ONCE,
#   at startup, and freezes them into a TrelloConfig value.  That value is
#   handed to the TrelloClient constructor; nothing else reads the TRELLO_*
#   variables.  (LOG_LEVEL is read by main.py before logging is set up.)
#
# REQUIRED VARIABLES:
#   TRELLO_API_KEY   — Trello developer API key
#   TRELLO_TOKEN     — user token authorizing the key
#   TRELLO_BOARD_ID  — the board that list/activity/add_list tools act on
#
# OPTIONAL VARIABLES:
#   TRELLO_API_BASE_URL     — defaults to https://api.trello.com/1
#   TRELLO_TIMEOUT_SECONDS  — per-request HTTP timeout, defaults to 30
#
# The entry point calls load_dotenv() before from_env(), so a .env file in
# the working directory works too.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping

from core.errors import ConfigurationMissing

DEFAULT_BASE_URL = "https://api.trello.com/1"
DEFAULT_TIMEOUT_SECONDS = 30.0

_REQUIRED_VARS = ("TRELLO_API_KEY", "TRELLO_TOKEN", "TRELLO_BOARD_ID")


@dataclass(frozen=True)
class TrelloConfig:
    """Immutable connection settings for one Trello board."""

    api_key: str
    token: str
    board_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TrelloConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from.  Defaults to os.environ.

        Raises:
            ConfigurationMissing: if any required variable is unset or empty
                (all missing names are reported together), or if the
                timeout is not a positive number.
        """
        env = os.environ if environ is None else environ

        missing = [var for var in _REQUIRED_VARS if not env.get(var)]
        if missing:
            raise ConfigurationMissing(f"{' / '.join(missing)} are not set.")

        raw_timeout = env.get("TRELLO_TIMEOUT_SECONDS") or str(DEFAULT_TIMEOUT_SECONDS)
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationMissing(
                f"TRELLO_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}."
            ) from None
        if timeout <= 0:
            raise ConfigurationMissing("TRELLO_TIMEOUT_SECONDS must be positive.")

        return cls(
            api_key=env["TRELLO_API_KEY"],
            token=env["TRELLO_TOKEN"],
            board_id=env["TRELLO_BOARD_ID"],
            base_url=(env.get("TRELLO_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            timeout_seconds=timeout,
        )

    def __repr__(self) -> str:
        # Keep credentials out of log lines and tracebacks.
        return (
            f"TrelloConfig(board_id={self.board_id!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds})"
        )
