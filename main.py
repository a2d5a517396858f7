# =============================================================================
# main.py  —  Entry Point for the Trello MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py        (or the installed `trello-mcp-server` script)
#
# WHAT HAPPENS:
#   1. Loads .env (if present) into the environment
#   2. Reads TRELLO_API_KEY / TRELLO_TOKEN / TRELLO_BOARD_ID — if any is
#      missing, prints a diagnostic to stderr and exits with status 1
#   3. Opens the Trello HTTP client and builds the FastMCP server
#   4. Serves MCP over stdio until the orchestrator disconnects
#
# EXIT CODES:
#   0 — clean shutdown
#   1 — missing configuration or a failure while starting/serving
# =============================================================================

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from core.config import TrelloConfig
from core.errors import ConfigurationMissing
from core.trello_client import TrelloClient
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger("trello_mcp")


async def serve(config: TrelloConfig) -> None:
    """Run the MCP server on stdio until the client goes away."""
    async with TrelloClient(config) as client:
        server = create_server(client)
        logger.info("Connecting server to transport...")
        logger.info("Trello MCP Server running on stdio")
        await server.run_async(transport="stdio")


def main() -> int:
    # The existing environment wins over .env values.
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        config = TrelloConfig.from_env()
    except ConfigurationMissing as e:
        logger.error(str(e))
        return 1

    logger.info("Starting Trello MCP Server for board %s...", config.board_id)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
