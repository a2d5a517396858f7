# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (all Trello tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes every entry of core/registry.py as an MCP tool.  Each tool is a
#   thin BoardTool that hands its arguments to the Dispatcher and returns the
#   Dispatcher's envelope as MCP text content.
#
# HOW IT WORKS (the flow):
#   1. The orchestrator asks for the tool list → FastMCP returns our
#      descriptors, input schemas passed through verbatim
#   2. It calls a tool by name (e.g., "add_card") with an argument object
#   3. FastMCP routes the call to BoardTool.run() below
#   4. run() calls Dispatcher.invoke(), which validates, calls Trello and
#      builds the {content: [{type: "text", text: <json>}]} envelope
#   5. Errors come back the same way, as {"error": "..."} text
#
# BoardTool, NOT @mcp.tool():
#   Input schemas are the registry's, verbatim, and FastMCP does no argument
#   validation of its own.  A missing field comes back as an {"error": ...}
#   envelope, never as a protocol error.
#
# RUNNING THIS SERVER:
#   Use main.py (it checks the environment first):  python main.py
# =============================================================================

import copy
import json
import logging
import sys
from typing import Any, Mapping

from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent
from pydantic import Field

from core.dispatcher import Dispatcher
from core.models import ToolResult
from core.registry import ToolHandler, get_handler, list_handlers
from core.trello_client import TrelloClient

SERVER_NAME = "Trello MCP Server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# Everything goes to STDERR.  STDOUT carries the MCP JSON stream; a stray
# log line there corrupts the protocol.
#
#   CYAN   → incoming requests (tool name + parameters)
#   GREEN  → responses (JSON output)
#   YELLOW → status/progress messages
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr.  Called once by the entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: Mapping[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the tool response envelope in GREEN, then return it."""
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(result.to_dict(), separators=(',', ':'), ensure_ascii=False)}{_RESET}"
    )
    return result


# =============================================================================
# BoardTool — one registry entry as an MCP tool
# =============================================================================
class BoardTool(Tool):
    """An MCP tool whose schema is fixed and whose body is Dispatcher.invoke()."""

    dispatcher: Any = Field(exclude=True)

    @classmethod
    def from_handler(cls, handler: ToolHandler, dispatcher: Dispatcher) -> "BoardTool":
        descriptor = handler.descriptor
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=copy.deepcopy(descriptor.input_schema),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        return await _invoke(self.dispatcher, self.name, arguments)


async def _invoke(dispatcher: Dispatcher, name: str, arguments: Mapping[str, Any] | None) -> MCPToolResult:
    _log_request(name, arguments or {})
    result = await dispatcher.invoke(name, arguments)
    if result.is_error:
        _log_status(f"{name} failed")
    _log_response(name, result)
    return MCPToolResult(
        content=[TextContent(type="text", text=item.text) for item in result.content]
    )


# =============================================================================
# DispatchMiddleware
# =============================================================================
# Logs "list tools" requests, and answers calls to names that are not in the
# registry with the same {"error": "Unknown tool: ..."} envelope the
# dispatcher produces, instead of FastMCP's protocol-level "not found" error.
# =============================================================================
class DispatchMiddleware(Middleware):
    def __init__(self, dispatcher: Dispatcher):
        self._dispatcher = dispatcher

    async def on_list_tools(self, context: MiddlewareContext, call_next):
        logging.info(f"{_CYAN}Received ListToolsRequest{_RESET}")
        return await call_next(context)

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if get_handler(name) is None:
            return await _invoke(self._dispatcher, name, context.message.arguments)
        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
def create_server(client: TrelloClient) -> FastMCP:
    """Build the FastMCP server with every registered tool attached.

    The server keeps no state of its own; the client is shared read-only
    by all tool calls.
    """
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    dispatcher = Dispatcher(client)
    mcp.add_middleware(DispatchMiddleware(dispatcher))

    for handler in list_handlers():
        mcp.add_tool(BoardTool.from_handler(handler, dispatcher))

    _log_status(f"Registered {len(list_handlers())} tools")
    return mcp
