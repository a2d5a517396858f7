# =============================================================================
# core/dispatcher.py  —  Tool Dispatcher
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. Reject a call that carries no argument bag at all
#   2. Look the tool name up in the registry
#   3. Check the descriptor's required fields are present and non-empty
#   4. Build the tool's *Request dataclass (defaults such as limit=10 applied)
#   5. Await the one forwarded TrelloClient call
#   6. Wrap the result, JSON-encoded, in a ToolResult envelope
#
# FAIL-SAFE:
#   invoke() never raises.  Any failure along the way is logged to stderr and
#   returned as an envelope whose text is {"error": "<message>"}.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

from core.errors import InvalidArgument, UnknownTool
from core.models import ToolInvocation, ToolResult
from core.registry import ToolHandler, get_handler
from core.trello_client import TrelloClient

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def check_required(handler: ToolHandler, arguments: Mapping[str, Any]) -> None:
    """Raise InvalidArgument naming every required field that is absent."""
    missing = [f for f in handler.descriptor.required if _is_missing(arguments.get(f))]
    if len(missing) == 1:
        raise InvalidArgument(f"Missing required argument: {missing[0]}")
    if missing:
        raise InvalidArgument(f"Missing required arguments: {', '.join(missing)}")


class Dispatcher:
    """Routes tool calls to the Trello client.  Holds no per-call state."""

    def __init__(self, client: TrelloClient):
        self._client = client

    async def invoke(self, name: Optional[str], arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        try:
            payload = await self._dispatch(name, arguments)
            return ToolResult.success(payload)
        except Exception as e:
            logger.error("Error executing tool %s: %s", name, e)
            if not isinstance(e, (InvalidArgument, UnknownTool)):
                logger.debug("Traceback for %s", name, exc_info=True)
            return ToolResult.error(str(e) or type(e).__name__)

    async def invoke_request(self, invocation: ToolInvocation) -> ToolResult:
        return await self.invoke(invocation.name, invocation.arguments)

    async def _dispatch(self, name: Optional[str], arguments: Optional[Mapping[str, Any]]) -> Any:
        if arguments is None:
            raise InvalidArgument("No arguments provided")

        handler = get_handler(name)
        if handler is None:
            raise UnknownTool(name)

        check_required(handler, arguments)
        request = handler.request_type.from_arguments(arguments)
        return await handler.forward(self._client, request)
