# =============================================================================
# core/registry.py  —  Tool Registry (the static lookup table)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares every tool the server exposes.  Each entry is a ToolHandler:
#
#       descriptor    → what "list tools" returns (name, description, schema)
#       request_type  → the *Request dataclass built from the arguments
#       forward       → the one TrelloClient call the tool maps to
#
#   The dispatcher never branches on tool names; it looks the name up here.
#   Adding a tool = one descriptor + one request type + one forward function
#   + one line in _HANDLERS.
#
# ORDER MATTERS:
#   list_tools() returns descriptors in the order of _HANDLERS.
# =============================================================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable

from core.models import (
    AddCardRequest,
    AddListRequest,
    ArchiveCardRequest,
    ArchiveListRequest,
    GetCardsByListRequest,
    GetListsRequest,
    GetMyCardsRequest,
    GetRecentActivityRequest,
    SearchAllBoardsRequest,
    ToolDescriptor,
    UpdateCardRequest,
)
from core.trello_client import TrelloClient

Forward = Callable[[TrelloClient, Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolHandler:
    descriptor: ToolDescriptor
    request_type: type
    forward: Forward

    @property
    def name(self) -> str:
        return self.descriptor.name


def _schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties or {}}
    if required:
        schema["required"] = required
    return schema


_DUE_DATE = {
    "type": "string",
    "description": "Due date (can be specified in ISO8601 format, etc. Optional)",
}


# -----------------------------------------------------------------------------
# Descriptors
# -----------------------------------------------------------------------------
GET_CARDS_BY_LIST = ToolDescriptor(
    name="get_cards_by_list",
    description="Retrieves a list of cards contained in the specified list ID.",
    input_schema=_schema(
        {"listId": {"type": "string", "description": "Trello list ID"}},
        required=["listId"],
    ),
)

GET_LISTS = ToolDescriptor(
    name="get_lists",
    description="Retrieves all lists in the board.",
    input_schema=_schema(),
)

GET_RECENT_ACTIVITY = ToolDescriptor(
    name="get_recent_activity",
    description=(
        "Retrieves the most recent board activity. "
        "The 'limit' argument can specify how many to retrieve."
    ),
    input_schema=_schema(
        {
            "limit": {
                "type": "number",
                "description": "Number of activities to retrieve (default: 10)",
            }
        }
    ),
)

ADD_CARD = ToolDescriptor(
    name="add_card",
    description="Adds a card to the specified list.",
    input_schema=_schema(
        {
            "listId": {"type": "string", "description": "The ID of the list to add to"},
            "name": {"type": "string", "description": "The title of the card"},
            "description": {"type": "string", "description": "Details of the card (optional)"},
            "dueDate": _DUE_DATE,
            "labels": {
                "type": "array",
                "description": "Array of label IDs (optional)",
                "items": {"type": "string"},
            },
        },
        required=["listId", "name"],
    ),
)

UPDATE_CARD = ToolDescriptor(
    name="update_card",
    description="Updates the content of a card.",
    input_schema=_schema(
        {
            "cardId": {"type": "string", "description": "The ID of the card to be updated"},
            "name": {"type": "string", "description": "The title of the card (optional)"},
            "description": {"type": "string", "description": "Details of the card (optional)"},
            "dueDate": _DUE_DATE,
            "labels": {
                "type": "array",
                "description": "An array of label IDs (optional)",
                "items": {"type": "string"},
            },
        },
        required=["cardId"],
    ),
)

ARCHIVE_CARD = ToolDescriptor(
    name="archive_card",
    description="Archives (closes) the specified card.",
    input_schema=_schema(
        {"cardId": {"type": "string", "description": "The ID of the card to archive"}},
        required=["cardId"],
    ),
)

ADD_LIST = ToolDescriptor(
    name="add_list",
    description="Adds a new list to the board.",
    input_schema=_schema(
        {"name": {"type": "string", "description": "Name of the list"}},
        required=["name"],
    ),
)

ARCHIVE_LIST = ToolDescriptor(
    name="archive_list",
    description="Archives (closes) the specified list.",
    input_schema=_schema(
        {"listId": {"type": "string", "description": "The ID of the list to archive"}},
        required=["listId"],
    ),
)

GET_MY_CARDS = ToolDescriptor(
    name="get_my_cards",
    description="Retrieves all cards related to your account.",
    input_schema=_schema(),
)

SEARCH_ALL_BOARDS = ToolDescriptor(
    name="search_all_boards",
    description=(
        "Performs a cross-board search across all boards in the workspace "
        "(organization) (depending on plan/permissions)."
    ),
    input_schema=_schema(
        {
            "query": {"type": "string", "description": "Search keyword"},
            "limit": {
                "type": "number",
                "description": "Maximum number of results to retrieve (default: 10)",
            },
        },
        required=["query"],
    ),
)


# -----------------------------------------------------------------------------
# Forwarding functions — one TrelloClient call each
# -----------------------------------------------------------------------------
async def _get_cards_by_list(client: TrelloClient, req: GetCardsByListRequest) -> Any:
    return await client.get_cards_by_list(req.list_id)


async def _get_lists(client: TrelloClient, req: GetListsRequest) -> Any:
    return await client.get_lists()


async def _get_recent_activity(client: TrelloClient, req: GetRecentActivityRequest) -> Any:
    return await client.get_recent_activity(req.limit)


async def _add_card(client: TrelloClient, req: AddCardRequest) -> Any:
    return await client.add_card(
        list_id=req.list_id,
        name=req.name,
        description=req.description,
        due_date=req.due_date,
        labels=req.labels,
    )


async def _update_card(client: TrelloClient, req: UpdateCardRequest) -> Any:
    return await client.update_card(
        card_id=req.card_id,
        name=req.name,
        description=req.description,
        due_date=req.due_date,
        labels=req.labels,
    )


async def _archive_card(client: TrelloClient, req: ArchiveCardRequest) -> Any:
    return await client.archive_card(req.card_id)


async def _add_list(client: TrelloClient, req: AddListRequest) -> Any:
    return await client.add_list(req.name)


async def _archive_list(client: TrelloClient, req: ArchiveListRequest) -> Any:
    return await client.archive_list(req.list_id)


async def _get_my_cards(client: TrelloClient, req: GetMyCardsRequest) -> Any:
    return await client.get_my_cards()


async def _search_all_boards(client: TrelloClient, req: SearchAllBoardsRequest) -> Any:
    return await client.search_all_boards(req.query, req.limit)


# -----------------------------------------------------------------------------
# The table
# -----------------------------------------------------------------------------
_HANDLERS = (
    ToolHandler(GET_CARDS_BY_LIST, GetCardsByListRequest, _get_cards_by_list),
    ToolHandler(GET_LISTS, GetListsRequest, _get_lists),
    ToolHandler(GET_RECENT_ACTIVITY, GetRecentActivityRequest, _get_recent_activity),
    ToolHandler(ADD_CARD, AddCardRequest, _add_card),
    ToolHandler(UPDATE_CARD, UpdateCardRequest, _update_card),
    ToolHandler(ARCHIVE_CARD, ArchiveCardRequest, _archive_card),
    ToolHandler(ADD_LIST, AddListRequest, _add_list),
    ToolHandler(ARCHIVE_LIST, ArchiveListRequest, _archive_list),
    ToolHandler(GET_MY_CARDS, GetMyCardsRequest, _get_my_cards),
    ToolHandler(SEARCH_ALL_BOARDS, SearchAllBoardsRequest, _search_all_boards),
)

HANDLERS: MappingProxyType = MappingProxyType({h.name: h for h in _HANDLERS})

if len(HANDLERS) != len(_HANDLERS):
    raise RuntimeError("Duplicate tool name in registry")


def list_tools() -> tuple[ToolDescriptor, ...]:
    """Return every tool descriptor, in registration order."""
    return tuple(h.descriptor for h in _HANDLERS)


def list_handlers() -> tuple[ToolHandler, ...]:
    return _HANDLERS


def get_handler(name: str | None) -> ToolHandler | None:
    if name is None:
        return None
    return HANDLERS.get(name)
