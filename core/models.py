# =============================================================================
# core/models.py  —  Data Models (the shapes that flow through a tool call)
# =============================================================================
#
# None of these are Trello domain objects.  Boards, lists and cards are never
# modeled here — we only carry identifiers and strings through to the API and
# hand back whatever JSON Trello returns.
#
#   ToolDescriptor  — name + description + JSON input schema (what "list tools"
#                     returns)
#   ToolInvocation  — one incoming "call tool" request
#   ToolResult      — the {content: [{type, text}]} envelope, used for BOTH
#                     success and error replies
#   *Request        — one frozen dataclass per tool, built only after the
#                     required-field check has passed
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

DEFAULT_LIMIT = 10


# -----------------------------------------------------------------------------
# Protocol shapes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A tool as advertised to the orchestrator."""

    name: str
    description: str
    input_schema: dict[str, Any]

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolInvocation:
    """A single "call tool" request.  `arguments` is None when the caller sent none."""

    name: Optional[str]
    arguments: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class ContentItem:
    type: str
    text: str


@dataclass(frozen=True)
class ToolResult:
    """The uniform response envelope.

    `text` is always JSON: the forwarded call's result on success, or
    {"error": message} on failure.  `is_error` is for local callers only;
    it is never sent as a protocol-level fault.
    """

    content: list[ContentItem] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(content=[ContentItem(type="text", text=json.dumps(payload, ensure_ascii=False))])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        text = json.dumps({"error": message}, ensure_ascii=False)
        return cls(content=[ContentItem(type="text", text=text)], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": c.type, "text": c.text} for c in self.content]}


# -----------------------------------------------------------------------------
# Per-tool request variants
# -----------------------------------------------------------------------------
# Field names are snake_case; the wire names (listId, dueDate, ...) only
# appear in from_arguments().  Callers must run the required-field check
# first, so indexing required keys directly is safe here.
# -----------------------------------------------------------------------------
def _limit(arguments: Mapping[str, Any]) -> int:
    value = arguments.get("limit")
    return DEFAULT_LIMIT if value is None else value


@dataclass(frozen=True)
class GetCardsByListRequest:
    list_id: str

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetCardsByListRequest":
        return cls(list_id=arguments["listId"])


@dataclass(frozen=True)
class GetListsRequest:
    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetListsRequest":
        return cls()


@dataclass(frozen=True)
class GetRecentActivityRequest:
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetRecentActivityRequest":
        return cls(limit=_limit(arguments))


@dataclass(frozen=True)
class AddCardRequest:
    list_id: str
    name: str
    description: Optional[str] = None
    due_date: Optional[str] = None
    labels: Optional[list[str]] = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "AddCardRequest":
        return cls(
            list_id=arguments["listId"],
            name=arguments["name"],
            description=arguments.get("description"),
            due_date=arguments.get("dueDate"),
            labels=arguments.get("labels"),
        )


@dataclass(frozen=True)
class UpdateCardRequest:
    card_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    labels: Optional[list[str]] = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "UpdateCardRequest":
        return cls(
            card_id=arguments["cardId"],
            name=arguments.get("name"),
            description=arguments.get("description"),
            due_date=arguments.get("dueDate"),
            labels=arguments.get("labels"),
        )


@dataclass(frozen=True)
class ArchiveCardRequest:
    card_id: str

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "ArchiveCardRequest":
        return cls(card_id=arguments["cardId"])


@dataclass(frozen=True)
class AddListRequest:
    name: str

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "AddListRequest":
        return cls(name=arguments["name"])


@dataclass(frozen=True)
class ArchiveListRequest:
    list_id: str

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "ArchiveListRequest":
        return cls(list_id=arguments["listId"])


@dataclass(frozen=True)
class GetMyCardsRequest:
    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GetMyCardsRequest":
        return cls()


@dataclass(frozen=True)
class SearchAllBoardsRequest:
    query: str
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchAllBoardsRequest":
        return cls(query=arguments["query"], limit=_limit(arguments))
