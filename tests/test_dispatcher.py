import asyncio
import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from core.dispatcher import Dispatcher
from core.errors import DownstreamFailure
from core.models import ToolInvocation
from core.registry import list_tools


def _payload(result) -> Any:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
@pytest.mark.parametrize("name", [t.name for t in list_tools()])
async def test_omitted_arguments_return_error_envelope(dispatcher: Dispatcher, name: str) -> None:
    result = await dispatcher.invoke(name, None)

    assert result.is_error
    assert _payload(result) == {"error": "No arguments provided"}


@pytest.mark.asyncio
async def test_get_cards_by_list_requires_list_id(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    result = await dispatcher.invoke("get_cards_by_list", {})

    assert _payload(result) == {"error": "Missing required argument: listId"}
    mock_client.get_cards_by_list.assert_not_called()


@pytest.mark.asyncio
async def test_empty_string_counts_as_missing(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    result = await dispatcher.invoke("archive_card", {"cardId": ""})

    assert "cardId" in _payload(result)["error"]
    mock_client.archive_card.assert_not_called()


@pytest.mark.asyncio
async def test_get_cards_by_list_forwards_list_id(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    cards = [{"id": "c1", "name": "First"}, {"id": "c2", "name": "Второй"}]
    mock_client.get_cards_by_list.return_value = cards

    result = await dispatcher.invoke("get_cards_by_list", {"listId": "abc"})

    mock_client.get_cards_by_list.assert_awaited_once_with("abc")
    assert not result.is_error
    assert _payload(result) == cards


@pytest.mark.asyncio
async def test_get_lists_accepts_empty_arguments(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.get_lists.return_value = [{"id": "l1"}]

    result = await dispatcher.invoke("get_lists", {})

    mock_client.get_lists.assert_awaited_once_with()
    assert _payload(result) == [{"id": "l1"}]


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments, expected", [({}, 10), ({"limit": None}, 10), ({"limit": 3}, 3)])
async def test_get_recent_activity_limit(
    dispatcher: Dispatcher, mock_client: AsyncMock, arguments: dict, expected: int
) -> None:
    mock_client.get_recent_activity.return_value = []

    await dispatcher.invoke("get_recent_activity", arguments)

    mock_client.get_recent_activity.assert_awaited_once_with(expected)


@pytest.mark.asyncio
async def test_add_card_leaves_optional_fields_unset(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    created = {"id": "card-9", "name": "Task", "idList": "L1"}
    mock_client.add_card.return_value = created

    result = await dispatcher.invoke("add_card", {"listId": "L1", "name": "Task"})

    mock_client.add_card.assert_awaited_once_with(
        list_id="L1", name="Task", description=None, due_date=None, labels=None
    )
    assert _payload(result) == created


@pytest.mark.asyncio
async def test_add_card_reports_every_missing_field(dispatcher: Dispatcher) -> None:
    result = await dispatcher.invoke("add_card", {"description": "x"})

    assert _payload(result) == {"error": "Missing required arguments: listId, name"}


@pytest.mark.asyncio
async def test_update_card_forwards_all_fields(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.update_card.return_value = {"id": "c1"}

    await dispatcher.invoke(
        "update_card",
        {"cardId": "c1", "name": "Renamed", "dueDate": "2025-07-01T00:00:00Z", "labels": ["l1", "l2"]},
    )

    mock_client.update_card.assert_awaited_once_with(
        card_id="c1",
        name="Renamed",
        description=None,
        due_date="2025-07-01T00:00:00Z",
        labels=["l1", "l2"],
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, arguments, method, call_args",
    [
        ("archive_card", {"cardId": "c1"}, "archive_card", ("c1",)),
        ("add_list", {"name": "Backlog"}, "add_list", ("Backlog",)),
        ("archive_list", {"listId": "l1"}, "archive_list", ("l1",)),
        ("get_my_cards", {}, "get_my_cards", ()),
        ("search_all_boards", {"query": "bug"}, "search_all_boards", ("bug", 10)),
        ("search_all_boards", {"query": "bug", "limit": 2}, "search_all_boards", ("bug", 2)),
    ],
)
async def test_one_to_one_forwarding(
    dispatcher: Dispatcher, mock_client: AsyncMock, name: str, arguments: dict, method: str, call_args: tuple
) -> None:
    getattr(mock_client, method).return_value = {"ok": True}

    result = await dispatcher.invoke(name, arguments)

    getattr(mock_client, method).assert_awaited_once_with(*call_args)
    assert _payload(result) == {"ok": True}


@pytest.mark.asyncio
async def test_search_requires_query(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    result = await dispatcher.invoke("search_all_boards", {"limit": 5})

    assert _payload(result) == {"error": "Missing required argument: query"}
    mock_client.search_all_boards.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["delete_board", "trello_get_lists", "", None])
async def test_unknown_tool(dispatcher: Dispatcher, name: Any) -> None:
    result = await dispatcher.invoke(name, {})

    assert _payload(result) == {"error": f"Unknown tool: {name}"}


@pytest.mark.asyncio
async def test_downstream_failure_becomes_error_envelope(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.get_lists.side_effect = DownstreamFailure("Trello API error 401: invalid token", status_code=401)

    result = await dispatcher.invoke("get_lists", {})

    assert result.is_error
    assert _payload(result) == {"error": "Trello API error 401: invalid token"}


@pytest.mark.asyncio
async def test_unexpected_exception_never_escapes(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.get_my_cards.side_effect = RuntimeError("boom")

    result = await dispatcher.invoke("get_my_cards", {})

    assert _payload(result) == {"error": "boom"}


@pytest.mark.asyncio
async def test_null_downstream_result_is_serialized(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.archive_list.return_value = None

    result = await dispatcher.invoke("archive_list", {"listId": "l1"})

    assert result.content[0].text == "null"
    assert not result.is_error


@pytest.mark.asyncio
async def test_invoke_request(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.archive_card.return_value = {"id": "c1", "closed": True}

    result = await dispatcher.invoke_request(ToolInvocation(name="archive_card", arguments={"cardId": "c1"}))

    assert result.to_dict() == {
        "content": [{"type": "text", "text": json.dumps({"id": "c1", "closed": True})}]
    }


@pytest.mark.asyncio
async def test_concurrent_invocations_do_not_interfere(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    async def fake_cards(list_id: str) -> list:
        # Yield so the calls interleave.
        await asyncio.sleep(0)
        return [{"idList": list_id}]

    mock_client.get_cards_by_list.side_effect = fake_cards
    list_ids = [f"list-{i}" for i in range(20)]

    results = await asyncio.gather(
        *(dispatcher.invoke("get_cards_by_list", {"listId": lid}) for lid in list_ids)
    )

    assert [_payload(r) for r in results] == [[{"idList": lid}] for lid in list_ids]


@pytest.mark.asyncio
async def test_unserializable_result_becomes_error_envelope(dispatcher: Dispatcher, mock_client: AsyncMock) -> None:
    mock_client.get_lists.return_value = {"when": object()}

    result = await dispatcher.invoke("get_lists", {})

    assert result.is_error
    assert "not JSON serializable" in _payload(result)["error"]


@pytest.mark.asyncio
async def test_invoke_request_without_a_name(dispatcher: Dispatcher) -> None:
    result = await dispatcher.invoke_request(ToolInvocation(name=None, arguments={}))

    assert _payload(result) == {"error": "Unknown tool: None"}
