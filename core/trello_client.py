# =============================================================================
# core/trello_client.py  —  Trello REST API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues the authenticated HTTP calls behind each tool.  One method per
#   forwarded call; each returns the decoded JSON body exactly as Trello sent
#   it.  No retries, no caching, no reshaping of the response.
#
# AUTHENTICATION:
#   Trello takes the API key and token as query parameters (key=..., token=...)
#   on every request.  They come from the TrelloConfig passed in at
#   construction and are never read from the environment here.
#
# ERRORS:
#   Any non-2xx status, timeout or connection error is re-raised as
#   DownstreamFailure so the dispatcher has a single type to catch.
# =============================================================================

import logging
from typing import Any
from urllib.parse import quote

import httpx

from core.config import TrelloConfig
from core.errors import DownstreamFailure
from core.models import DEFAULT_LIMIT

logger = logging.getLogger(__name__)


class TrelloClient:
    """Async client for the subset of the Trello API the tools need."""

    def __init__(self, config: TrelloConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def board_id(self) -> str:
        return self._config.board_id

    async def __aenter__(self) -> "TrelloClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, params: dict[str, Any] | None = None) -> Any:
        query = {"key": self._config.api_key, "token": self._config.token}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})

        logger.debug("Trello %s %s", method, path)
        try:
            response = await self._http.request(method, path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = e.response.text.strip()
            raise DownstreamFailure(
                f"Trello API error {status}: {body or e.response.reason_phrase}",
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            raise DownstreamFailure(f"Trello API request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise DownstreamFailure(f"Trello API request failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DownstreamFailure(f"Trello API returned a non-JSON body for {method} {path}") from e

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    async def get_cards_by_list(self, list_id: str) -> Any:
        return await self._request("GET", f"/lists/{_segment(list_id)}/cards")

    async def get_lists(self) -> Any:
        return await self._request("GET", f"/boards/{_segment(self.board_id)}/lists")

    async def get_recent_activity(self, limit: int = DEFAULT_LIMIT) -> Any:
        return await self._request("GET", f"/boards/{_segment(self.board_id)}/actions", {"limit": limit})

    async def get_my_cards(self) -> Any:
        return await self._request("GET", "/members/me/cards")

    async def search_all_boards(self, query: str, limit: int = DEFAULT_LIMIT) -> Any:
        """Keyword search across every board the token can see."""
        return await self._request(
            "GET",
            "/search",
            {
                "query": query,
                "modelTypes": "cards",
                "idBoards": "mine",
                "cards_limit": limit,
            },
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    async def add_card(
        self,
        list_id: str,
        name: str,
        description: str | None = None,
        due_date: str | None = None,
        labels: list[str] | None = None,
    ) -> Any:
        return await self._request(
            "POST",
            "/cards",
            {
                "idList": list_id,
                "name": name,
                "desc": description,
                "due": due_date,
                "idLabels": _join_labels(labels),
            },
        )

    async def update_card(
        self,
        card_id: str,
        name: str | None = None,
        description: str | None = None,
        due_date: str | None = None,
        labels: list[str] | None = None,
    ) -> Any:
        """Patch a card.  Fields left as None are not sent and stay unchanged."""
        return await self._request(
            "PUT",
            f"/cards/{_segment(card_id)}",
            {
                "name": name,
                "desc": description,
                "due": due_date,
                "idLabels": _join_labels(labels),
            },
        )

    async def archive_card(self, card_id: str) -> Any:
        return await self._request("PUT", f"/cards/{_segment(card_id)}", {"closed": "true"})

    async def add_list(self, name: str) -> Any:
        return await self._request("POST", "/lists", {"name": name, "idBoard": self.board_id})

    async def archive_list(self, list_id: str) -> Any:
        return await self._request("PUT", f"/lists/{_segment(list_id)}/closed", {"value": "true"})


def _join_labels(labels: list[str] | None) -> str | None:
    if labels is None:
        return None
    return ",".join(labels)


def _segment(value: str) -> str:
    """Percent-encode an ID as a single path segment.

    "/", "?", "#" and dot segments in an ID must not change which resource
    the request targets.
    """
    return quote(str(value), safe="").replace(".", "%2E")
