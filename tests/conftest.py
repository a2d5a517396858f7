from unittest.mock import AsyncMock

import pytest

from core.config import TrelloConfig
from core.dispatcher import Dispatcher
from core.trello_client import TrelloClient


@pytest.fixture
def config() -> TrelloConfig:
    return TrelloConfig(api_key="test-key", token="test-token", board_id="board-1")


@pytest.fixture
def mock_client() -> AsyncMock:
    """A TrelloClient double; every API method is an AsyncMock."""
    client = AsyncMock(spec=TrelloClient)
    client.board_id = "board-1"
    return client


@pytest.fixture
def dispatcher(mock_client: AsyncMock) -> Dispatcher:
    return Dispatcher(mock_client)
