"""Global fixtures for NBA odds proxy tests."""

import random
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_briefing_service, get_nba_data_service
from app.main import app
from app.services.cache import ResponseCache
from app.services.nba_data import NBADataService
from app.services.transformer import MockAnalytics


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def response_cache(fake_clock) -> ResponseCache:
    return ResponseCache(ttl=60, enabled=True, clock=fake_clock)


@pytest.fixture
def seeded_analytics() -> MockAnalytics:
    return MockAnalytics(random.Random(42))


def make_game(
    home: str,
    home_price: int,
    away: str,
    away_price: int,
    *,
    market_key: str = "h2h",
    game_id: str = "game_1",
) -> dict[str, Any]:
    """Raw game in The Odds API v4 shape."""
    return {
        "id": game_id,
        "sport_key": "basketball_nba",
        "commence_time": "2026-10-21T23:30:00Z",
        "home_team": home,
        "away_team": away,
        "bookmakers": [
            {
                "key": "draftkings",
                "title": "DraftKings",
                "last_update": "2026-10-19T12:00:00Z",
                "markets": [
                    {
                        "key": market_key,
                        "outcomes": [
                            {"name": home, "price": home_price},
                            {"name": away, "price": away_price},
                        ],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def sample_games() -> list[dict[str, Any]]:
    """Two upcoming games from The Odds API."""
    return [
        make_game("Boston Celtics", -200, "New York Knicks", 150, game_id="game_1"),
        make_game("Los Angeles Lakers", -110, "Golden State Warriors", 100, game_id="game_2"),
    ]


@pytest.fixture
def mock_upstream(sample_games):
    """Upstream client double returning sample games."""
    client = MagicMock()
    client.fetch_odds = AsyncMock(return_value=sample_games)
    return client


@pytest.fixture
def nba_service(mock_upstream, response_cache, seeded_analytics) -> NBADataService:
    return NBADataService(client=mock_upstream, cache=response_cache, analytics=seeded_analytics)


@pytest.fixture
def mock_briefing_service():
    service = MagicMock()
    service.generate = AsyncMock(return_value="Celtics by 8.")
    return service


@pytest_asyncio.fixture
async def test_client(nba_service, mock_briefing_service):
    """Async test client for FastAPI with injected services."""
    app.dependency_overrides[get_nba_data_service] = lambda: nba_service
    app.dependency_overrides[get_briefing_service] = lambda: mock_briefing_service
    app.state.limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.state.limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def mock_httpx():
    """Mock httpx.AsyncClient for HTTP tests."""
    with patch("httpx.AsyncClient") as mock_class:
        mock_client = AsyncMock()
        mock_class.return_value.__aenter__ = AsyncMock(return_value=mock_client)
        mock_class.return_value.__aexit__ = AsyncMock(return_value=None)
        yield mock_client
