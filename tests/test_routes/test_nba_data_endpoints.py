"""Tests for /api/v1/nba-data endpoints."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_nba_data_service
from app.exceptions import ProviderError, ProviderTimeoutError, RateLimitError
from app.main import app
from app.services.metrics import KEY_ERROR_COUNT, KEY_LATENCY_COUNT, KEY_REQUEST_COUNT, metrics_service
from app.services.nba_data import NBADataService
from app.services.odds_client import OddsAPIClient


def _override_upstream(response_cache, **fetch_kwargs) -> MagicMock:
    client = MagicMock()
    client.fetch_odds = AsyncMock(**fetch_kwargs)
    service = NBADataService(client=client, cache=response_cache)
    app.dependency_overrides[get_nba_data_service] = lambda: service
    return client


@pytest.mark.asyncio
async def test_get_nba_data_success(test_client):
    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 4
    celtics = data["bostonceltics"]
    assert celtics["name"] == "Boston Celtics"
    assert celtics["price"] == -200
    assert celtics["upcomingGame"] == {"opponent": "New York Knicks", "moneyline": -200}
    assert data["newyorkknicks"]["upcomingGame"]["opponent"] == "Boston Celtics"
    assert len(celtics["performanceHistory"]) == 6


@pytest.mark.asyncio
async def test_get_nba_data_served_from_cache(test_client, mock_upstream):
    first = await test_client.get("/api/v1/nba-data")
    second = await test_client.get("/api/v1/nba-data")

    assert first.json() == second.json()
    assert mock_upstream.fetch_odds.await_count == 1


@pytest.mark.asyncio
async def test_missing_api_key_returns_500_without_network_call(test_client, response_cache):
    service = NBADataService(client=OddsAPIClient(api_key=""), cache=response_cache)
    app.dependency_overrides[get_nba_data_service] = lambda: service

    with patch("httpx.AsyncClient") as mock_client_class:
        response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 500
    assert response.json()["error"] == "CONFIGURATION_ERROR"
    assert "ODDS_API_KEY" in response.json()["message"]
    mock_client_class.assert_not_called()


@pytest.mark.asyncio
async def test_upstream_timeout_returns_504(test_client, response_cache):
    _override_upstream(response_cache, side_effect=ProviderTimeoutError(timeout_seconds=10.0))

    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 504
    assert response.json()["error"] == "PROVIDER_TIMEOUT"


@pytest.mark.asyncio
async def test_real_client_timeout_returns_504(test_client, response_cache):
    service = NBADataService(client=OddsAPIClient(api_key="key"), cache=response_cache)
    app.dependency_overrides[get_nba_data_service] = lambda: service

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(side_effect=httpx.ConnectTimeout("timed out"))
        mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)

        response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 504


@pytest.mark.asyncio
async def test_upstream_status_is_relayed(test_client, response_cache):
    _override_upstream(
        response_cache,
        side_effect=ProviderError("API key is not valid", status_code=401),
    )

    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 401
    assert response.json()["error"] == "PROVIDER_ERROR"
    assert response.json()["message"] == "API key is not valid"


@pytest.mark.asyncio
async def test_upstream_rate_limit_is_relayed(test_client, response_cache):
    _override_upstream(response_cache, side_effect=RateLimitError(retry_after=30))

    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 429
    assert response.json()["error"] == "RATE_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_network_error_without_status_returns_502(test_client, response_cache):
    _override_upstream(response_cache, side_effect=ProviderError("Network error: refused"))

    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_zero_games_returns_404(test_client, response_cache):
    _override_upstream(response_cache, return_value=[])

    response = await test_client.get("/api/v1/nba-data")

    assert response.status_code == 404
    assert response.json()["error"] == "NO_GAMES_FOUND"
    assert response.json()["message"] == "No upcoming NBA games found."


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_500(response_cache):
    """Test the final error boundary hides internals outside development."""
    _override_upstream(response_cache, side_effect=RuntimeError("secret internals"))
    app.state.limiter.enabled = False

    try:
        with patch("app.main.settings") as mock_settings:
            mock_settings.is_development = False
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/v1/nba-data")
    finally:
        app.state.limiter.enabled = True
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "INTERNAL_ERROR", "message": "Something went wrong"}


@pytest.mark.asyncio
async def test_unexpected_error_detail_in_development(response_cache):
    _override_upstream(response_cache, side_effect=RuntimeError("boom"))
    app.state.limiter.enabled = False

    try:
        with patch("app.main.settings") as mock_settings:
            mock_settings.is_development = True
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/v1/nba-data")
    finally:
        app.state.limiter.enabled = True
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["message"] == "boom"


@pytest.mark.asyncio
async def test_unexpected_error_is_logged_and_counted(response_cache, caplog):
    """Test requests that escape to the final error boundary still get an access line and metrics."""
    _override_upstream(response_cache, side_effect=RuntimeError("boom"))
    app.state.limiter.enabled = False
    metrics_service.reset()
    caplog.set_level(logging.INFO, logger="app.main")

    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/nba-data")
    finally:
        app.state.limiter.enabled = True
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert metrics_service.get_value(KEY_REQUEST_COUNT) == 1
    assert metrics_service.get_value(KEY_ERROR_COUNT) == 1
    assert metrics_service.get_value(KEY_LATENCY_COUNT) == 1
    assert any("GET /api/v1/nba-data -> 500" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_legacy_endpoint_redirects(test_client):
    response = await test_client.get("/api/nba-data", params={"foo": "bar"})

    assert response.status_code == 302
    assert response.headers["location"] == "/api/v1/nba-data?foo=bar"


@pytest.mark.asyncio
async def test_unknown_api_route_lists_endpoints(test_client):
    response = await test_client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "NOT_FOUND"
    assert "/api/v1/nba-data" in data["availableEndpoints"]
    assert "/api/v1/health" in data["availableEndpoints"]
