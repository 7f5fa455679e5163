import logging
from typing import Any

import httpx

from app.config import settings
from app.exceptions import (
    ConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitError,
)
from app.services.metrics import metrics_service

logger = logging.getLogger(__name__)


def _parse_int_header(response: httpx.Response, name: str) -> int | None:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def _upstream_message(response: httpx.Response) -> str | None:
    """Extract the provider's own error message from a JSON body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class OddsAPIClient:
    """HTTP client for The Odds API (v4).

    No caching or retries happen here; both belong to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url if base_url is not None else settings.odds_api_base_url
        self.api_key = api_key if api_key is not None else settings.odds_api_key
        self.timeout = timeout if timeout is not None else settings.odds_api_timeout

    async def _request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated GET request and return the decoded JSON body."""
        if not self.api_key:
            raise ConfigurationError(
                "API key not configured. Please set ODDS_API_KEY environment variable",
                setting="ODDS_API_KEY",
            )

        url = f"{self.base_url}{endpoint}"
        request_params = {"apiKey": self.api_key}
        if params:
            request_params.update(params)

        try:
            # Track external API call
            metrics_service.track_api_call()

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=request_params)
                response.raise_for_status()

                remaining = response.headers.get("x-requests-remaining")
                if remaining is not None:
                    logger.debug(f"Odds API quota remaining: {remaining}")

                return response.json()
        except httpx.TimeoutException:
            raise ProviderTimeoutError(
                timeout_seconds=self.timeout,
                endpoint=endpoint,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _upstream_message(e.response)

            if status == 429:
                raise RateLimitError(
                    message or "The Odds API rate limit exceeded",
                    retry_after=_parse_int_header(e.response, "Retry-After"),
                    remaining_requests=_parse_int_header(e.response, "x-requests-remaining"),
                )

            raise ProviderError(
                message or "Failed to fetch data from The Odds API",
                status_code=status,
                response_body=e.response.text,
                endpoint=endpoint,
            )
        except httpx.RequestError as e:
            raise ProviderError(
                f"Network error: {e}",
                endpoint=endpoint,
            )
        except ValueError:
            raise ProviderError(
                "The Odds API returned a non-JSON response",
                endpoint=endpoint,
            )

    async def fetch_odds(
        self,
        sport: str | None = None,
        regions: str | None = None,
        markets: str | None = None,
        odds_format: str | None = None,
    ) -> list[dict[str, Any]]:
        """GET /sports/{sport}/odds - Upcoming games with bookmaker quotes.

        Selectors default to the configured values and are passed verbatim.
        """
        sport = sport or settings.odds_api_sport
        endpoint = f"/sports/{sport}/odds"
        data = await self._request(
            endpoint,
            params={
                "regions": regions or settings.odds_api_regions,
                "markets": markets or settings.odds_api_markets,
                "oddsFormat": odds_format or settings.odds_api_odds_format,
            },
        )

        if not isinstance(data, list):
            raise ProviderError(
                f"Unexpected payload from The Odds API: expected a list, got {type(data).__name__}",
                endpoint=endpoint,
            )
        return data


odds_client = OddsAPIClient()
