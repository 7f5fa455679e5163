"""Custom exceptions for the NBA odds proxy."""

from typing import Any


class OddsAPIError(Exception):
    """Base exception for all odds proxy errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "ODDS_API_ERROR"
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dict for API response."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(OddsAPIError):
    """Required configuration (e.g. the upstream API key) is missing."""

    def __init__(
        self,
        message: str = "API key not configured",
        *,
        setting: str | None = None,
    ):
        details = {}
        if setting is not None:
            details["setting"] = setting

        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class ProviderTimeoutError(OddsAPIError):
    """Timeout when calling The Odds API."""

    def __init__(
        self,
        message: str = "The odds API is taking too long to respond",
        *,
        timeout_seconds: float | None = None,
        endpoint: str | None = None,
    ):
        details = {}
        if timeout_seconds is not None:
            details["timeout_seconds"] = timeout_seconds
        if endpoint is not None:
            details["endpoint"] = endpoint

        super().__init__(message, code="PROVIDER_TIMEOUT", details=details)


class ProviderError(OddsAPIError):
    """Upstream error (HTTP 4xx/5xx, network failure or unexpected payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        endpoint: str | None = None,
        code: str = "PROVIDER_ERROR",
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if response_body is not None:
            details["response_body"] = response_body[:500]  # Truncate
        if endpoint is not None:
            details["endpoint"] = endpoint

        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class RateLimitError(ProviderError):
    """Rate limit or usage quota exceeded on The Odds API."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: int | None = None,
        remaining_requests: int | None = None,
    ):
        super().__init__(message, status_code=429, code="RATE_LIMIT_EXCEEDED")
        if retry_after is not None:
            self.details["retry_after"] = retry_after
        if remaining_requests is not None:
            self.details["remaining_requests"] = remaining_requests
        self.retry_after = retry_after
        self.remaining_requests = remaining_requests


class NoGamesFoundError(OddsAPIError):
    """The provider returned zero upcoming games."""

    def __init__(
        self,
        sport: str,
        message: str = "No upcoming NBA games found.",
    ):
        super().__init__(message, code="NO_GAMES_FOUND", details={"sport": sport})
        self.sport = sport


class TeamNotFoundError(OddsAPIError):
    """Team id not present in the current team view."""

    def __init__(
        self,
        team_id: str,
        message: str | None = None,
    ):
        super().__init__(
            message or f"Team not found: {team_id}",
            code="TEAM_NOT_FOUND",
            details={"team_id": team_id},
        )
        self.team_id = team_id
