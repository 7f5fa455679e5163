import logging
from collections.abc import Mapping
from typing import Any

from app.config import settings
from app.exceptions import NoGamesFoundError, TeamNotFoundError
from app.schemas.teams import TeamView
from app.services.cache import CACHE_ENDPOINT_NBA_DATA, ResponseCache, make_cache_key
from app.services.odds_client import OddsAPIClient
from app.services.transformer import AnalyticsSource, normalize_team_id, transform_games

logger = logging.getLogger(__name__)


class NBADataService:
    """Cache lookup -> upstream fetch on miss -> transform -> cache store.

    Concurrent misses on the same key each call upstream; there is no request
    coalescing.
    """

    def __init__(
        self,
        client: OddsAPIClient,
        cache: ResponseCache,
        analytics: AnalyticsSource | None = None,
    ):
        self.client = client
        self.cache = cache
        self.analytics = analytics

    async def get_teams(self, params: Mapping[str, Any] | None = None) -> dict[str, dict[str, Any]]:
        """Team views keyed by team id, serialized with camelCase keys.

        `params` only feeds the cache key; the upstream selectors come from
        settings.
        """
        cache_key = make_cache_key(CACHE_ENDPOINT_NBA_DATA, params)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Serving cached data for {cache_key}")
            return cached

        games = await self.client.fetch_odds(
            sport=settings.odds_api_sport,
            regions=settings.odds_api_regions,
            markets=settings.odds_api_markets,
            odds_format=settings.odds_api_odds_format,
        )
        if not games:
            raise NoGamesFoundError(sport=settings.odds_api_sport)

        teams = transform_games(games, analytics=self.analytics)
        payload = {
            team_id: team.model_dump(mode="json", by_alias=True)
            for team_id, team in teams.items()
        }
        logger.info(f"Transformed {len(games)} games into {len(payload)} teams")

        self.cache.set(cache_key, payload)
        return payload

    @staticmethod
    def _lookup(teams: dict[str, dict[str, Any]], team_id: str) -> TeamView:
        data = teams.get(normalize_team_id(team_id))
        if data is None:
            raise TeamNotFoundError(team_id)
        return TeamView.model_validate(data)

    async def get_team(self, team_id: str) -> TeamView:
        """Look up one team in the current (possibly cached) team map."""
        return self._lookup(await self.get_teams(), team_id)

    async def get_matchup(self, team_a_id: str, team_b_id: str | None = None) -> tuple[TeamView, TeamView]:
        """Resolve both sides of a matchup from a single team map.

        Team B defaults to A's next opponent.
        """
        teams = await self.get_teams()
        team_a = self._lookup(teams, team_a_id)
        if team_b_id is None:
            if team_a.upcoming_game is None:
                raise TeamNotFoundError(team_a_id, f"No upcoming opponent for team: {team_a_id}")
            team_b_id = team_a.upcoming_game.opponent
        return team_a, self._lookup(teams, team_b_id)
