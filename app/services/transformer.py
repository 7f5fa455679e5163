"""Raw games -> per-team view models.

Display analytics (trend, volume, ratings) are placeholders generated by an
`AnalyticsSource`. `MockAnalytics` draws them at random on every call; a real
stats provider can replace it without touching the structural logic below.
"""

import logging
import random
from typing import Any, Protocol

from pydantic import ValidationError

from app.schemas.games import Outcome, RawGame
from app.schemas.teams import (
    PerformancePoint,
    QualitativeLabels,
    QuantitativeRatings,
    TeamView,
    UpcomingGame,
)

logger = logging.getLogger(__name__)

HISTORY_LENGTH = 6


class AnalyticsSource(Protocol):
    def price_change(self) -> float: ...

    def price_change_percent(self) -> float: ...

    def market_cap(self) -> str: ...

    def volume(self) -> str: ...

    def performance_history(self, price: int) -> list[PerformancePoint]: ...

    def quantitative(self) -> QuantitativeRatings: ...

    def qualitative(self) -> QualitativeLabels: ...


class MockAnalytics:
    """Random placeholder analytics within fixed display ranges."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def _uniform(self, low: float, high: float) -> float:
        # random() is in [0, 1), so the result stays in [low, high)
        return low + self.rng.random() * (high - low)

    def price_change(self) -> float:
        return self._uniform(-2.5, 2.5)

    def price_change_percent(self) -> float:
        return self._uniform(-1.0, 1.0)

    def market_cap(self) -> str:
        return f"{self._uniform(15.0, 25.0):.1f}B"

    def volume(self) -> str:
        return f"{self._uniform(0.5, 1.5):.1f}M"

    def performance_history(self, price: int) -> list[PerformancePoint]:
        return [
            PerformancePoint(name=f"Day {day}", value=price + self._uniform(-5.0, 5.0) * day)
            for day in range(1, HISTORY_LENGTH + 1)
        ]

    def quantitative(self) -> QuantitativeRatings:
        return QuantitativeRatings(
            offensive_rating=round(self._uniform(110.0, 120.0), 1),
            defensive_rating=round(self._uniform(110.0, 120.0), 1),
            net_rating=round(self._uniform(-5.0, 5.0), 1),
            pace=round(self._uniform(98.0, 103.0), 1),
        )

    def qualitative(self) -> QualitativeLabels:
        return QualitativeLabels(
            management_stability="Medium",
            coaching_system="Established",
            player_morale="Optimistic",
            market_sentiment="Neutral",
        )


def normalize_team_id(name: str) -> str:
    """'Los Angeles Lakers' -> 'losangeleslakers'."""
    return name.lower().replace(" ", "")


def build_team_view(team: Outcome, opponent: Outcome, analytics: AnalyticsSource) -> TeamView:
    return TeamView(
        id=normalize_team_id(team.name),
        name=team.name,
        price=team.price,
        change=analytics.price_change(),
        change_percent=analytics.price_change_percent(),
        market_cap=analytics.market_cap(),
        volume=analytics.volume(),
        performance_history=analytics.performance_history(team.price),
        quantitative=analytics.quantitative(),
        qualitative=analytics.qualitative(),
        upcoming_game=UpcomingGame(opponent=opponent.name, moneyline=team.price),
    )


def transform_games(
    games: list[dict[str, Any]],
    analytics: AnalyticsSource | None = None,
) -> dict[str, TeamView]:
    """Map raw games to team views keyed by normalized team id.

    Games without a two-outcome h2h market on their first bookmaker are
    skipped. When two teams share an id, the first one seen is kept.
    """
    analytics = analytics or MockAnalytics()
    teams: dict[str, TeamView] = {}

    for raw in games:
        try:
            market = RawGame.model_validate(raw).head_to_head()
        except ValidationError as e:
            logger.debug(f"Skipping malformed game {raw.get('id') if isinstance(raw, dict) else raw!r}: {e}")
            continue

        if market is None or len(market.outcomes) != 2:
            continue

        first, second = market.outcomes
        for team, opponent in ((first, second), (second, first)):
            team_id = normalize_team_id(team.name)
            if team_id in teams:
                continue
            teams[team_id] = build_team_view(team, opponent, analytics)

    return teams
