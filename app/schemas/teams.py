from app.schemas.common import CamelCaseModel


class PerformancePoint(CamelCaseModel):
    name: str
    value: float


class QuantitativeRatings(CamelCaseModel):
    """Placeholder team ratings (mock values, not real statistics)."""

    offensive_rating: float
    defensive_rating: float
    net_rating: float
    pace: float


class QualitativeLabels(CamelCaseModel):
    management_stability: str
    coaching_system: str
    player_morale: str
    market_sentiment: str


class UpcomingGame(CamelCaseModel):
    opponent: str
    moneyline: int


class TeamView(CamelCaseModel):
    """Per-team view model served to the dashboard."""

    id: str
    name: str
    conference: str = "N/A"  # Not provided by the odds API
    price: int
    change: float
    change_percent: float
    market_cap: str
    volume: str
    performance_history: list[PerformancePoint]
    quantitative: QuantitativeRatings
    qualitative: QualitativeLabels
    upcoming_game: UpcomingGame | None = None


class BriefingRequest(CamelCaseModel):
    team_a: str
    team_b: str


class BriefingResponse(CamelCaseModel):
    team_a: str
    team_b: str
    briefing: str
