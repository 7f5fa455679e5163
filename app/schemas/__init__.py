from app.schemas.common import ApiHealthResponse, CamelCaseModel, ErrorResponse, HealthResponse
from app.schemas.games import MARKET_H2H, Market, Outcome, RawGame
from app.schemas.teams import (
    BriefingRequest,
    BriefingResponse,
    PerformancePoint,
    QualitativeLabels,
    QuantitativeRatings,
    TeamView,
    UpcomingGame,
)

__all__ = [
    "ApiHealthResponse",
    "BriefingRequest",
    "BriefingResponse",
    "CamelCaseModel",
    "ErrorResponse",
    "HealthResponse",
    "MARKET_H2H",
    "Market",
    "Outcome",
    "PerformancePoint",
    "QualitativeLabels",
    "QuantitativeRatings",
    "RawGame",
    "TeamView",
    "UpcomingGame",
]
