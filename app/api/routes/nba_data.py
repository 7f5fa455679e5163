from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import get_briefing_service, get_nba_data_service
from app.schemas.teams import BriefingRequest, BriefingResponse, TeamView
from app.services.briefing import BriefingService
from app.services.nba_data import NBADataService
from app.services.probability import implied_probability
from app.services.rate_limiter import api_limit

router = APIRouter()


@router.get("/nba-data", response_model=dict[str, TeamView], response_model_by_alias=True)
@api_limit
async def get_nba_data(
    request: Request,
    service: NBADataService = Depends(get_nba_data_service),
):
    """Upcoming-game team views keyed by team id.

    Served from the response cache while fresh; otherwise fetched from
    The Odds API and transformed.
    """
    return await service.get_teams(dict(request.query_params))


@router.get("/matchup")
@api_limit
async def get_matchup(
    request: Request,
    team_a: str = Query(..., alias="teamA", description="Team id (e.g. bostonceltics)"),
    team_b: str | None = Query(None, alias="teamB", description="Defaults to team A's next opponent"),
    service: NBADataService = Depends(get_nba_data_service),
):
    """Win probability implied by the current moneylines."""
    a, b = await service.get_matchup(team_a, team_b)
    return implied_probability(a, b)


@router.post("/briefing", response_model=BriefingResponse, response_model_by_alias=True)
@api_limit
async def create_briefing(
    request: Request,
    body: BriefingRequest,
    service: NBADataService = Depends(get_nba_data_service),
    briefing: BriefingService = Depends(get_briefing_service),
):
    """AI pre-game briefing for two teams.

    Text generation failures come back as a message in `briefing`, not as an
    error status.
    """
    a, b = await service.get_matchup(body.team_a, body.team_b)
    text = await briefing.generate(a, b)
    return BriefingResponse(team_a=a.id, team_b=b.id, briefing=text)
