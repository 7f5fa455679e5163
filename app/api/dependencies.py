from app.config import settings
from app.services.briefing import BriefingService, briefing_service
from app.services.cache import ResponseCache
from app.services.nba_data import NBADataService
from app.services.odds_client import odds_client

# Owned here and handed to the service; shared by all requests in the process.
response_cache = ResponseCache(
    ttl=settings.cache_ttl_seconds,
    enabled=settings.enable_cache,
)

nba_data_service = NBADataService(client=odds_client, cache=response_cache)


def get_nba_data_service() -> NBADataService:
    return nba_data_service


def get_briefing_service() -> BriefingService:
    return briefing_service
