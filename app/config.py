from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # The Odds API
    odds_api_key: str = ""
    odds_api_base_url: str = "https://api.the-odds-api.com/v4"
    odds_api_sport: str = "basketball_nba"
    odds_api_regions: str = "us"
    odds_api_markets: str = "h2h,spreads"  # h2h is moneyline
    odds_api_odds_format: str = "american"
    odds_api_timeout: float = 10.0

    # Response cache
    cache_ttl_seconds: int = 60
    enable_cache: bool = True

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_api: str = "100 per 15 minutes"

    # CORS
    cors_origin: str = "http://localhost:3001"  # Comma-separated origins or "*" for all

    # Runtime
    environment: str = "development"
    app_version: str = "1.0.0"

    # Built SPA served for non-API routes
    static_dist_path: str = "react-dynamic-minimal/dist"

    # Matchup briefings (Gemini)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    briefing_timeout: float = 30.0

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origin == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
