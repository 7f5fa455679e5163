"""Raw game records as returned by The Odds API `/sports/{sport}/odds`."""

from typing import Any

from pydantic import BaseModel, ConfigDict

MARKET_H2H = "h2h"


class Outcome(BaseModel):
    """One side of a market: team name and American moneyline price."""

    name: str
    price: int


class Market(BaseModel):
    key: str
    outcomes: list[Outcome]


class RawGame(BaseModel):
    """Game envelope; bookmaker quotes stay raw until `head_to_head` reads them.

    Only the first bookmaker's h2h market is ever used, so nothing else in
    the quotes is validated.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    sport_key: str | None = None
    commence_time: str | None = None
    home_team: str | None = None
    away_team: str | None = None
    bookmakers: list[Any]

    def head_to_head(self) -> Market | None:
        """Moneyline market of the first bookmaker, if quoted.

        Raises pydantic.ValidationError when that market is malformed.
        """
        if not self.bookmakers or not isinstance(self.bookmakers[0], dict):
            return None
        markets = self.bookmakers[0].get("markets")
        if not isinstance(markets, list):
            return None
        for market in markets:
            if isinstance(market, dict) and market.get("key") == MARKET_H2H:
                return Market.model_validate(market)
        return None
