"""Win probability implied by American moneyline odds."""

import math

from app.schemas.teams import TeamView

NO_ODDS_INSIGHT = "Odds data not available."


def american_to_probability(odds: int | float) -> float:
    """Raw implied probability of an American price (vig included)."""
    if odds > 0:
        return 100 / (odds + 100)
    return -odds / (-odds + 100)


def implied_probability(team_a: TeamView, team_b: TeamView) -> dict[str, float | str]:
    """Normalized win percentages for both teams plus a one-line insight.

    Normalizing by the summed raw probabilities removes the bookmaker margin,
    so the two percentages add up to 100.
    """
    if team_a.upcoming_game is None or team_b.upcoming_game is None:
        return {team_a.id: 50.0, team_b.id: 50.0, "insight": NO_ODDS_INSIGHT}

    prob_a = american_to_probability(team_a.upcoming_game.moneyline)
    prob_b = american_to_probability(team_b.upcoming_game.moneyline)
    total = prob_a + prob_b
    if total <= 0:
        return {team_a.id: 50.0, team_b.id: 50.0, "insight": NO_ODDS_INSIGHT}

    pct_a = prob_a / total * 100
    pct_b = prob_b / total * 100

    favorite, favorite_pct = (team_a, pct_a) if pct_a > pct_b else (team_b, pct_b)
    insight = (
        f"The betting market implies a {math.floor(favorite_pct + 0.5)}% chance for the favorite, "
        f"the {favorite.name}, to win."
    )

    return {
        team_a.id: pct_a,
        team_b.id: pct_b,
        "insight": insight,
    }
