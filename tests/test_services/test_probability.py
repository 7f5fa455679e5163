"""Tests for moneyline -> win probability conversion."""

import pytest

from app.schemas.teams import TeamView
from app.services.probability import NO_ODDS_INSIGHT, american_to_probability, implied_probability
from app.services.transformer import transform_games


def _team(team_id: str, name: str, moneyline: int | None) -> TeamView:
    return TeamView.model_validate(
        {
            "id": team_id,
            "name": name,
            "price": moneyline or 0,
            "change": 0.0,
            "changePercent": 0.0,
            "marketCap": "20.0B",
            "volume": "1.0M",
            "performanceHistory": [],
            "quantitative": {"offensiveRating": 115.0, "defensiveRating": 112.0, "netRating": 3.0, "pace": 100.0},
            "qualitative": {
                "managementStability": "Medium",
                "coachingSystem": "Established",
                "playerMorale": "Optimistic",
                "marketSentiment": "Neutral",
            },
            "upcomingGame": None if moneyline is None else {"opponent": "Someone", "moneyline": moneyline},
        }
    )


@pytest.mark.parametrize(
    "odds,expected",
    [
        (100, 0.5),
        (-100, 0.5),
        (150, 0.4),
        (-200, 200 / 300),
        (300, 0.25),
    ],
)
def test_american_to_probability(odds, expected):
    assert american_to_probability(odds) == pytest.approx(expected)


@pytest.mark.parametrize(
    "a,b",
    [(150, -200), (-110, -110), (100, 100), (-5000, 2000), (250, -320), (1, -1)],
)
def test_percentages_sum_to_100(a, b):
    result = implied_probability(_team("a", "Team A", a), _team("b", "Team B", b))

    assert result["a"] + result["b"] == pytest.approx(100.0)


def test_negative_moneyline_is_favorite():
    underdog = _team("knicks", "New York Knicks", 170)
    favorite = _team("celtics", "Boston Celtics", -200)

    result = implied_probability(underdog, favorite)

    assert result["celtics"] > 50
    assert result["knicks"] < 50
    assert result["insight"] == (
        "The betting market implies a 64% chance for the favorite, the Boston Celtics, to win."
    )


def test_plus_150_vs_minus_200_favors_minus_200():
    result = implied_probability(_team("a", "Team A", 150), _team("b", "Team B", -200))

    assert result["b"] > 50
    assert result["b"] > result["a"]
    assert "the Team B, to win" in result["insight"]


def test_insight_names_team_a_when_favored():
    result = implied_probability(_team("x", "Team X", -300), _team("y", "Team Y", 240))

    assert "the Team X, to win" in result["insight"]


def test_missing_odds_is_even_split():
    result = implied_probability(_team("a", "Team A", None), _team("b", "Team B", -150))

    assert result == {"a": 50.0, "b": 50.0, "insight": NO_ODDS_INSIGHT}


def test_from_transformed_teams(sample_games):
    teams = transform_games(sample_games)

    result = implied_probability(teams["bostonceltics"], teams["newyorkknicks"])

    assert result["bostonceltics"] + result["newyorkknicks"] == pytest.approx(100.0)
    assert result["bostonceltics"] > result["newyorkknicks"]
