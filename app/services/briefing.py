"""AI matchup briefings via the Gemini `generateContent` endpoint.

Fail-soft: every failure is logged and returned as a displayable message.
"""

import json
import logging
from typing import Any

import httpx

from app.config import settings
from app.schemas.teams import TeamView

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No content found."
ERROR_MESSAGE_PREFIX = "An error occurred while generating the analysis."


def _team_section(label: str, team: TeamView) -> str:
    moneyline = team.upcoming_game.moneyline if team.upcoming_game else "N/A"
    return (
        f"{label} ({team.name}):\n"
        f"- Current Market Moneyline: {moneyline}\n"
        f"- Mock Quantitative Data: {json.dumps(team.quantitative.model_dump(by_alias=True))}\n"
        f"- Mock Qualitative Data: {json.dumps(team.qualitative.model_dump(by_alias=True))}"
    )


def build_prompt(team_a: TeamView, team_b: TeamView) -> str:
    return "\n\n".join(
        [
            "Act as an expert sports analyst providing a pre-game briefing for an NBA matchup. "
            f"Matchup: {team_a.name} vs. {team_b.name}.",
            _team_section("Team A", team_a),
            _team_section("Team B", team_b),
            "Your Task: Write a detailed, narrative-style analysis covering:\n"
            "1. Overall Matchup Synopsis based on the live betting odds.\n"
            "2. Key Strengths & Weaknesses using the mock data.\n"
            "3. Strategic X-Factors.\n"
            "4. Prediction with a final score, justifying it with the available data.\n"
            "Format the response clearly with headings.",
        ]
    )


def _extract_text(result: Any) -> str:
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_CONTENT_MESSAGE
    return text or NO_CONTENT_MESSAGE


class BriefingService:
    """Forwards matchup prompts to Gemini and returns prose."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = base_url or settings.gemini_base_url
        self.timeout = timeout if timeout is not None else settings.briefing_timeout

    async def generate(self, team_a: TeamView, team_b: TeamView) -> str:
        """Generate a briefing; never raises."""
        if not self.api_key:
            return f"{ERROR_MESSAGE_PREFIX} GEMINI_API_KEY is not configured."

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": build_prompt(team_a, team_b)}]}]}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
                response.raise_for_status()
                return _extract_text(response.json())
        except httpx.TimeoutException:
            logger.warning(f"Briefing request timed out after {self.timeout}s")
            return f"{ERROR_MESSAGE_PREFIX} The text generation service timed out."
        except httpx.HTTPStatusError as e:
            logger.warning(f"Briefing request failed with status {e.response.status_code}")
            return f"{ERROR_MESSAGE_PREFIX} API call failed with status: {e.response.status_code}"
        except (httpx.RequestError, ValueError) as e:
            logger.warning(f"Briefing request failed: {e}")
            return f"{ERROR_MESSAGE_PREFIX} {e}"


briefing_service = BriefingService()
