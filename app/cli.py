"""CLI for inspecting live NBA odds.

Usage:
    python -m app.cli teams
    python -m app.cli matchup bostonceltics
    python -m app.cli matchup bostonceltics --vs "New York Knicks"
"""

import asyncio
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from app.config import settings
from app.exceptions import OddsAPIError
from app.services.cache import ResponseCache
from app.services.nba_data import NBADataService
from app.services.odds_client import OddsAPIClient
from app.services.probability import implied_probability

app = typer.Typer(help="NBA odds proxy tools")
console = Console()


def _service() -> NBADataService:
    # One-shot process: nothing to share, so the cache is off
    return NBADataService(client=OddsAPIClient(), cache=ResponseCache(enabled=False))


def _fail(exc: OddsAPIError) -> NoReturn:
    console.print(f"\n[red]✗[/red] {exc.message} [dim]({exc.code})[/dim]\n")
    raise typer.Exit(code=1)


def _format_price(price: int) -> str:
    return f"+{price}" if price > 0 else str(price)


async def _list_teams() -> None:
    try:
        teams = await _service().get_teams()
    except OddsAPIError as e:
        _fail(e)

    table = Table(title=f"{settings.odds_api_sport} moneylines")
    table.add_column("ID", style="dim")
    table.add_column("Team", style="cyan")
    table.add_column("Moneyline", style="green", justify="right")
    table.add_column("Next Opponent", style="magenta")

    for team_id, team in sorted(teams.items()):
        upcoming = team.get("upcomingGame") or {}
        table.add_row(
            team_id,
            team["name"],
            _format_price(team["price"]),
            upcoming.get("opponent", "-"),
        )

    console.print()
    console.print(table)
    console.print()


@app.command("teams")
def list_teams():
    """Fetch current odds and list every team with its moneyline."""
    asyncio.run(_list_teams())


async def _matchup(team_a: str, team_b: str | None) -> None:
    try:
        a, b = await _service().get_matchup(team_a, team_b)
    except OddsAPIError as e:
        _fail(e)

    result = implied_probability(a, b)
    console.print(f"\n[bold]{a.name}[/bold] vs [bold]{b.name}[/bold]")
    console.print(f"  {a.name}: [cyan]{result[a.id]:.1f}%[/cyan]")
    console.print(f"  {b.name}: [cyan]{result[b.id]:.1f}%[/cyan]")
    console.print(f"\n{result['insight']}\n")


@app.command("matchup")
def matchup(
    team_a: str = typer.Argument(..., help="Team id or name"),
    team_b: str | None = typer.Option(None, "--vs", help="Opponent (defaults to next opponent)"),
):
    """Show the win probability implied by the current moneylines."""
    asyncio.run(_matchup(team_a, team_b))


if __name__ == "__main__":
    app()
