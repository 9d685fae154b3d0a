#!/usr/bin/env python3
"""
CLI for the Crease cricket match simulator
"""
import logging
import random
from collections import defaultdict

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import track
from rich.table import Table

from crease.config import settings
from crease.database import init_db, get_session
from crease.engine import MatchState, PlayerDb, get_format, get_model, simulate_match
from crease.engine.formats import FORMAT_PRESETS
from crease.engine.outcome_models import MODELS
from crease.engine.simulator import declare_at_lead
from crease.generators import TeamGenerator
from crease.errors import MissingDataError
from crease.models import Team
from crease.roster import find_team, load_side
from crease.scorecard import match_totals, render_innings

console = Console()

FORMAT_CHOICE = click.Choice(sorted(FORMAT_PRESETS), case_sensitive=False)
MODEL_CHOICE = click.Choice(sorted(MODELS), case_sensitive=False)


@click.group()
@click.option("--log-level", default=settings.LOG_LEVEL, help="Logging level (DEBUG, INFO, ...)")
def cli(log_level: str):
    """Crease - Cricket Match Simulation"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


@cli.command()
@click.option("--count", default=2, help="Number of teams to generate")
def generate_teams(count: int):
    """Generate fictional teams with full XIs"""
    init_db()
    session = get_session()
    try:
        existing = {t.short_name for t in session.query(Team).all()}
        teams = [t for t in TeamGenerator.create_teams(count) if t.short_name not in existing]
        if not teams:
            console.print("[yellow]All requested teams already exist.[/yellow]")
            return
        TeamGenerator.save_teams(session, teams)
        for team in teams:
            console.print(f"[green]Created {team.name} ({team.short_name}) with {team.squad_size} players[/green]")
    finally:
        session.close()


@cli.command()
def list_teams():
    """List teams and their batting orders"""
    session = get_session()
    try:
        teams = session.query(Team).order_by(Team.id).all()
        if not teams:
            console.print("[red]No teams found. Run 'generate-teams' first.[/red]")
            return

        for team in teams:
            table = Table(title=f"{team.name} ({team.short_name}) - {team.home_ground}")
            table.add_column("#", justify="right")
            table.add_column("Name", style="cyan")
            table.add_column("Role", style="magenta")
            table.add_column("Bat Avg", justify="right")
            table.add_column("Bat SR", justify="right")
            table.add_column("Bowl Avg", justify="right")
            table.add_column("Bowl SR", justify="right")
            for player in team.players:
                table.add_row(
                    str(player.batting_position),
                    player.name,
                    player.role.value,
                    f"{player.bat_avg:.1f}",
                    f"{player.bat_sr:.1f}",
                    f"{player.bowl_avg:.1f}",
                    f"{player.bowl_sr:.1f}",
                )
            console.print(table)
    finally:
        session.close()


def _pick_teams(session, team1: str, team2: str):
    if team1 and team2:
        first, second = find_team(session, team1), find_team(session, team2)
        if first is None or second is None:
            raise click.UsageError(f"Unknown team: {team1 if first is None else team2}")
        if first.id == second.id:
            raise click.UsageError("A team cannot play itself")
        return first, second
    teams = session.query(Team).order_by(Team.id).limit(2).all()
    if len(teams) < 2:
        raise click.UsageError("Not enough teams. Run 'generate-teams' first.")
    return teams[0], teams[1]


@cli.command()
@click.argument("team1", required=False)
@click.argument("team2", required=False)
@click.option("--format", "format_name", default=settings.DEFAULT_FORMAT, type=FORMAT_CHOICE, help="Match format preset")
@click.option("--model", "model_name", default=settings.DEFAULT_MODEL, type=MODEL_CHOICE, help="Delivery model")
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible match")
@click.option("--declare-lead", type=int, default=None, help="Declare once leading by this many runs")
def simulate(team1: str, team2: str, format_name: str, model_name: str, seed: int, declare_lead: int):
    """Simulate a match between two stored teams (by id or short name)"""
    match_format = get_format(format_name)
    model = get_model(model_name)

    session = get_session()
    try:
        first, second = _pick_teams(session, team1, team2)
        registry = PlayerDb()
        side_a = load_side(first, registry, match_format.batters_per_side)
        side_b = load_side(second, registry, match_format.batters_per_side)
    except MissingDataError as e:
        raise click.ClickException(str(e))
    finally:
        session.close()

    console.print(Panel(f"[bold cyan]{side_a.name}[/bold cyan] v [bold magenta]{side_b.name}[/bold magenta] ({match_format.name})"))
    console.print("\n[yellow]Simulating match...[/yellow]\n")

    state = MatchState(match_format, side_a, side_b)
    policy = declare_at_lead(declare_lead) if declare_lead is not None else None
    simulate_match(state, model, registry, random.Random(seed), declare_when=policy)

    for innings in state.history:
        render_innings(console, innings, registry)

    console.print(Panel("[bold]Match Result[/bold]"))
    for line in match_totals(state):
        console.print(line)
    if state.follow_on_enforced:
        console.print("[italic]Follow-on enforced[/italic]")
    console.print(f"\n[bold green]{state.result}[/bold green]")


@cli.command()
@click.option("--matches", default=100, type=click.IntRange(min=1), help="Number of matches to simulate")
@click.option("--format", "format_name", default=settings.DEFAULT_FORMAT, type=FORMAT_CHOICE, help="Match format preset")
@click.option("--model", "model_name", default=settings.DEFAULT_MODEL, type=MODEL_CHOICE, help="Delivery model")
@click.option("--seed", type=int, default=None, help="Random seed for the whole run")
def benchmark(matches: int, format_name: str, model_name: str, seed: int):
    """Run multiple simulations to check scoring realism"""
    match_format = get_format(format_name)
    model = get_model(model_name)
    rng = random.Random(seed)

    session = get_session()
    try:
        first, second = _pick_teams(session, None, None)
        registry = PlayerDb()
        side_a = load_side(first, registry, match_format.batters_per_side)
        side_b = load_side(second, registry, match_format.batters_per_side)
    except MissingDataError as e:
        raise click.ClickException(str(e))
    finally:
        session.close()

    stats = defaultdict(list)
    for _ in track(range(matches), description="Simulating..."):
        state = simulate_match(MatchState(match_format, side_a, side_b), model, registry, rng)
        for innings in state.history:
            stats["scores"].append(innings.runs)
            stats["wickets"].append(innings.wickets)
        result = state.result
        stats["ties"].append(1 if result.is_tie else 0)
        stats["side_a_wins"].append(1 if result.winner == side_a.name else 0)
        stats["follow_ons"].append(1 if state.follow_on_enforced else 0)

    console.print(Panel("[bold]Simulation Statistics[/bold]"))
    scores = stats["scores"]
    console.print(f"[cyan]Innings played:[/cyan] {len(scores)}")
    console.print(f"[cyan]Average Score:[/cyan] {sum(scores) / len(scores):.1f}")
    console.print(f"[cyan]Min Score:[/cyan] {min(scores)}")
    console.print(f"[cyan]Max Score:[/cyan] {max(scores)}")
    console.print(f"[cyan]Average Wickets:[/cyan] {sum(stats['wickets']) / len(stats['wickets']):.1f}")
    console.print(f"[cyan]{side_a.name} Win %:[/cyan] {sum(stats['side_a_wins']) / matches * 100:.1f}%")
    console.print(f"[cyan]Ties:[/cyan] {sum(stats['ties'])}")
    console.print(f"[cyan]Follow-ons:[/cyan] {sum(stats['follow_ons'])}")


if __name__ == "__main__":
    cli()
