"""
Batting and bowling cards for completed (or in-progress) innings.
Pure presentation over the innings stats; holds no state of its own.
"""
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.table import Table

from crease.engine.innings import InningsEnd, InningsStats
from crease.engine.match_state import MatchState
from crease.engine.registry import PlayerDb


@dataclass
class BattingLine:
    name: str
    dismissal: str
    runs: int
    balls: int
    fours: int
    sixes: int
    strike_rate: str


@dataclass
class BowlingLine:
    name: str
    overs: str
    maidens: int
    runs: int
    wickets: int
    economy: str


def _rate(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}"


def batting_card(innings: InningsStats, registry: PlayerDb) -> list[BattingLine]:
    lines = []
    for batter in innings.batting.batters:
        if batter.dismissal is not None:
            dismissal = batter.dismissal.describe(registry.name_of)
        else:
            dismissal = "not out"
        lines.append(BattingLine(
            name=registry.name_of(batter.player_id),
            dismissal=dismissal,
            runs=batter.runs,
            balls=batter.balls,
            fours=batter.fours,
            sixes=batter.sixes,
            strike_rate=_rate(batter.strike_rate),
        ))
    return lines


def bowling_card(innings: InningsStats, registry: PlayerDb) -> list[BowlingLine]:
    per_over = innings.balls_per_over
    return [
        BowlingLine(
            name=registry.name_of(spell.player_id),
            overs=spell.overs_display(per_over),
            maidens=spell.maidens,
            runs=spell.runs,
            wickets=spell.wickets,
            economy=_rate(spell.economy(per_over)),
        )
        for spell in innings.bowling.spells
    ]


def innings_total(innings: InningsStats) -> str:
    """e.g. '312/6d (96.2 overs)'"""
    declared = "d" if innings.end == InningsEnd.DECLARED else ""
    if innings.all_out:
        score = f"{innings.runs} all out"
    else:
        score = f"{innings.runs}/{innings.wickets}{declared}"
    return f"{score} ({innings.overs_display} overs)"


def match_totals(state: MatchState) -> list[str]:
    """One line per side with every innings it has batted"""
    lines = []
    for side in state.sides:
        innings = state.innings_for(side)
        scores = " & ".join(innings_total(i) for i in innings) or "yet to bat"
        lines.append(f"{side.name}: {scores}")
    return lines


def render_innings(console: Console, innings: InningsStats, registry: PlayerDb):
    """Print innings scorecard"""
    bat_table = Table(title=f"Innings {innings.number}: {innings.batting_side.name}")
    bat_table.add_column("Batter", style="cyan")
    bat_table.add_column("Dismissal")
    bat_table.add_column("R", justify="right")
    bat_table.add_column("B", justify="right")
    bat_table.add_column("4s", justify="right")
    bat_table.add_column("6s", justify="right")
    bat_table.add_column("SR", justify="right")

    for line in batting_card(innings, registry):
        bat_table.add_row(
            line.name,
            line.dismissal,
            str(line.runs),
            str(line.balls),
            str(line.fours),
            str(line.sixes),
            line.strike_rate,
        )
    bat_table.add_row("Extras", "", str(innings.extras), "", "", "", "")
    bat_table.add_row("[bold]Total[/bold]", innings_total(innings), "", "", "", "", "")
    console.print(bat_table)

    bowl_table = Table(title=f"Bowling: {innings.bowling_side.name}")
    bowl_table.add_column("Bowler", style="magenta")
    bowl_table.add_column("O", justify="right")
    bowl_table.add_column("M", justify="right")
    bowl_table.add_column("R", justify="right")
    bowl_table.add_column("W", justify="right")
    bowl_table.add_column("Econ", justify="right")

    for line in bowling_card(innings, registry):
        bowl_table.add_row(
            line.name,
            line.overs,
            str(line.maidens),
            str(line.runs),
            str(line.wickets),
            line.economy,
        )
    console.print(bowl_table)
