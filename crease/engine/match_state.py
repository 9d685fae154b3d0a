"""
Match state machine.

Owns the sequence of innings, decides who bats next and when the match is
over. ``apply_delivery`` is the single mutation entry point; callers read a
snapshot, ask a delivery model for an outcome and feed it back here.
"""
import copy
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from crease.engine.conditions import Ball, BallType, Conditions
from crease.engine.delivery import DeliveryOutcome
from crease.engine.formats import MatchFormat
from crease.engine.innings import InningsEnd, InningsStats
from crease.engine.side import Side
from crease.errors import MatchCompleteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only view handed to delivery models"""
    innings: int
    batting_side: str
    bowling_side: str
    striker: int
    non_striker: int
    bowler: int
    fielders: Tuple[int, ...]
    runs: int
    wickets: int
    overs: int
    balls: int
    conditions: Conditions
    target: Optional[int] = None  # set during the final innings


@dataclass(frozen=True)
class MatchResult:
    winner: Optional[str]  # None for a tie
    margin: str

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    def __str__(self) -> str:
        if self.winner is None:
            return self.margin
        return f"{self.winner} won by {self.margin}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class MatchState:
    """The full state of a match between two sides"""

    def __init__(self, match_format: MatchFormat, side_a: Side, side_b: Side):
        for side in (side_a, side_b):
            side.check_lineup(match_format.batters_per_side, match_format.max_overs_per_bowler)
        self.format = match_format
        self.sides: Tuple[Side, Side] = (side_a, side_b)
        ball_type = BallType.RED_LEATHER if match_format.red_ball else BallType.WHITE_LEATHER
        self.conditions = Conditions(ball=Ball(ball_type=ball_type))
        self.history: List[InningsStats] = []
        self.follow_on_enforced = False
        self.innings_victory = False
        self.current: Optional[InningsStats] = None
        self._start_innings(InningsStats(1, side_a, side_b, match_format))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        return self.current is None

    @property
    def is_final_innings(self) -> bool:
        return self.current is not None and len(self.history) == self.format.total_innings - 1

    def _other(self, side: Side) -> Side:
        return self.sides[1] if side is self.sides[0] else self.sides[0]

    def _check_side(self, side: Side):
        if not any(side is s for s in self.sides):
            raise ValueError(f"{side.name} is not playing in this match")

    def team_score(self, side: Side) -> int:
        """Runs from every completed innings plus the current one if batting"""
        self._check_side(side)
        runs = sum(i.runs for i in self.history if i.batting_side is side)
        if self.current is not None and self.current.batting_side is side:
            runs += self.current.runs
        return runs

    def innings_for(self, side: Side) -> List[InningsStats]:
        self._check_side(side)
        innings = [i for i in self.history if i.batting_side is side]
        if self.current is not None and self.current.batting_side is side:
            innings.append(self.current)
        return innings

    @property
    def target(self) -> Optional[int]:
        """Runs the side batting last needs in this innings to win"""
        if not self.is_final_innings:
            return None
        innings = self.current
        other = self.team_score(innings.bowling_side)
        earlier = self.team_score(innings.batting_side) - innings.runs
        return other - earlier + 1

    def _require_current(self) -> InningsStats:
        if self.current is None:
            raise MatchCompleteError()
        return self.current

    def snapshot(self) -> MatchSnapshot:
        innings = self._require_current()
        return MatchSnapshot(
            innings=innings.number,
            batting_side=innings.batting_side.name,
            bowling_side=innings.bowling_side.name,
            striker=innings.striker,
            non_striker=innings.non_striker,
            bowler=innings.bowler,
            fielders=innings.bowling_side.players,
            runs=innings.runs,
            wickets=innings.wickets,
            overs=innings.overs,
            balls=innings.balls,
            conditions=copy.deepcopy(self.conditions),
            target=self.target,
        )

    @property
    def result(self) -> Optional[MatchResult]:
        """Winner and margin once the match is complete"""
        if not self.is_complete:
            return None
        side_a, side_b = self.sides
        score_a, score_b = self.team_score(side_a), self.team_score(side_b)
        if score_a == score_b:
            return MatchResult(winner=None, margin="Match tied")
        winner = side_a if score_a > score_b else side_b
        lead = abs(score_a - score_b)
        last = self.history[-1]
        if self.innings_victory:
            margin = f"an innings and {_plural(lead, 'run')}"
        elif last.batting_side is winner:
            # The winning runs are complete before a last-ball wicket falls
            wickets_left = max(1, self.format.batters_per_side - 1 - last.wickets)
            margin = _plural(wickets_left, "wicket")
        else:
            margin = _plural(lead, "run")
        return MatchResult(winner=winner.name, margin=margin)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_delivery(self, outcome: DeliveryOutcome) -> Optional[InningsEnd]:
        """
        Apply one delivery. Returns the reason the innings ended if this
        delivery closed it, otherwise None.
        """
        innings = self._require_current()
        innings.update(outcome)
        self.conditions.ball.record(outcome)
        logger.debug(
            "%s %d/%d (%s) after %s",
            innings.batting_side.name, innings.runs, innings.wickets,
            innings.overs_display, outcome,
        )

        overs_cap = self.format.overs_per_innings
        if innings.all_out:
            reason = InningsEnd.ALL_OUT
        elif overs_cap is not None and innings.overs >= overs_cap:
            reason = InningsEnd.OVERS
        elif self.is_final_innings and (
            self.team_score(innings.batting_side) > self.team_score(innings.bowling_side)
        ):
            reason = InningsEnd.TARGET_REACHED
        else:
            return None
        self._close_innings(reason)
        return reason

    def declare(self):
        """The batting side ends its innings immediately"""
        self._require_current()
        self._close_innings(InningsEnd.DECLARED)

    def _start_innings(self, innings: InningsStats):
        self.current = innings
        self.conditions.new_ball()
        logger.info(
            "Innings %d: %s batting, %s bowling",
            innings.number, innings.batting_side.name, innings.bowling_side.name,
        )

    def _close_innings(self, reason: InningsEnd):
        """
        Archive the current innings and start the next one, if any. The next
        innings is built before anything changes so a failure leaves the
        match exactly as it was.
        """
        innings = self._require_current()
        completed = len(self.history) + 1
        total = self.format.total_innings
        batted = innings.batting_side
        other = self._other(batted)
        deficit = self.team_score(other) - self.team_score(batted)

        margin = self.format.follow_on_margin
        follow_on = (
            completed < total
            and margin is not None
            and completed % 2 == 0
            and completed == self.format.innings
            and deficit >= margin
        )
        # The side that just batted has no innings left to catch up
        innings_victory = not follow_on and completed == total - 1 and deficit > 0

        upcoming: Optional[InningsStats] = None
        if follow_on:
            upcoming = InningsStats(completed + 1, batted, other, self.format)
        elif completed < total and not innings_victory:
            upcoming = InningsStats(completed + 1, other, batted, self.format)

        innings.close(reason)
        self.history.append(innings)
        self.current = None
        logger.info(
            "Innings %d closed (%s): %s %d/%d in %s overs",
            innings.number, reason.value, batted.name,
            innings.runs, innings.wickets, innings.overs_display,
        )
        if follow_on:
            logger.info("%s trail by %d and follow on", batted.name, deficit)
            self.follow_on_enforced = True
        if innings_victory:
            self.innings_victory = True

        if upcoming is None:
            logger.info("Match complete: %s", self.result)
            return
        self._start_innings(upcoming)
