"""
Innings stats engine.

Keeps the batting and bowling figures for one innings. Both halves are
driven by every delivery, legal or not, and the innings tracks the over
count that decides when ends change and the next bowler comes on.
"""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from crease.engine.delivery import DeliveryOutcome, Dismissal, ExtraKind, RunsKind
from crease.engine.formats import MatchFormat
from crease.engine.lineup import BattingOrder, BowlerRotation
from crease.engine.side import Side
from crease.errors import MatchCompleteError, MissingDataError

logger = logging.getLogger(__name__)


class InningsEnd(enum.Enum):
    ALL_OUT = "all_out"
    OVERS = "overs"
    DECLARED = "declared"
    TARGET_REACHED = "target_reached"


@dataclass
class BatterInnings:
    """Tracks a batter's innings"""
    player_id: int
    runs: int = 0
    balls: int = 0
    fours: int = 0  # boundary runs are also included in runs
    sixes: int = 0
    dismissal: Optional[Dismissal] = None

    @property
    def is_out(self) -> bool:
        return self.dismissal is not None

    @property
    def strike_rate(self) -> Optional[float]:
        """Runs per 100 balls, None before the first legal ball"""
        if self.balls == 0:
            return None
        return (self.runs / self.balls) * 100


@dataclass
class BowlerSpell:
    """Tracks a bowler's figures for the innings"""
    player_id: int
    balls: int = 0
    maidens: int = 0
    runs: int = 0
    wickets: int = 0
    wides: int = 0
    no_balls: int = 0

    def overs_display(self, balls_per_over: int = 6) -> str:
        overs, balls = divmod(self.balls, balls_per_over)
        return f"{overs}.{balls}" if balls else str(overs)

    def economy(self, balls_per_over: int = 6) -> Optional[float]:
        if self.balls == 0:
            return None
        return self.runs * balls_per_over / self.balls


class TeamBattingInnings:
    """
    Batting figures for a side. The two batters at the crease are indices
    into an append-only list of batter records. When the batting order runs
    dry a slot is left pointing past the end of the list, which is how the
    all-out state is represented.
    """

    def __init__(self, batting_order: BattingOrder):
        self._order = batting_order
        opener = next(batting_order, None)
        if opener is None:
            raise MissingDataError("No first batter")
        partner = next(batting_order, None)
        if partner is None:
            raise MissingDataError("No second batter")
        self.batters: List[BatterInnings] = [BatterInnings(opener), BatterInnings(partner)]
        self.extras = 0
        self._slot_a = 0
        self._slot_b = 1
        self._striker_a = True

    @property
    def all_out(self) -> bool:
        return self._slot_a >= len(self.batters) or self._slot_b >= len(self.batters)

    @property
    def runs(self) -> int:
        return sum(b.runs for b in self.batters) + self.extras

    @property
    def wickets(self) -> int:
        return sum(1 for b in self.batters if b.is_out)

    def _striker_slot(self) -> int:
        return self._slot_a if self._striker_a else self._slot_b

    def _non_striker_slot(self) -> int:
        return self._slot_b if self._striker_a else self._slot_a

    def _batter_at(self, slot: int, role: str) -> BatterInnings:
        if slot >= len(self.batters):
            raise MatchCompleteError(f"Innings is over, no {role}")
        return self.batters[slot]

    def _check_not_out(self, role: str):
        if self.all_out:
            raise MatchCompleteError(f"Innings is over, no {role}")

    @property
    def striker(self) -> int:
        self._check_not_out("striker")
        return self._batter_at(self._striker_slot(), "striker").player_id

    @property
    def non_striker(self) -> int:
        self._check_not_out("non-striker")
        return self._batter_at(self._non_striker_slot(), "non-striker").player_id

    def switch_striker(self):
        """Batters change ends: at the end of an over, or after odd runs"""
        self._striker_a = not self._striker_a

    def _refill(self, slot: int) -> int:
        """Send in the next batter if the one in this slot is out"""
        if not self.batters[slot].is_out:
            return slot
        new_slot = len(self.batters)
        batter = next(self._order, None)
        if batter is not None:
            self.batters.append(BatterInnings(batter))
        return new_slot

    def update(self, ball: DeliveryOutcome):
        striker = self._batter_at(self._striker_slot(), "striker")
        non_striker = self._batter_at(self._non_striker_slot(), "non-striker")

        if ball.legal:
            striker.balls += 1

        switch = False
        if ball.runs.kind == RunsKind.RUNNING:
            switch = ball.runs.is_odd_running
            striker.runs += ball.runs.ran
        elif ball.runs.kind == RunsKind.FOUR:
            striker.runs += 4
            striker.fours += 1
        else:
            striker.runs += 6
            striker.sixes += 1

        self.extras += ball.extras_total
        # Odd byes/leg-byes also change ends, composing with runs off the bat
        for extra in ball.extras:
            if extra.is_bye and extra.runs.is_odd_running:
                switch = not switch

        if ball.wicket is not None:
            out = non_striker if ball.wicket.removes_non_striker else striker
            assert not out.is_out, "Batter dismissed twice"
            out.dismissal = ball.wicket

        self._slot_a = self._refill(self._slot_a)
        self._slot_b = self._refill(self._slot_b)

        if switch:
            self.switch_striker()


class TeamBowlingInnings:
    """Bowling figures for the fielding side"""

    def __init__(self, rotation: BowlerRotation):
        self._rotation = rotation
        first = next(rotation, None)
        if first is None:
            raise MissingDataError("Could not get first bowler")
        self.spells: List[BowlerSpell] = [BowlerSpell(first)]
        self._current: Optional[int] = 0
        self.maiden_so_far = True

    @property
    def current_bowler(self) -> int:
        if self._current is None:
            raise MissingDataError("No bowler available for the next over")
        return self.spells[self._current].player_id

    @property
    def wickets(self) -> int:
        return sum(s.wickets for s in self.spells)

    def spell_for(self, player_id: int) -> Optional[BowlerSpell]:
        return next((s for s in self.spells if s.player_id == player_id), None)

    def update(self, ball: DeliveryOutcome):
        spell = self.spells[self._current]
        if ball.legal:
            spell.balls += 1

        # Byes and leg-byes go to the team, not the bowler
        bowler_runs = ball.bowler_runs
        if bowler_runs > 0:
            self.maiden_so_far = False
        spell.runs += bowler_runs
        spell.wides += ball.count(ExtraKind.WIDE)
        spell.no_balls += ball.count(ExtraKind.NO_BALL)
        if ball.wicket is not None:
            spell.wickets += 1

    def new_over(self):
        """Close the over and hand the ball to the next bowler"""
        if self.maiden_so_far:
            self.spells[self._current].maidens += 1
        self.maiden_so_far = True

        next_bowler = next(self._rotation, None)
        if next_bowler is None:
            # Only an error if another delivery is attempted
            logger.debug("Bowling rotation exhausted")
            self._current = None
            return
        for index, spell in enumerate(self.spells):
            if spell.player_id == next_bowler:
                self._current = index
                return
        self.spells.append(BowlerSpell(next_bowler))
        self._current = len(self.spells) - 1


class InningsStats:
    """Collects and tracks stats in a single innings"""

    def __init__(
        self,
        number: int,
        batting_side: Side,
        bowling_side: Side,
        match_format: MatchFormat,
    ):
        self.number = number
        self.batting_side = batting_side
        self.bowling_side = bowling_side
        self.balls_per_over = match_format.balls_per_over
        self.batting = TeamBattingInnings(batting_side.batting_order(match_format.batters_per_side))
        self.bowling = TeamBowlingInnings(bowling_side.bowler_rotation(match_format.max_overs_per_bowler))
        self.overs = 0  # completed overs
        self.balls = 0  # legal balls in the current over
        self.end: Optional[InningsEnd] = None

    @property
    def is_closed(self) -> bool:
        return self.end is not None

    @property
    def all_out(self) -> bool:
        return self.batting.all_out

    @property
    def runs(self) -> int:
        return self.batting.runs

    @property
    def wickets(self) -> int:
        return self.batting.wickets

    @property
    def extras(self) -> int:
        return self.batting.extras

    @property
    def legal_balls(self) -> int:
        return self.overs * self.balls_per_over + self.balls

    @property
    def overs_display(self) -> str:
        return f"{self.overs}.{self.balls}"

    def _check_in_progress(self, role: str):
        if self.is_closed or self.all_out:
            raise MatchCompleteError(f"Innings {self.number} is over, no {role}")

    @property
    def striker(self) -> int:
        self._check_in_progress("striker")
        return self.batting.striker

    @property
    def non_striker(self) -> int:
        self._check_in_progress("non-striker")
        return self.batting.non_striker

    @property
    def bowler(self) -> int:
        self._check_in_progress("bowler")
        return self.bowling.current_bowler

    def update(self, ball: DeliveryOutcome):
        """Apply one delivery to both halves and advance the over"""
        if self.is_closed:
            raise MatchCompleteError(f"Innings {self.number} is closed")
        if self.all_out:
            raise MatchCompleteError(f"Innings {self.number} is over, all out")
        # Fail before mutating anything if no bowler is left
        self.bowling.current_bowler

        self.batting.update(ball)
        self.bowling.update(ball)
        if ball.legal:
            self.balls += 1
        if self.balls >= self.balls_per_over:
            self.balls = 0
            self.overs += 1
            self.batting.switch_striker()
            self.bowling.new_over()

    def close(self, reason: InningsEnd):
        self.end = reason
