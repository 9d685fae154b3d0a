"""
Outcome of a single delivery: runs off the bat, extras and an optional dismissal.
"""
import enum
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple


class RunsKind(enum.Enum):
    RUNNING = "running"  # includes dots (0)
    FOUR = "four"        # reaches the boundary after bouncing
    SIX = "six"          # clears the boundary in the air


@dataclass(frozen=True)
class Runs:
    """Runs scored off the bat (or as byes)"""
    kind: RunsKind = RunsKind.RUNNING
    ran: int = 0

    def __post_init__(self):
        if self.ran < 0:
            raise ValueError("Runs cannot be negative")
        if self.kind != RunsKind.RUNNING and self.ran:
            raise ValueError("Boundaries do not carry running runs")

    @classmethod
    def running(cls, ran: int) -> "Runs":
        return cls(RunsKind.RUNNING, ran)

    @classmethod
    def four(cls) -> "Runs":
        return cls(RunsKind.FOUR)

    @classmethod
    def six(cls) -> "Runs":
        return cls(RunsKind.SIX)

    @property
    def total(self) -> int:
        if self.kind == RunsKind.FOUR:
            return 4
        if self.kind == RunsKind.SIX:
            return 6
        return self.ran

    @property
    def is_odd_running(self) -> bool:
        """Batters change ends after an odd number of runs completed"""
        return self.kind == RunsKind.RUNNING and self.ran % 2 == 1


class ExtraKind(enum.Enum):
    NO_BALL = "no_ball"
    WIDE = "wide"
    BYE = "bye"
    LEG_BYE = "leg_bye"
    PENALTY = "penalty"


@dataclass(frozen=True)
class Extra:
    """
    Runs awarded to the team rather than a batter.

    No-balls and wides carry one penalty run and make the delivery illegal.
    Byes and leg-byes carry their own runs, which may be boundaries.
    """
    kind: ExtraKind
    runs: Runs = field(default_factory=Runs)
    penalty: int = 0

    @classmethod
    def no_ball(cls) -> "Extra":
        return cls(ExtraKind.NO_BALL)

    @classmethod
    def wide(cls) -> "Extra":
        return cls(ExtraKind.WIDE)

    @classmethod
    def bye(cls, runs: Runs) -> "Extra":
        return cls(ExtraKind.BYE, runs=runs)

    @classmethod
    def leg_bye(cls, runs: Runs) -> "Extra":
        return cls(ExtraKind.LEG_BYE, runs=runs)

    @classmethod
    def penalty_runs(cls, runs: int = 5) -> "Extra":
        return cls(ExtraKind.PENALTY, penalty=runs)

    @property
    def total(self) -> int:
        if self.kind in (ExtraKind.NO_BALL, ExtraKind.WIDE):
            return 1
        if self.kind in (ExtraKind.BYE, ExtraKind.LEG_BYE):
            return self.runs.total
        return self.penalty

    @property
    def is_illegal(self) -> bool:
        return self.kind in (ExtraKind.NO_BALL, ExtraKind.WIDE)

    @property
    def is_bye(self) -> bool:
        return self.kind in (ExtraKind.BYE, ExtraKind.LEG_BYE)


class DismissalKind(enum.Enum):
    BOWLED = "bowled"
    CAUGHT = "caught"
    LBW = "lbw"
    RUN_OUT_STRIKER = "run_out_striker"
    RUN_OUT_NON_STRIKER = "run_out_non_striker"  # only way the non-striker is out
    STUMPED = "stumped"


@dataclass(frozen=True)
class Dismissal:
    """How a batter was out. Bowler/fielder ids are kept for display only."""
    kind: DismissalKind
    bowler: Optional[int] = None
    fielder: Optional[int] = None

    @property
    def removes_non_striker(self) -> bool:
        return self.kind == DismissalKind.RUN_OUT_NON_STRIKER

    def describe(self, name_of: Callable[[int], str]) -> str:
        """Scorecard text, e.g. 'c Smith b Jones'"""
        bowler = name_of(self.bowler) if self.bowler is not None else "?"
        fielder = name_of(self.fielder) if self.fielder is not None else "?"
        if self.kind == DismissalKind.BOWLED:
            return f"b {bowler}"
        if self.kind == DismissalKind.CAUGHT:
            if self.fielder is not None and self.fielder == self.bowler:
                return f"c & b {bowler}"
            return f"c {fielder} b {bowler}"
        if self.kind == DismissalKind.LBW:
            return f"lbw b {bowler}"
        if self.kind == DismissalKind.STUMPED:
            return f"st {fielder} b {bowler}"
        if self.fielder is None:
            return "run out"
        return f"run out ({fielder})"


@dataclass(frozen=True)
class DeliveryOutcome:
    """
    The outcome of a single delivery. The ball is dead on a dismissal,
    so at most one batter can be out.
    """
    runs: Runs = field(default_factory=Runs)
    extras: Tuple[Extra, ...] = ()
    wicket: Optional[Dismissal] = None

    def __post_init__(self):
        # accept any iterable of extras but store an immutable tuple
        object.__setattr__(self, "extras", tuple(self.extras))

    @classmethod
    def dot(cls) -> "DeliveryOutcome":
        return cls()

    @property
    def legal(self) -> bool:
        """Whether the delivery counts towards the over"""
        return not any(extra.is_illegal for extra in self.extras)

    @property
    def extras_total(self) -> int:
        return sum(extra.total for extra in self.extras)

    @property
    def bowler_runs(self) -> int:
        """Runs charged to the bowler: off the bat plus no-ball/wide penalties"""
        return self.runs.total + sum(extra.total for extra in self.extras if extra.is_illegal)

    @property
    def total_runs(self) -> int:
        return self.runs.total + self.extras_total

    def count(self, kind: ExtraKind) -> int:
        return sum(1 for extra in self.extras if extra.kind == kind)
