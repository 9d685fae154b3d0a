"""
Match formats - parameter bundles describing how a match is played.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MatchFormat:
    """Defines the format of a match. The defaults describe a test match."""
    name: str = "test"
    innings: int = 2  # turns each side has to bat
    overs_per_innings: Optional[int] = None  # None = unlimited
    balls_per_over: int = 6
    batters_per_side: int = 11
    # Deficit at which the trailing side is sent straight back in
    follow_on_margin: Optional[int] = 150
    max_overs_per_bowler: Optional[int] = None
    red_ball: bool = True

    def __post_init__(self):
        if self.innings < 1:
            raise ValueError("A match needs at least one innings per side")
        if self.balls_per_over < 1:
            raise ValueError("An over needs at least one ball")
        if self.batters_per_side < 2:
            raise ValueError("At least two batters per side are required")
        if self.overs_per_innings is not None and self.overs_per_innings < 1:
            raise ValueError("Overs per innings must be positive when set")
        if self.max_overs_per_bowler is not None and self.max_overs_per_bowler < 1:
            raise ValueError("Max overs per bowler must be positive when set")

    @property
    def total_innings(self) -> int:
        return 2 * self.innings

    @classmethod
    def test(cls) -> "MatchFormat":
        """Standard test (first-class) format"""
        return cls()

    @classmethod
    def odi(cls) -> "MatchFormat":
        """List-A, e.g. One Day International"""
        return cls(
            name="odi",
            innings=1,
            overs_per_innings=50,
            follow_on_margin=None,
            max_overs_per_bowler=10,
            red_ball=False,
        )

    @classmethod
    def t20(cls) -> "MatchFormat":
        """Twenty20"""
        return cls(
            name="t20",
            innings=1,
            overs_per_innings=20,
            follow_on_margin=None,
            max_overs_per_bowler=4,
            red_ball=False,
        )


FORMAT_PRESETS = {
    "test": MatchFormat.test,
    "odi": MatchFormat.odi,
    "t20": MatchFormat.t20,
}


def get_format(name: str) -> MatchFormat:
    """Look up a preset by name (case-insensitive)"""
    try:
        return FORMAT_PRESETS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown match format '{name}'. Must be one of: {sorted(FORMAT_PRESETS)}"
        ) from None
