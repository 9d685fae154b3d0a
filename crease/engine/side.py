"""
A side as seen by the engine: an ordered roster of player ids.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from crease.engine.lineup import AlternatingBowlers, BattingOrder, BowlerRotation, WorkloadBowlers
from crease.errors import MissingDataError

logger = logging.getLogger(__name__)

# Roster positions 6-11 make up the default bowling attack
BOWLING_SLICE = slice(5, 11)


@dataclass(frozen=True)
class Side:
    name: str
    players: Tuple[int, ...]
    # Designated bowling attack; defaults to roster positions 6-11
    bowling: Optional[Tuple[int, ...]] = None

    def __post_init__(self):
        object.__setattr__(self, "players", tuple(self.players))
        if self.bowling is not None:
            object.__setattr__(self, "bowling", tuple(self.bowling))

    @property
    def bowlers(self) -> Tuple[int, ...]:
        if self.bowling is not None:
            return self.bowling
        return self.players[BOWLING_SLICE]

    def check_lineup(self, batters_per_side: int, max_overs: Optional[int] = None):
        """Fail unless the side can open the batting and the bowling"""
        if len(self.players) < 2:
            raise MissingDataError(f"{self.name} cannot supply two opening batters")
        if not self.bowlers:
            raise MissingDataError(f"{self.name} cannot supply an opening bowler")
        if len(set(self.bowlers)) != len(self.bowlers):
            raise ValueError(f"{self.name} attack lists a bowler twice")
        # Every innings builds the same rotation, so a bad attack fails here
        self.bowler_rotation(max_overs)
        if len(self.players) < batters_per_side:
            logger.warning(
                "%s has %d players for a %d-batter format",
                self.name, len(self.players), batters_per_side,
            )

    def batting_order(self, batters_per_side: int) -> BattingOrder:
        return BattingOrder(self.players[:batters_per_side])

    def bowler_rotation(self, max_overs: Optional[int] = None) -> BowlerRotation:
        if max_overs is None:
            # The two strike bowlers at the end of the attack share the overs
            return AlternatingBowlers(self.bowlers[-2:])
        return WorkloadBowlers(self.bowlers, max_overs)
