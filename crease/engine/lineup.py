"""
Lineup rotation: the order batters come in and the order bowlers take overs.

Both are plain iterators built fresh for every innings. Exhaustion is
signalled with StopIteration, so callers use ``next(rotation, None)``.
"""
from typing import Dict, Iterator, List, Optional, Sequence


class BattingOrder(Iterator[int]):
    """Forward-only walk over a side's batters for one innings"""

    def __init__(self, batters: Sequence[int]):
        # Stored reversed so the next batter can be popped off the end
        self._remaining: List[int] = list(reversed(batters))

    def __next__(self) -> int:
        if not self._remaining:
            raise StopIteration
        return self._remaining.pop()

    @property
    def remaining(self) -> int:
        return len(self._remaining)


class BowlerRotation(Iterator[int]):
    """
    Supplies the bowler for each over. Implementations must never return
    the bowler who bowled the previous over.
    """

    def __init__(self):
        self.last_bowler: Optional[int] = None
        self.overs_given: Dict[int, int] = {}

    def _pick(self) -> Optional[int]:
        raise NotImplementedError

    def __next__(self) -> int:
        bowler = self._pick()
        if bowler is None:
            raise StopIteration
        assert bowler != self.last_bowler, "Bowler rotation returned the same bowler twice"
        self.last_bowler = bowler
        self.overs_given[bowler] = self.overs_given.get(bowler, 0) + 1
        return bowler


class AlternatingBowlers(BowlerRotation):
    """Two designated bowlers alternate from each end for the whole innings"""

    def __init__(self, bowlers: Sequence[int]):
        super().__init__()
        if len(bowlers) > 2:
            raise ValueError("Alternating rotation takes at most two bowlers")
        if len(set(bowlers)) != len(bowlers):
            raise ValueError("Alternating bowlers must be different players")
        self._pair = list(bowlers)
        self._turn = 0

    def _pick(self) -> Optional[int]:
        if not self._pair:
            return None
        # A single bowler can only ever bowl the opening over
        if len(self._pair) == 1 and self._turn > 0:
            return None
        bowler = self._pair[self._turn % len(self._pair)]
        self._turn += 1
        return bowler


class WorkloadBowlers(BowlerRotation):
    """
    Round-robin over the whole bowling attack, skipping the previous over's
    bowler and anyone who has bowled their quota.
    """

    def __init__(self, bowlers: Sequence[int], max_overs: int):
        super().__init__()
        if len(set(bowlers)) != len(bowlers):
            raise ValueError("Bowling attack lists a player twice")
        self._bowlers = list(bowlers)
        self.max_overs = max_overs
        self._cursor = 0

    def _pick(self) -> Optional[int]:
        for step in range(len(self._bowlers)):
            index = (self._cursor + step) % len(self._bowlers)
            bowler = self._bowlers[index]
            if bowler == self.last_bowler:
                continue
            if self.overs_given.get(bowler, 0) >= self.max_overs:
                continue
            self._cursor = index + 1
            return bowler
        return None
