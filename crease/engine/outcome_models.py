"""
Delivery outcome models.

A model turns a match snapshot into the outcome of the next delivery. The
engine treats the outcome as opaque input; models are chosen by the caller.
"""
import math
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from crease.engine.conditions import Conditions
from crease.engine.delivery import DeliveryOutcome, Dismissal, DismissalKind, Extra, Runs
from crease.engine.match_state import MatchSnapshot
from crease.engine.registry import Player, PlayerDb


@dataclass(frozen=True)
class GameSnapshot:
    """Snapshot with the player records resolved"""
    striker: Player
    non_striker: Player
    bowler: Player
    fielders: Tuple[Player, ...]
    conditions: Conditions
    target: Optional[int] = None


class DeliveryModel:
    """Interface for delivery outcome generators"""

    name = "base"

    def generate_delivery(self, rng: random.Random, state: GameSnapshot) -> DeliveryOutcome:
        raise NotImplementedError


def resolve_snapshot(snapshot: MatchSnapshot, registry: PlayerDb) -> GameSnapshot:
    return GameSnapshot(
        striker=registry.get(snapshot.striker),
        non_striker=registry.get(snapshot.non_striker),
        bowler=registry.get(snapshot.bowler),
        fielders=tuple(registry.get(p) for p in snapshot.fielders),
        conditions=snapshot.conditions,
        target=snapshot.target,
    )


def _pick_fielder(rng: random.Random, state: GameSnapshot) -> int:
    others = [p.id for p in state.fielders if p.id != state.bowler.id]
    return rng.choice(others) if others else state.bowler.id


@dataclass(frozen=True)
class NullRating:
    """Placeholder rating for models that ignore player ability"""


class NullModel(DeliveryModel):
    """A very simple model that doesn't use player ratings"""

    name = "null"

    def generate_delivery(self, rng: random.Random, state: GameSnapshot) -> DeliveryOutcome:
        bowler = state.bowler.id
        roll = rng.random()
        if roll < 0.01:
            wicket = Dismissal(DismissalKind.CAUGHT, bowler=bowler, fielder=_pick_fielder(rng, state))
            return DeliveryOutcome(wicket=wicket)
        if roll <= 0.015:
            return DeliveryOutcome(wicket=Dismissal(DismissalKind.BOWLED, bowler=bowler))
        if roll <= 0.02:
            return DeliveryOutcome(wicket=Dismissal(DismissalKind.LBW, bowler=bowler))
        if roll <= 0.4:
            return DeliveryOutcome(runs=Runs.running(1))
        if roll <= 0.42:
            return DeliveryOutcome(runs=Runs.four())
        if roll <= 0.424:
            return DeliveryOutcome(runs=Runs.six())
        return DeliveryOutcome.dot()


@dataclass(frozen=True)
class NaiveStatsRating:
    """Career averages: batting avg/SR and bowling avg/SR"""
    bat_avg: float = 30.0   # runs per dismissal
    bat_sr: float = 60.0    # runs per 100 balls
    bowl_avg: float = 35.0  # runs conceded per wicket
    bowl_sr: float = 70.0   # balls per wicket

    def __post_init__(self):
        for value in (self.bat_avg, self.bat_sr, self.bowl_avg, self.bowl_sr):
            if value <= 0:
                raise ValueError("Naive stats ratings must be positive")


def avg_probs(p1: float, p2: float) -> float:
    """Average two probabilities on a logistic scale"""
    p1 = min(max(p1, 1e-6), 1 - 1e-6)
    p2 = min(max(p2, 1e-6), 1 - 1e-6)
    odds = math.sqrt(p1 * p2 / ((1 - p1) * (1 - p2)))
    return odds / (1 + odds)


class NaiveStatsModel(DeliveryModel):
    """
    Combines the striker's and bowler's career averages.

    The wicket probability is the logistic mean of the batter's
    (SR / 100 / average) and the bowler's (1 / SR). Expected runs per ball
    is the geometric mean of the batter's SR / 100 and the bowler's
    runs per ball, spread over a fixed shape of scoring shots.
    """

    name = "naive"

    # Scoring shots given the ball is hit for runs
    SHOT_WEIGHTS = {1: 0.55, 2: 0.12, 3: 0.02, 4: 0.22, 6: 0.09}

    WIDE_PROB = 0.015
    NO_BALL_PROB = 0.005
    BYE_PROB = 0.01

    DISMISSALS = [
        (DismissalKind.CAUGHT, 0.55),
        (DismissalKind.BOWLED, 0.20),
        (DismissalKind.LBW, 0.15),
        (DismissalKind.RUN_OUT_STRIKER, 0.04),
        (DismissalKind.STUMPED, 0.03),
        (DismissalKind.RUN_OUT_NON_STRIKER, 0.03),
    ]

    @staticmethod
    def _rating(player: Player) -> NaiveStatsRating:
        if not isinstance(player.rating, NaiveStatsRating):
            raise TypeError(f"{player.name} has no naive stats rating")
        return player.rating

    def wicket_probability(self, state: GameSnapshot) -> float:
        bat = self._rating(state.striker)
        bowl = self._rating(state.bowler)
        return avg_probs(bat.bat_sr * 0.01 / bat.bat_avg, 1.0 / bowl.bowl_sr)

    def runs_per_ball(self, state: GameSnapshot) -> float:
        bat = self._rating(state.striker)
        bowl = self._rating(state.bowler)
        return math.sqrt((bat.bat_sr / 100) * (bowl.bowl_avg / bowl.bowl_sr))

    def _dismissal(self, rng: random.Random, state: GameSnapshot) -> Dismissal:
        kinds = [k for k, _ in self.DISMISSALS]
        weights = [w for _, w in self.DISMISSALS]
        kind = rng.choices(kinds, weights=weights)[0]
        bowler = state.bowler.id
        if kind in (DismissalKind.BOWLED, DismissalKind.LBW):
            return Dismissal(kind, bowler=bowler)
        # No keeper is designated, so any fielder may complete a stumping
        return Dismissal(kind, bowler=bowler, fielder=_pick_fielder(rng, state))

    def generate_delivery(self, rng: random.Random, state: GameSnapshot) -> DeliveryOutcome:
        roll = rng.random()
        if roll < self.WIDE_PROB:
            return DeliveryOutcome(extras=[Extra.wide()])
        roll -= self.WIDE_PROB
        if roll < self.NO_BALL_PROB:
            runs = rng.choices([0, 1, 4], weights=[0.6, 0.3, 0.1])[0]
            hit = Runs.four() if runs == 4 else Runs.running(runs)
            return DeliveryOutcome(runs=hit, extras=[Extra.no_ball()])
        roll -= self.NO_BALL_PROB
        if roll < self.BYE_PROB:
            return DeliveryOutcome(extras=[Extra.leg_bye(Runs.running(1))])
        roll -= self.BYE_PROB

        p_wicket = self.wicket_probability(state)
        if roll < p_wicket:
            return DeliveryOutcome(wicket=self._dismissal(rng, state))
        roll -= p_wicket

        shots = list(self.SHOT_WEIGHTS)
        weights = list(self.SHOT_WEIGHTS.values())
        mean_shot = sum(s * w for s, w in self.SHOT_WEIGHTS.items())
        p_score = min(0.9, self.runs_per_ball(state) / mean_shot)
        if roll < p_score:
            shot = rng.choices(shots, weights=weights)[0]
            if shot == 4:
                return DeliveryOutcome(runs=Runs.four())
            if shot == 6:
                return DeliveryOutcome(runs=Runs.six())
            return DeliveryOutcome(runs=Runs.running(shot))
        return DeliveryOutcome.dot()


MODELS = {
    NullModel.name: NullModel,
    NaiveStatsModel.name: NaiveStatsModel,
}


def get_model(name: str) -> DeliveryModel:
    try:
        return MODELS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown delivery model '{name}'. Must be one of: {sorted(MODELS)}") from None
