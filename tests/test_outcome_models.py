"""
Tests for delivery outcome models. All randomness is seeded.
"""
import math
import random

import pytest

from crease.engine.conditions import Conditions
from crease.engine.delivery import DismissalKind, ExtraKind
from crease.engine.formats import MatchFormat
from crease.engine.match_state import MatchState
from crease.engine.outcome_models import (
    GameSnapshot, NaiveStatsModel, NaiveStatsRating, NullModel, avg_probs, get_model,
    resolve_snapshot,
)
from crease.engine.registry import PlayerDb


def _snapshot(batter=None, bowler=None, fielders=3):
    db = PlayerDb()
    striker = db.add("Striker", batter or NaiveStatsRating())
    non_striker = db.add("Partner", NaiveStatsRating())
    bowler = db.add("Bowler", bowler or NaiveStatsRating())
    field = tuple(db.add(f"Fielder {i}", NaiveStatsRating()) for i in range(fielders))
    return GameSnapshot(
        striker=striker,
        non_striker=non_striker,
        bowler=bowler,
        fielders=field + (bowler,),
        conditions=Conditions(),
    )


class TestModelLookup:

    def test_by_name(self):
        assert isinstance(get_model("null"), NullModel)
        assert isinstance(get_model("NAIVE"), NaiveStatsModel)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown delivery model"):
            get_model("hawkeye")


class TestNullModel:

    def test_same_seed_same_outcomes(self):
        state = _snapshot()
        rng_a, rng_b = random.Random(21), random.Random(21)
        a = [NullModel().generate_delivery(rng_a, state) for _ in range(200)]
        b = [NullModel().generate_delivery(rng_b, state) for _ in range(200)]
        assert a == b

    def test_outcome_mix(self):
        state = _snapshot()
        rng = random.Random(0)
        outcomes = [NullModel().generate_delivery(rng, state) for _ in range(10000)]
        wickets = [o for o in outcomes if o.wicket is not None]
        assert all(o.legal for o in outcomes)
        assert 100 < len(wickets) < 300
        assert all(w.wicket.bowler == state.bowler.id for w in wickets)
        singles = sum(1 for o in outcomes if o.wicket is None and o.runs.total == 1)
        assert 3500 < singles < 4100

    def test_ignores_ratings(self):
        db = PlayerDb()
        players = [db.add(str(i)) for i in range(4)]
        state = GameSnapshot(*players[:3], fielders=tuple(players), conditions=Conditions())
        NullModel().generate_delivery(random.Random(1), state)


class TestNaiveStatsModel:

    def test_avg_probs(self):
        assert avg_probs(0.2, 0.2) == pytest.approx(0.2)
        p = avg_probs(0.02, 0.01)
        assert 0.01 < p < 0.02
        assert avg_probs(0.3, 0.7) == pytest.approx(0.5)

    def test_default_figures(self):
        model = NaiveStatsModel()
        state = _snapshot()
        assert model.runs_per_ball(state) == pytest.approx(math.sqrt(0.6 * 0.5))
        assert model.wicket_probability(state) == pytest.approx(avg_probs(0.02, 1 / 70))

    def test_better_batter_scores_more_and_survives_longer(self):
        model = NaiveStatsModel()
        average = _snapshot()
        star = _snapshot(batter=NaiveStatsRating(bat_avg=55, bat_sr=80))
        assert model.runs_per_ball(star) > model.runs_per_ball(average)
        assert model.wicket_probability(star) < model.wicket_probability(average)

    def test_better_bowler_takes_more_wickets(self):
        model = NaiveStatsModel()
        average = _snapshot()
        strike = _snapshot(bowler=NaiveStatsRating(bowl_avg=15, bowl_sr=40))
        assert model.wicket_probability(strike) > model.wicket_probability(average)
        assert model.runs_per_ball(strike) < model.runs_per_ball(average)

    def test_outcomes_are_well_formed(self):
        state = _snapshot()
        rng = random.Random(12)
        outcomes = [NaiveStatsModel().generate_delivery(rng, state) for _ in range(5000)]
        wides = sum(o.count(ExtraKind.WIDE) for o in outcomes)
        assert 30 < wides < 130
        for o in outcomes:
            if o.wicket is None:
                continue
            assert o.wicket.bowler == state.bowler.id
            if o.wicket.kind in (DismissalKind.CAUGHT, DismissalKind.STUMPED):
                assert o.wicket.fielder != state.bowler.id
        runs_per_ball = sum(o.runs.total for o in outcomes) / len(outcomes)
        assert 0.3 < runs_per_ball < 0.8

    def test_requires_ratings(self):
        db = PlayerDb()
        players = [db.add(str(i)) for i in range(4)]
        state = GameSnapshot(*players[:3], fielders=tuple(players), conditions=Conditions())
        with pytest.raises(TypeError):
            NaiveStatsModel().generate_delivery(random.Random(1), state)

    def test_ratings_must_be_positive(self):
        with pytest.raises(ValueError):
            NaiveStatsRating(bat_avg=0)


class TestResolveSnapshot:

    def test_players_are_looked_up(self, side_a, side_b, registry):
        state = MatchState(MatchFormat(), side_a, side_b)
        game = resolve_snapshot(state.snapshot(), registry)
        assert game.striker.name == "Reds 1"
        assert game.non_striker.name == "Reds 2"
        assert game.bowler.name == "Blues 10"
        assert len(game.fielders) == 11
        assert game.target is None
