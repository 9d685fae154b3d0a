"""
Tests for the match state machine: innings transitions, follow-on, early
call, chase completion, declarations and the match result.
"""
import pytest

from crease.engine.conditions import BallType
from crease.engine.delivery import DeliveryOutcome, Dismissal, DismissalKind, Extra, Runs
from crease.engine.formats import MatchFormat
from crease.engine.innings import InningsEnd
from crease.engine.match_state import MatchState
from crease.engine.side import Side
from crease.errors import MatchCompleteError, MissingDataError

DOT = DeliveryOutcome.dot()
WICKET = DeliveryOutcome(wicket=Dismissal(DismissalKind.BOWLED))


def ran(n):
    return DeliveryOutcome(runs=Runs.running(n))


def bowl_out(state):
    """Take wickets until the current innings closes"""
    number = state.current.number
    reason = None
    while state.current is not None and state.current.number == number:
        reason = state.apply_delivery(WICKET)
    return reason


def score_and_bowl_out(state, runs):
    if runs:
        state.apply_delivery(ran(runs))
    return bowl_out(state)


@pytest.fixture
def trios(make_side):
    """Two three-player sides, each bowling its last two players"""
    return make_side("Reds", size=3, bowlers=2), make_side("Blues", size=3, bowlers=2)


@pytest.fixture
def two_innings(trios):
    red, blue = trios
    return MatchState(MatchFormat(batters_per_side=3), red, blue)


class TestConstruction:

    def test_first_innings_starts(self, side_a, side_b):
        state = MatchState(MatchFormat(), side_a, side_b)
        assert not state.is_complete
        assert state.current.number == 1
        assert state.current.batting_side is side_a
        assert state.current.bowling_side is side_b
        assert state.target is None
        assert state.result is None

    def test_side_without_two_openers(self, make_side, side_b):
        with pytest.raises(MissingDataError):
            MatchState(MatchFormat(), make_side("Solo", size=1), side_b)

    def test_side_without_a_bowler(self, side_a):
        with pytest.raises(MissingDataError):
            MatchState(MatchFormat(), side_a, Side("NoAttack", (90, 91, 92), bowling=()))

    def test_attack_listing_a_bowler_twice(self, side_b):
        with pytest.raises(ValueError, match="twice"):
            MatchState(MatchFormat(), Side("Reds", (1, 2, 3), bowling=(3, 3)), side_b)

    def test_bad_second_attack_fails_before_play(self, side_a):
        blues = Side("Blues", tuple(range(21, 32)), bowling=(28, 29, 29, 30))
        with pytest.raises(ValueError):
            MatchState(MatchFormat.t20(), side_a, blues)

    def test_unknown_side_score(self, side_a, side_b, make_side):
        state = MatchState(MatchFormat(), side_a, side_b)
        with pytest.raises(ValueError):
            state.team_score(make_side("Spectators"))


class TestAllOut:

    def test_three_batters_all_out_for_nothing(self, trios):
        red, blue = trios
        state = MatchState(MatchFormat(innings=1, batters_per_side=3, follow_on_margin=None), red, blue)
        for _ in range(11):
            assert state.apply_delivery(DOT) is None
        assert state.apply_delivery(WICKET) is None
        for _ in range(5):
            assert state.apply_delivery(DOT) is None
        assert state.apply_delivery(WICKET) == InningsEnd.ALL_OUT

        first = state.history[0]
        assert first.wickets == 2
        assert first.runs == 0
        assert first.end == InningsEnd.ALL_OUT
        assert state.current.batting_side is blue
        assert state.is_final_innings


class TestFollowOn:

    def test_enforced_at_exactly_150(self, two_innings, trios):
        red, blue = trios
        score_and_bowl_out(two_innings, 150)
        score_and_bowl_out(two_innings, 0)
        assert two_innings.follow_on_enforced
        assert two_innings.current.number == 3
        assert two_innings.current.batting_side is blue

    def test_not_enforced_one_run_short(self, two_innings, trios):
        red, blue = trios
        score_and_bowl_out(two_innings, 149)
        score_and_bowl_out(two_innings, 0)
        assert not two_innings.follow_on_enforced
        assert two_innings.current.batting_side is red

    def test_innings_victory_after_follow_on(self, two_innings, trios):
        score_and_bowl_out(two_innings, 150)
        score_and_bowl_out(two_innings, 0)
        score_and_bowl_out(two_innings, 0)
        assert two_innings.is_complete
        assert len(two_innings.history) == 3
        assert str(two_innings.result) == "Reds won by an innings and 150 runs"

    def test_follow_on_side_sets_a_target(self, two_innings, trios):
        red, blue = trios
        score_and_bowl_out(two_innings, 150)
        score_and_bowl_out(two_innings, 0)
        score_and_bowl_out(two_innings, 200)
        assert two_innings.current.batting_side is red
        assert two_innings.target == 51
        assert two_innings.apply_delivery(ran(51)) == InningsEnd.TARGET_REACHED
        assert str(two_innings.result) == "Reds won by 2 wickets"

    def test_never_for_formats_without_a_margin(self, trios):
        red, blue = trios
        fmt = MatchFormat(batters_per_side=3, follow_on_margin=None)
        state = MatchState(fmt, red, blue)
        score_and_bowl_out(state, 400)
        score_and_bowl_out(state, 0)
        assert not state.follow_on_enforced
        assert state.current.batting_side is red


class TestEarlyCall:

    def test_side_behind_after_third_innings_loses(self, two_innings):
        score_and_bowl_out(two_innings, 100)
        score_and_bowl_out(two_innings, 120)
        score_and_bowl_out(two_innings, 10)
        assert two_innings.is_complete
        assert two_innings.innings_victory
        assert str(two_innings.result) == "Blues won by an innings and 10 runs"

    def test_level_scores_play_the_final_innings(self, two_innings, trios):
        red, blue = trios
        score_and_bowl_out(two_innings, 100)
        score_and_bowl_out(two_innings, 120)
        score_and_bowl_out(two_innings, 20)
        assert not two_innings.is_complete
        assert two_innings.current.batting_side is blue
        assert two_innings.target == 1


class TestChase:

    @pytest.fixture
    def chasing(self, two_innings):
        score_and_bowl_out(two_innings, 10)
        score_and_bowl_out(two_innings, 20)
        score_and_bowl_out(two_innings, 20)
        return two_innings

    def test_target(self, chasing, trios):
        red, blue = trios
        assert chasing.is_final_innings
        assert chasing.current.batting_side is blue
        assert chasing.target == 11
        assert chasing.snapshot().target == 11

    def test_completes_mid_over(self, chasing):
        assert chasing.apply_delivery(DOT) is None
        assert chasing.apply_delivery(DOT) is None
        assert chasing.apply_delivery(ran(10)) is None  # level, not past
        assert chasing.apply_delivery(ran(1)) == InningsEnd.TARGET_REACHED

        last = chasing.history[-1]
        assert chasing.is_complete
        assert last.overs == 0
        assert last.balls == 4
        assert str(chasing.result) == "Blues won by 2 wickets"

        with pytest.raises(MatchCompleteError):
            chasing.apply_delivery(DOT)
        with pytest.raises(MatchCompleteError):
            chasing.declare()
        with pytest.raises(MatchCompleteError):
            chasing.snapshot()

    def test_winning_runs_and_last_wicket_on_one_ball(self, chasing):
        chasing.apply_delivery(WICKET)
        last_ball = DeliveryOutcome(runs=Runs.running(11), wicket=Dismissal(DismissalKind.RUN_OUT_STRIKER))
        chasing.apply_delivery(last_ball)
        assert chasing.is_complete
        assert chasing.history[-1].wickets == 2
        assert str(chasing.result) == "Blues won by 1 wicket"

    def test_extras_can_win_it(self, chasing):
        chasing.apply_delivery(ran(10))
        assert chasing.apply_delivery(DeliveryOutcome(extras=[Extra.wide()])) == InningsEnd.TARGET_REACHED

    def test_defended_total(self, chasing):
        score_and_bowl_out(chasing, 5)
        assert str(chasing.result) == "Reds won by 5 runs"

    def test_tie(self, chasing):
        score_and_bowl_out(chasing, 10)
        assert chasing.result.is_tie
        assert chasing.result.winner is None
        assert str(chasing.result) == "Match tied"


class TestDeclare:

    def test_declaration_closes_innings(self, side_a, side_b):
        state = MatchState(MatchFormat(), side_a, side_b)
        state.apply_delivery(ran(100))
        state.declare()
        assert state.history[0].end == InningsEnd.DECLARED
        assert state.history[0].wickets == 0
        assert state.current.batting_side is side_b
        assert state.team_score(side_a) == 100

    def test_declared_innings_is_frozen(self, side_a, side_b):
        state = MatchState(MatchFormat(), side_a, side_b)
        state.declare()
        with pytest.raises(MatchCompleteError):
            state.history[0].update(DOT)
        with pytest.raises(MatchCompleteError):
            state.history[0].striker
        with pytest.raises(MatchCompleteError):
            state.history[0].bowler

    def test_declaring_the_last_innings_ends_the_match(self, two_innings):
        score_and_bowl_out(two_innings, 10)
        score_and_bowl_out(two_innings, 20)
        score_and_bowl_out(two_innings, 20)
        two_innings.declare()
        assert two_innings.is_complete
        assert str(two_innings.result) == "Reds won by 10 runs"


class TestOversCap:

    def test_t20_innings_ends_after_twenty_overs(self, side_a, side_b):
        state = MatchState(MatchFormat.t20(), side_a, side_b)
        over_bowlers = []
        reason = None
        for _ in range(20):
            over_bowlers.append(state.current.bowler)
            for _ in range(6):
                reason = state.apply_delivery(DOT)
        assert reason == InningsEnd.OVERS

        first = state.history[0]
        assert first.overs == 20
        assert all(a != b for a, b in zip(over_bowlers, over_bowlers[1:]))
        assert all(spell.balls <= 24 for spell in first.bowling.spells)
        assert state.current.batting_side is side_b
        assert state.target == 1

    def test_odi_chase(self, side_a, side_b):
        state = MatchState(MatchFormat.odi(), side_a, side_b)
        state.apply_delivery(ran(7))
        state.declare()
        assert state.target == 8
        state.apply_delivery(ran(8))
        assert state.is_complete
        assert str(state.result) == "Blues won by 10 wickets"


class TestConditions:

    def test_ball_wear_counts_every_delivery(self, side_a, side_b):
        state = MatchState(MatchFormat(), side_a, side_b)
        state.apply_delivery(ran(3))
        state.apply_delivery(DeliveryOutcome(extras=[Extra.wide()]))
        ball = state.conditions.ball
        assert ball.deliveries == 2
        assert ball.runs == 3
        assert ball.ball_type == BallType.RED_LEATHER

    def test_new_ball_each_innings(self, side_a, side_b):
        state = MatchState(MatchFormat.t20(), side_a, side_b)
        state.apply_delivery(ran(2))
        state.declare()
        assert state.conditions.ball.deliveries == 0
        assert state.conditions.ball.ball_type == BallType.WHITE_LEATHER

    def test_snapshot_is_a_copy(self, side_a, side_b):
        state = MatchState(MatchFormat(), side_a, side_b)
        snapshot = state.snapshot()
        snapshot.conditions.ball.deliveries = 99
        assert state.conditions.ball.deliveries == 0
        assert snapshot.striker == side_a.players[0]
        assert snapshot.non_striker == side_a.players[1]
        assert snapshot.bowler == side_b.players[9]
        assert snapshot.fielders == side_b.players
