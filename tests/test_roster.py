"""
Tests for squad generation, roster storage and loading sides from the database.
"""
import random

import pytest

from crease.engine.formats import MatchFormat
from crease.engine.match_state import MatchState
from crease.engine.outcome_models import NaiveStatsModel, NaiveStatsRating
from crease.engine.registry import PlayerDb
from crease.engine.simulator import simulate_match
from crease.errors import MissingDataError
from crease.generators import PlayerGenerator, TeamGenerator
from crease.generators.team_generator import FICTIONAL_TEAMS
from crease.models import PlayerRole, Team
from crease.roster import find_team, load_side


@pytest.fixture
def saved_teams(test_db):
    return TeamGenerator.save_teams(test_db, TeamGenerator.create_teams(2))


class TestPlayerGenerator:

    def test_xi_in_batting_order(self):
        xi = PlayerGenerator.generate_xi()
        assert [p.batting_position for p in xi] == list(range(1, 12))
        assert [p.role for p in xi] == PlayerGenerator.XI_ROLES
        assert sum(1 for p in xi if p.role == PlayerRole.WICKET_KEEPER) == 1

    def test_figures_are_valid_ratings(self):
        for _ in range(20):
            player = PlayerGenerator.generate_player(PlayerRole.BOWLER, 11)
            rating = player.rating
            assert isinstance(rating, NaiveStatsRating)
            assert min(rating.bat_avg, rating.bat_sr, rating.bowl_avg, rating.bowl_sr) >= 1.0
            assert player.nationality in {n for n, _, _ in PlayerGenerator.NATIONALITIES}

    def test_bowlers_bowl_better_than_batters(self):
        batter = PlayerGenerator.ROLE_FIGURES[PlayerRole.BATSMAN]
        bowler = PlayerGenerator.ROLE_FIGURES[PlayerRole.BOWLER]
        assert bowler[2] < batter[2]
        assert bowler[0] < batter[0]


class TestTeamGenerator:

    def test_create_teams(self):
        teams = TeamGenerator.create_teams(3)
        assert [t.short_name for t in teams] == [d["short_name"] for d in FICTIONAL_TEAMS[:3]]
        assert all(t.squad_size == 11 for t in teams)

    @pytest.mark.parametrize("count", [0, 1, len(FICTIONAL_TEAMS) + 1])
    def test_invalid_count(self, count):
        with pytest.raises(ValueError):
            TeamGenerator.create_teams(count)

    def test_save_teams(self, test_db, saved_teams):
        assert all(t.id is not None for t in saved_teams)
        assert test_db.query(Team).count() == 2
        assert len(saved_teams[0].players) == 11


class TestFindTeam:

    def test_by_short_name(self, test_db, saved_teams):
        assert find_team(test_db, "mt").name == "Mumbai Titans"

    def test_by_id(self, test_db, saved_teams):
        team = saved_teams[1]
        assert find_team(test_db, str(team.id)) is team

    def test_missing(self, test_db, saved_teams):
        assert find_team(test_db, "ZZ") is None
        assert find_team(test_db, "999") is None


class TestLoadSide:

    def test_players_registered_in_batting_order(self, saved_teams):
        team = saved_teams[0]
        registry = PlayerDb()
        side = load_side(team, registry)
        assert side.name == team.name
        assert len(side.players) == 11
        assert [registry.name_of(i) for i in side.players] == [p.name for p in team.players]
        assert isinstance(registry.get(side.players[0]).rating, NaiveStatsRating)
        assert side.bowlers == side.players[5:11]

    def test_two_teams_share_a_registry(self, saved_teams):
        registry = PlayerDb()
        home = load_side(saved_teams[0], registry)
        away = load_side(saved_teams[1], registry)
        assert not set(home.players) & set(away.players)
        assert len(registry) == 22

    def test_short_squad(self, test_db):
        team = Team(name="Minnows", short_name="MIN", city="Nowhere", home_ground="Village Green")
        team.players = [PlayerGenerator.generate_player(PlayerRole.BATSMAN, i) for i in range(1, 6)]
        TeamGenerator.save_teams(test_db, [team])
        with pytest.raises(MissingDataError):
            load_side(team, PlayerDb())

    def test_loaded_sides_play_a_match(self, saved_teams):
        registry = PlayerDb()
        home, away = (load_side(t, registry) for t in saved_teams)
        state = MatchState(MatchFormat.t20(), home, away)
        simulate_match(state, NaiveStatsModel(), registry, rng=random.Random(17))
        assert state.is_complete
        assert str(state.result)
