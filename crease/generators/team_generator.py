"""
Team Generator - creates fictional first-class sides with full XIs
"""
from sqlalchemy.orm import Session

from crease.generators.player_generator import PlayerGenerator
from crease.models.team import Team


# Fictional county-style sides
FICTIONAL_TEAMS = [
    {
        "name": "Mumbai Titans",
        "short_name": "MT",
        "city": "Mumbai",
        "home_ground": "Wankhede Stadium",
    },
    {
        "name": "Chennai Kings",
        "short_name": "CK",
        "city": "Chennai",
        "home_ground": "M.A. Chidambaram Stadium",
    },
    {
        "name": "Yorkshire Vikings",
        "short_name": "YV",
        "city": "Leeds",
        "home_ground": "Headingley",
    },
    {
        "name": "Sydney Sixers",
        "short_name": "SS",
        "city": "Sydney",
        "home_ground": "Sydney Cricket Ground",
    },
    {
        "name": "Cape Cobras",
        "short_name": "CC",
        "city": "Cape Town",
        "home_ground": "Newlands",
    },
    {
        "name": "Wellington Firebirds",
        "short_name": "WF",
        "city": "Wellington",
        "home_ground": "Basin Reserve",
    },
]


class TeamGenerator:
    """Generates the fictional teams and their squads"""

    @classmethod
    def create_teams(cls, count: int = len(FICTIONAL_TEAMS)) -> list[Team]:
        """
        Create teams with a generated XI each.

        Args:
            count: How many of the fictional teams to create

        Returns:
            List of Team objects (not yet saved to DB)
        """
        if not 2 <= count <= len(FICTIONAL_TEAMS):
            raise ValueError(f"count must be between 2 and {len(FICTIONAL_TEAMS)}")
        teams = []
        for team_data in FICTIONAL_TEAMS[:count]:
            team = Team(**team_data)
            team.players = PlayerGenerator.generate_xi()
            teams.append(team)
        return teams

    @classmethod
    def save_teams(cls, session: Session, teams: list[Team]) -> list[Team]:
        """Save teams (and their players) and return them with IDs"""
        for team in teams:
            session.add(team)
        session.commit()
        for team in teams:
            session.refresh(team)
        return teams
