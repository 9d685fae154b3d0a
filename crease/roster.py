"""
Turns stored teams into engine sides backed by a player registry.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from crease.engine.registry import PlayerDb
from crease.engine.side import Side
from crease.errors import MissingDataError
from crease.models.team import Team

logger = logging.getLogger(__name__)


def find_team(session: Session, key: str) -> Optional[Team]:
    """Look a team up by id or short name"""
    if key.isdigit():
        return session.get(Team, int(key))
    return session.query(Team).filter(Team.short_name == key.upper()).first()


def load_side(team: Team, registry: PlayerDb, batters_per_side: int = 11) -> Side:
    """
    Register the team's players and return the side in batting order.
    Registry ids are assigned fresh; database ids are not reused.
    """
    players = sorted(team.players, key=lambda p: p.batting_position)
    if len(players) < batters_per_side:
        raise MissingDataError(
            f"{team.short_name} has {len(players)} players, {batters_per_side} needed"
        )
    ids = [registry.add(p.name, p.rating).id for p in players[:batters_per_side]]
    logger.debug("Loaded %s with %d players", team.short_name, len(ids))
    return Side(name=team.name, players=tuple(ids))
