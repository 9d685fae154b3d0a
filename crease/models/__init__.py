from crease.models.player import Player, PlayerRole
from crease.models.team import Team

__all__ = [
    "Player",
    "PlayerRole",
    "Team",
]
