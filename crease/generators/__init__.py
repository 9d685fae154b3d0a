from crease.generators.player_generator import PlayerGenerator
from crease.generators.team_generator import TeamGenerator

__all__ = ["PlayerGenerator", "TeamGenerator"]
