from crease.engine.delivery import DeliveryOutcome, Dismissal, DismissalKind, Extra, ExtraKind, Runs, RunsKind
from crease.engine.formats import MatchFormat, get_format
from crease.engine.innings import InningsEnd, InningsStats
from crease.engine.match_state import MatchResult, MatchSnapshot, MatchState
from crease.engine.outcome_models import DeliveryModel, NaiveStatsModel, NaiveStatsRating, NullModel, get_model
from crease.engine.registry import Player, PlayerDb
from crease.engine.side import Side
from crease.engine.simulator import replay, simulate_match

__all__ = [
    "DeliveryOutcome",
    "Dismissal",
    "DismissalKind",
    "Extra",
    "ExtraKind",
    "Runs",
    "RunsKind",
    "MatchFormat",
    "get_format",
    "InningsEnd",
    "InningsStats",
    "MatchResult",
    "MatchSnapshot",
    "MatchState",
    "DeliveryModel",
    "NaiveStatsModel",
    "NaiveStatsRating",
    "NullModel",
    "get_model",
    "Player",
    "PlayerDb",
    "Side",
    "replay",
    "simulate_match",
]
