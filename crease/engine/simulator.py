"""
Drives a match to completion: snapshot -> delivery model -> apply.
"""
import logging
import random
from typing import Callable, Iterable, List, Optional

from crease.engine.delivery import DeliveryOutcome
from crease.engine.formats import MatchFormat
from crease.engine.match_state import MatchState
from crease.engine.outcome_models import DeliveryModel, resolve_snapshot
from crease.engine.registry import PlayerDb
from crease.engine.side import Side

logger = logging.getLogger(__name__)

DeclarePolicy = Callable[[MatchState], bool]


def declare_at_lead(lead: int) -> DeclarePolicy:
    """
    Declare once the batting side leads by ``lead`` runs, except in the final
    innings where declaring would only concede the match.
    """
    def policy(state: MatchState) -> bool:
        innings = state.current
        if state.is_final_innings:
            return False
        batting = state.team_score(innings.batting_side)
        bowling = state.team_score(innings.bowling_side)
        return batting - bowling >= lead
    return policy


def simulate_match(
    state: MatchState,
    model: DeliveryModel,
    registry: PlayerDb,
    rng: Optional[random.Random] = None,
    declare_when: Optional[DeclarePolicy] = None,
    log: Optional[List[Optional[DeliveryOutcome]]] = None,
) -> MatchState:
    """
    Bowl deliveries until the match is complete. If ``log`` is given every
    outcome is appended to it, with None marking a declaration.
    """
    rng = rng or random.Random()
    deliveries = 0
    while not state.is_complete:
        if declare_when is not None and declare_when(state):
            logger.info("%s declare", state.current.batting_side.name)
            state.declare()
            if log is not None:
                log.append(None)
            continue
        snapshot = resolve_snapshot(state.snapshot(), registry)
        outcome = model.generate_delivery(rng, snapshot)
        state.apply_delivery(outcome)
        deliveries += 1
        if log is not None:
            log.append(outcome)
    logger.info("Simulated %d deliveries: %s", deliveries, state.result)
    return state


def replay(
    match_format: MatchFormat,
    side_a: Side,
    side_b: Side,
    outcomes: Iterable[Optional[DeliveryOutcome]],
) -> MatchState:
    """Rebuild a match from an ordered delivery log (None = declaration)"""
    state = MatchState(match_format, side_a, side_b)
    for outcome in outcomes:
        if outcome is None:
            state.declare()
        else:
            state.apply_delivery(outcome)
    return state
