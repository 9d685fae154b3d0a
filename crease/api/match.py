"""
Interactive match API - start a match, bowl it ball by ball or simulate it out
"""
import itertools
import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from crease.api.schemas import (
    BattingLineResponse, BowlerStateBrief, BowlingLineResponse, DeliveryRequest,
    InningsCardResponse, InningsSummary, MatchStateResponse, PlayerStateBrief,
    ScorecardResponse, SimulateRequest, StartMatchRequest,
)
from crease.config import settings
from crease.database import get_db
from crease.engine.formats import get_format
from crease.engine.innings import InningsStats
from crease.engine.match_state import MatchState
from crease.engine.outcome_models import get_model
from crease.engine.registry import PlayerDb
from crease.engine.simulator import declare_at_lead, simulate_match
from crease.errors import MatchCompleteError, MissingDataError, PlayerNotFoundError
from crease.roster import find_team, load_side
from crease.scorecard import batting_card, bowling_card, innings_total, match_totals

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["Interactive Match"])


@dataclass
class ActiveMatch:
    state: MatchState
    registry: PlayerDb
    # Handlers run in a threadpool; one request at a time may touch the state
    lock: threading.Lock = field(default_factory=threading.Lock)


# In-memory store for active matches, lost on restart
active_matches: Dict[int, ActiveMatch] = {}
_match_ids = itertools.count(1)


def _get_match(match_id: int) -> ActiveMatch:
    match = active_matches.get(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Active match session not found")
    return match


def _innings_summary(innings: InningsStats) -> InningsSummary:
    return InningsSummary(
        number=innings.number,
        batting_side=innings.batting_side.name,
        runs=innings.runs,
        wickets=innings.wickets,
        overs=innings.overs_display,
        extras=innings.extras,
        end=innings.end.value if innings.end else None,
    )


def _build_state_response(match_id: int, match: ActiveMatch) -> MatchStateResponse:
    """Convert match state to API response"""
    state, registry = match.state, match.registry
    response = MatchStateResponse(
        match_id=match_id,
        format=state.format.name,
        is_complete=state.is_complete,
        team_scores={side.name: state.team_score(side) for side in state.sides},
        completed_innings=[_innings_summary(i) for i in state.history],
        follow_on_enforced=state.follow_on_enforced,
        result=str(state.result) if state.result else None,
    )
    innings = state.current
    if innings is None:
        return response

    response.innings = innings.number
    response.batting_side = innings.batting_side.name
    response.bowling_side = innings.bowling_side.name
    response.runs = innings.runs
    response.wickets = innings.wickets
    response.overs = innings.overs_display
    response.target = state.target

    batters = {b.player_id: b for b in innings.batting.batters}
    for field, player_id in (("striker", innings.striker), ("non_striker", innings.non_striker)):
        batter = batters[player_id]
        setattr(response, field, PlayerStateBrief(
            id=player_id,
            name=registry.name_of(player_id),
            runs=batter.runs,
            balls=batter.balls,
        ))

    try:
        bowler_id = innings.bowler
    except MissingDataError:
        # Rotation ran dry at the end of the last over
        return response
    spell = innings.bowling.spell_for(bowler_id)
    response.bowler = BowlerStateBrief(
        id=bowler_id,
        name=registry.name_of(bowler_id),
        overs=spell.overs_display(innings.balls_per_over),
        maidens=spell.maidens,
        runs=spell.runs,
        wickets=spell.wickets,
    )
    return response


@router.post("", response_model=MatchStateResponse, status_code=201)
def start_match(request: StartMatchRequest, db: Session = Depends(get_db)):
    """Start a match between two stored teams. team1 bats first."""
    try:
        match_format = get_format(request.format or settings.DEFAULT_FORMAT)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    teams = []
    for key in (request.team1, request.team2):
        team = find_team(db, key)
        if team is None:
            raise HTTPException(status_code=404, detail=f"Team {key} not found")
        teams.append(team)
    if teams[0].id == teams[1].id:
        raise HTTPException(status_code=400, detail="A team cannot play itself")

    registry = PlayerDb()
    try:
        sides = [load_side(team, registry, match_format.batters_per_side) for team in teams]
        state = MatchState(match_format, *sides)
    except MissingDataError as e:
        raise HTTPException(status_code=400, detail=str(e))

    match_id = next(_match_ids)
    active_matches[match_id] = ActiveMatch(state=state, registry=registry)
    logger.info("Match %d started: %s v %s (%s)", match_id, sides[0].name, sides[1].name, match_format.name)
    return _build_state_response(match_id, active_matches[match_id])


@router.get("/{match_id}", response_model=MatchStateResponse)
def get_match_state(match_id: int):
    """Get current match state"""
    match = _get_match(match_id)
    with match.lock:
        return _build_state_response(match_id, match)


@router.post("/{match_id}/deliveries", response_model=MatchStateResponse)
def bowl_delivery(match_id: int, request: DeliveryRequest):
    """Apply one delivery outcome chosen by the caller"""
    match = _get_match(match_id)
    with match.lock:
        try:
            outcome = request.to_outcome()
            if outcome.wicket is not None:
                # Credited players must exist before anything is recorded
                for player_id in (outcome.wicket.bowler, outcome.wicket.fielder):
                    if player_id is not None:
                        match.registry.get(player_id)
            match.state.apply_delivery(outcome)
        except MatchCompleteError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except (MissingDataError, PlayerNotFoundError, ValueError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _build_state_response(match_id, match)


@router.post("/{match_id}/declare", response_model=MatchStateResponse)
def declare_innings(match_id: int):
    """Batting side declares its innings closed"""
    match = _get_match(match_id)
    with match.lock:
        try:
            match.state.declare()
        except MatchCompleteError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _build_state_response(match_id, match)


@router.post("/{match_id}/simulate", response_model=MatchStateResponse)
def simulate_remaining(match_id: int, request: Optional[SimulateRequest] = None):
    """Simulate the rest of the match with a delivery model"""
    match = _get_match(match_id)
    request = request or SimulateRequest()
    try:
        model = get_model(request.model or settings.DEFAULT_MODEL)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    declare_when = declare_at_lead(request.declare_lead) if request.declare_lead else None

    with match.lock:
        if match.state.is_complete:
            raise HTTPException(status_code=409, detail="Match is complete")
        try:
            simulate_match(
                match.state,
                model,
                match.registry,
                rng=random.Random(request.seed),
                declare_when=declare_when,
            )
        except MissingDataError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _build_state_response(match_id, match)


@router.get("/{match_id}/scorecard", response_model=ScorecardResponse)
def get_scorecard(match_id: int):
    """Batting and bowling cards for every innings so far"""
    match = _get_match(match_id)
    with match.lock:
        state, registry = match.state, match.registry
        innings_list = list(state.history)
        if state.current is not None:
            innings_list.append(state.current)

        cards = [
            InningsCardResponse(
                number=innings.number,
                batting_side=innings.batting_side.name,
                total=innings_total(innings),
                extras=innings.extras,
                batting=[BattingLineResponse.model_validate(line) for line in batting_card(innings, registry)],
                bowling=[BowlingLineResponse.model_validate(line) for line in bowling_card(innings, registry)],
            )
            for innings in innings_list
        ]
        return ScorecardResponse(
            match_id=match_id,
            innings=cards,
            totals=match_totals(state),
            result=str(state.result) if state.result else None,
        )


@router.delete("/{match_id}", status_code=204)
def abandon_match(match_id: int):
    """Drop an active match session"""
    _get_match(match_id)
    del active_matches[match_id]
    logger.info("Match %d abandoned", match_id)
