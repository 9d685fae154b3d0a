"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Optional

from crease.engine.delivery import (
    DeliveryOutcome, Dismissal, DismissalKind, Extra, ExtraKind, Runs, RunsKind,
)


# Format Schemas
class FormatResponse(BaseModel):
    name: str
    innings: int
    overs_per_innings: Optional[int] = None
    balls_per_over: int
    batters_per_side: int
    follow_on_margin: Optional[int] = None
    max_overs_per_bowler: Optional[int] = None

    class Config:
        from_attributes = True


# Delivery Schemas
class RunsSchema(BaseModel):
    kind: RunsKind = RunsKind.RUNNING
    ran: int = Field(default=0, ge=0)

    def to_runs(self) -> Runs:
        return Runs(self.kind, self.ran)


class ExtraSchema(BaseModel):
    kind: ExtraKind
    runs: RunsSchema = Field(default_factory=RunsSchema)  # byes and leg-byes only
    penalty: int = Field(default=0, ge=0)

    def to_extra(self) -> Extra:
        return Extra(self.kind, runs=self.runs.to_runs(), penalty=self.penalty)


class DismissalSchema(BaseModel):
    kind: DismissalKind
    bowler: Optional[int] = None
    fielder: Optional[int] = None


class DeliveryRequest(BaseModel):
    runs: RunsSchema = Field(default_factory=RunsSchema)
    extras: list[ExtraSchema] = []
    wicket: Optional[DismissalSchema] = None

    def to_outcome(self) -> DeliveryOutcome:
        wicket = None
        if self.wicket is not None:
            wicket = Dismissal(self.wicket.kind, bowler=self.wicket.bowler, fielder=self.wicket.fielder)
        return DeliveryOutcome(
            runs=self.runs.to_runs(),
            extras=[e.to_extra() for e in self.extras],
            wicket=wicket,
        )


# Match Schemas
class StartMatchRequest(BaseModel):
    team1: str  # id or short name; bats first
    team2: str
    format: Optional[str] = None


class SimulateRequest(BaseModel):
    model: Optional[str] = None
    seed: Optional[int] = None
    declare_lead: Optional[int] = Field(default=None, gt=0)


class PlayerStateBrief(BaseModel):
    id: int
    name: str
    runs: int
    balls: int


class BowlerStateBrief(BaseModel):
    id: int
    name: str
    overs: str
    maidens: int
    runs: int
    wickets: int


class InningsSummary(BaseModel):
    number: int
    batting_side: str
    runs: int
    wickets: int
    overs: str
    extras: int
    end: Optional[str] = None


class MatchStateResponse(BaseModel):
    match_id: int
    format: str
    is_complete: bool
    innings: Optional[int] = None
    batting_side: Optional[str] = None
    bowling_side: Optional[str] = None
    runs: Optional[int] = None
    wickets: Optional[int] = None
    overs: Optional[str] = None
    target: Optional[int] = None
    striker: Optional[PlayerStateBrief] = None
    non_striker: Optional[PlayerStateBrief] = None
    bowler: Optional[BowlerStateBrief] = None
    team_scores: dict[str, int]
    completed_innings: list[InningsSummary]
    follow_on_enforced: bool
    result: Optional[str] = None


# Scorecard Schemas
class BattingLineResponse(BaseModel):
    name: str
    dismissal: str
    runs: int
    balls: int
    fours: int
    sixes: int
    strike_rate: str

    class Config:
        from_attributes = True


class BowlingLineResponse(BaseModel):
    name: str
    overs: str
    maidens: int
    runs: int
    wickets: int
    economy: str

    class Config:
        from_attributes = True


class InningsCardResponse(BaseModel):
    number: int
    batting_side: str
    total: str
    extras: int
    batting: list[BattingLineResponse]
    bowling: list[BowlingLineResponse]


class ScorecardResponse(BaseModel):
    match_id: int
    innings: list[InningsCardResponse]
    totals: list[str]
    result: Optional[str] = None
