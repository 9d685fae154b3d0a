from typing import Optional
from sqlalchemy import String, Integer, Float, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum
from crease.database import Base
from crease.engine.outcome_models import NaiveStatsRating


class PlayerRole(enum.Enum):
    BATSMAN = "batsman"
    BOWLER = "bowler"
    ALL_ROUNDER = "all_rounder"
    WICKET_KEEPER = "wicket_keeper"


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    age: Mapped[int] = mapped_column(Integer)
    nationality: Mapped[str] = mapped_column(String(50))
    role: Mapped[PlayerRole] = mapped_column(Enum(PlayerRole))

    # 1-based slot in the team's batting order; 6-11 form the bowling attack
    batting_position: Mapped[int] = mapped_column(Integer)

    # Career figures used by the naive stats model
    bat_avg: Mapped[float] = mapped_column(Float)  # runs per dismissal
    bat_sr: Mapped[float] = mapped_column(Float)   # runs per 100 balls
    bowl_avg: Mapped[float] = mapped_column(Float)  # runs per wicket
    bowl_sr: Mapped[float] = mapped_column(Float)   # balls per wicket

    team_id: Mapped[Optional[int]] = mapped_column(ForeignKey("teams.id"), nullable=True)
    team: Mapped["Team"] = relationship("Team", back_populates="players")

    @property
    def rating(self) -> NaiveStatsRating:
        return NaiveStatsRating(
            bat_avg=self.bat_avg,
            bat_sr=self.bat_sr,
            bowl_avg=self.bowl_avg,
            bowl_sr=self.bowl_sr,
        )

    def __repr__(self):
        return f"<Player {self.name} ({self.role.value}) - #{self.batting_position}>"
