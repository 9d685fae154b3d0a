"""
Conditions of a match such as weather and the state of the ball.
"""
import enum
from dataclasses import dataclass, field

from crease.engine.delivery import DeliveryOutcome


class BallType(enum.Enum):
    RED_LEATHER = "red_leather"      # multi-innings matches
    WHITE_LEATHER = "white_leather"  # limited overs, visible under lights


@dataclass
class Ball:
    ball_type: BallType = BallType.RED_LEATHER
    deliveries: int = 0  # proxy for wear from scuffing the pitch
    runs: int = 0        # proxy for wear from being hit

    def record(self, outcome: DeliveryOutcome):
        self.deliveries += 1
        self.runs += outcome.runs.total


@dataclass
class Weather:
    overcast: bool = False


@dataclass
class Conditions:
    ball: Ball = field(default_factory=Ball)
    weather: Weather = field(default_factory=Weather)

    def new_ball(self):
        self.ball = Ball(ball_type=self.ball.ball_type)
