from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class FlightState(Enum):
    RESTING = auto()
    AIMING = auto()
    FLYING = auto()


@dataclass(slots=True)
class Projectile:
    """The single loaded ball. Position is canvas space (y grows downward)."""
    x: float
    y: float
    color: str
    vx: float = 0.0
    vy: float = 0.0
    state: FlightState = FlightState.RESTING
    flight_started_at: Optional[float] = None

    def reset(self, anchor: tuple[float, float]) -> None:
        self.x, self.y = anchor
        self.vx = 0.0
        self.vy = 0.0
        self.state = FlightState.RESTING
        self.flight_started_at = None
