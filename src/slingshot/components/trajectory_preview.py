from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Point = Tuple[float, float]


@dataclass(slots=True)
class TrajectoryPreview:
    """Predicted flight path while aiming; empty whenever the ball is not being aimed."""
    points: List[Point] = field(default_factory=list)
    impact: Optional[Point] = None

    def clear(self) -> None:
        self.points = []
        self.impact = None
