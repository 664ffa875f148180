from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: Tuple[int, int, int]
    life: float = 1.0
