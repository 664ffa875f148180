from dataclasses import dataclass

@dataclass(slots=True)
class Bubble:
    """Grid cell assignment plus the cached pixel centre of that cell.

    The entity id doubles as the bubble id. Liveness is tracked by ActiveSwitch.
    """
    row: int
    col: int
    x: float
    y: float
    color: str

    @property
    def cell(self) -> tuple[int, int]:
        return (self.row, self.col)
