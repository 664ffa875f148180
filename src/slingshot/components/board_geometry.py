from dataclasses import dataclass

from slingshot.constants import GRID_COLS, GRID_ROWS, SLINGSHOT_BOTTOM_OFFSET

@dataclass(slots=True)
class BoardGeometry:
    width: int
    height: int
    rows: int = GRID_ROWS
    cols: int = GRID_COLS

    @property
    def anchor(self) -> tuple[float, float]:
        return (self.width / 2, self.height - SLINGSHOT_BOTTOM_OFFSET)

    def contains(self, x: float, y: float) -> bool:
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height
