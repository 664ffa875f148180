from dataclasses import dataclass, field
from typing import Dict, List, Tuple

RGB = Tuple[int, int, int]


@dataclass(slots=True)
class ColorSpec:
    display: RGB
    points: int
    label: str


@dataclass(slots=True)
class Palette:
    """Canonical bubble colours stored on a single entity.

    ``order`` is the rank order (cheapest first). Anything that draws from a set of
    colours iterates in this order so seeded runs replay identically.
    """
    colors: Dict[str, ColorSpec]
    order: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.order:
            self.order = list(self.colors.keys())
        self.order = [name for name in self.order if name in self.colors]

    def names(self) -> List[str]:
        return list(self.order)

    def points_for(self, color: str) -> int:
        return self.colors[color].points

    def display_for(self, color: str) -> RGB:
        return self.colors[color].display

    def ordered(self, names) -> List[str]:
        wanted = set(names)
        return [name for name in self.order if name in wanted]


def default_palette() -> Palette:
    return Palette(
        colors={
            'red':    ColorSpec((239, 83, 80), 100, 'Red'),       # #ef5350
            'blue':   ColorSpec((66, 165, 245), 150, 'Blue'),     # #42a5f5
            'green':  ColorSpec((102, 187, 106), 200, 'Green'),   # #66bb6a
            'yellow': ColorSpec((255, 238, 88), 250, 'Yellow'),   # #ffee58
            'purple': ColorSpec((171, 71, 188), 300, 'Purple'),   # #ab47bc
            'orange': ColorSpec((255, 167, 38), 500, 'Orange'),   # #ffa726
        },
        order=['red', 'blue', 'green', 'yellow', 'purple', 'orange'],
    )


def shade(color: RGB, amount: int) -> RGB:
    """Offset every channel by ``amount``, clamped to 0..255."""
    r, g, b = color
    return (
        max(0, min(255, r + amount)),
        max(0, min(255, g + amount)),
        max(0, min(255, b + amount)),
    )
