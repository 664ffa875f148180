from dataclasses import dataclass

@dataclass(slots=True)
class ColorQueue:
    """Colour of the loaded ball and the one after it."""
    current: str
    next: str
