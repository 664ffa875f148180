from dataclasses import dataclass

@dataclass(slots=True)
class Score:
    value: int = 0
