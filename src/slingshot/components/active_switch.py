from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-bubble liveness flag.

    active: True while the bubble sits on the board; False once it has been popped.
    Bubbles are never removed from the world, so entity ids stay valid after a pop.
    """
    active: bool = True
