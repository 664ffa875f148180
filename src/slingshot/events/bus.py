from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not stored in a variable keep receiving events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float
EVENT_BOARD_RESIZED = "board_resized"              # payload: width=int, height=int, anchor=(x,y)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_POINTER_RAW = "pointer_raw"                  # payload: x, y, grab (any of them may be missing or malformed)
EVENT_POINTER_SAMPLE = "pointer_sample"            # payload: pointer=PointerSample|None, grab=bool


# ============================================================================
# SLINGSHOT & FLIGHT
# ============================================================================
EVENT_AIM_STARTED = "aim_started"                  # payload: x, y
EVENT_AIM_CANCELLED = "aim_cancelled"              # payload: stretch=float
EVENT_PROJECTILE_LAUNCHED = "projectile_launched"  # payload: vx, vy, stretch=float
EVENT_PROJECTILE_COLLIDED = "projectile_collided"  # payload: x, y, reason=str ('ceiling'|'bubble')
EVENT_PROJECTILE_RESET = "projectile_reset"        # payload: reason=str ('placed'|'missed'|'timeout'|'placement_failed'|'cancelled')


# ============================================================================
# GRID & MATCHES
# ============================================================================
EVENT_BUBBLE_PLACED = "bubble_placed"              # payload: entity=int, row, col, color=str
EVENT_PLACEMENT_FAILED = "placement_failed"        # payload: x, y
EVENT_MATCH_FOUND = "match_found"                  # payload: entities=[int], positions=[(r,c)], color=str, points=int, combo=bool
EVENT_BUBBLE_POPPED = "bubble_popped"              # payload: entity=int, x, y, color=str
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_COLOR_QUEUE_ADVANCED = "color_queue_advanced"  # payload: current=str, next=str
