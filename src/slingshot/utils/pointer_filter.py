from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class PointerSample:
	"""A tracked pointer position in canvas pixels (y grows downward)."""

	x: float
	y: float


@dataclass(slots=True)
class PointerFilter:
	"""Discards pointer samples the simulation must not act on.

	A sample is rejected when either coordinate is missing, non-numeric or not
	finite, or when it lies outside the board rectangle (with ``margin`` slack).
	Rejected samples count as "no pointer" for the tick.
	"""

	margin: float = 0.0
	rejected: int = field(init=False, default=0)

	def accept(self, x: Any, y: Any, width: float, height: float) -> Optional[PointerSample]:
		if x is None or y is None:
			return None
		try:
			xf = float(x)
			yf = float(y)
		except (TypeError, ValueError):
			self.rejected += 1
			return None
		if not (math.isfinite(xf) and math.isfinite(yf)):
			self.rejected += 1
			return None
		if xf < -self.margin or xf > width + self.margin:
			self.rejected += 1
			return None
		if yf < -self.margin or yf > height + self.margin:
			self.rejected += 1
			return None
		return PointerSample(xf, yf)

	def reset(self) -> None:
		self.rejected = 0
