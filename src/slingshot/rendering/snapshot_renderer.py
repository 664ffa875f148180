from __future__ import annotations

from typing import TYPE_CHECKING

from slingshot.components.palette import shade
from slingshot.constants import BUBBLE_RADIUS

if TYPE_CHECKING:
    from slingshot.snapshot import RenderSnapshot

BAND_IDLE = (255, 255, 255, 102)
BAND_AIMING = (253, 216, 53, 255)
FRAME_COLOR = (97, 97, 97, 255)
TRAJECTORY_COLOR = (255, 255, 255, 178)


class SnapshotRenderer:
    """Draws a RenderSnapshot with arcade primitives.

    The core works in canvas space (y down); arcade's origin is bottom-left, so every
    y is flipped against the snapshot height.
    """

    def __init__(self, radius: float = BUBBLE_RADIUS):
        self._radius = radius

    def render(self, arcade, snapshot: RenderSnapshot) -> None:
        flip = snapshot.height

        for bubble in snapshot.bubbles:
            self._draw_bubble(arcade, bubble.x, flip - bubble.y, self._radius - 1, bubble.rgb)

        if snapshot.aiming and len(snapshot.trajectory) > 1:
            points = [(x, flip - y) for x, y in snapshot.trajectory]
            arcade.draw_line_strip(points, TRAJECTORY_COLOR, 4)
            if snapshot.impact is not None:
                ix, iy = snapshot.impact
                arcade.draw_circle_filled(ix, flip - iy, 5, TRAJECTORY_COLOR)

        ax, ay = snapshot.anchor
        ball = snapshot.projectile
        band = BAND_AIMING if snapshot.aiming else BAND_IDLE
        if not snapshot.flying:
            arcade.draw_line(ax - 35, flip - (ay - 10), ball.x, flip - ball.y, band, 5)
        self._draw_bubble(arcade, ball.x, flip - ball.y, self._radius, ball.rgb)
        if not snapshot.flying:
            arcade.draw_line(ball.x, flip - ball.y, ax + 35, flip - (ay - 10), band, 5)

        # Slingshot frame
        arcade.draw_line(ax, 0, ax, flip - (ay + 40), FRAME_COLOR, 10)
        arcade.draw_line(ax, flip - (ay + 40), ax - 40, flip - ay, FRAME_COLOR, 10)
        arcade.draw_line(ax, flip - (ay + 40), ax + 40, flip - ay, FRAME_COLOR, 10)

        for particle in snapshot.particles:
            alpha = max(0, min(255, int(particle.life * 255)))
            arcade.draw_circle_filled(particle.x, flip - particle.y, 5, (*particle.rgb, alpha))

        arcade.draw_text(f"Score: {snapshot.score}", 16, flip - 32, (255, 255, 255, 255), 18)
        arcade.draw_text(
            f"Next: {snapshot.next_color}",
            16,
            flip - 58,
            (200, 200, 200, 255),
            12,
        )

    @staticmethod
    def _draw_bubble(arcade, x: float, y: float, radius: float, rgb) -> None:
        arcade.draw_circle_filled(x, y, radius, (*shade(rgb, -60), 255))
        arcade.draw_circle_filled(x, y, radius * 0.8, (*rgb, 255))
        arcade.draw_circle_filled(x - radius * 0.3, y + radius * 0.35, radius * 0.2, (255, 255, 255, 77))
        arcade.draw_circle_outline(x, y, radius, (*shade(rgb, -80), 255), 1)
