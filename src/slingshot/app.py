"""Arcade window for the slingshot bubble shooter.

The mouse stands in for the tracked hand: holding the left button is the grab
signal and the cursor is the pointer.
"""
import arcade
from arcade import Window, run, set_background_color, color

from slingshot.game import Game, TickInput, advance
from slingshot.rendering.snapshot_renderer import SnapshotRenderer
from slingshot.utils.pointer_filter import PointerSample


class SlingshotWindow(Window):
    def __init__(self, width: int = 800, height: int = 900):
        super().__init__(width, height, "Slingshot Bubbles", resizable=True)
        self.set_update_rate(1/60)
        self.game = Game(width, height)
        self.renderer = SnapshotRenderer()
        self.snapshot = self.game.snapshot()
        self._pointer: PointerSample | None = None
        self._grab = False
        set_background_color(color.BLACK)

    def _to_canvas(self, x: float, y: float) -> PointerSample:
        return PointerSample(x, self.height - y)

    def on_draw(self):
        self.clear()
        self.renderer.render(arcade, self.snapshot)

    def on_update(self, delta_time: float):
        tick = TickInput(
            pointer=self._pointer,
            grab_active=self._grab,
            width=self.width,
            height=self.height,
            dt=delta_time,
        )
        self.game, self.snapshot = advance(self.game, tick)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self._pointer = self._to_canvas(x, y)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self._pointer = self._to_canvas(x, y)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self._pointer = self._to_canvas(x, y)
        if button == arcade.MOUSE_BUTTON_LEFT:
            self._grab = True

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self._pointer = self._to_canvas(x, y)
        if button == arcade.MOUSE_BUTTON_LEFT:
            self._grab = False


def main():
    SlingshotWindow()
    run()


if __name__ == "__main__":
    main()
