"""
Simulated pointer for the simulator.

Mouse button state from the window is turned into one PointerSample
per frame.
"""

from ...core.geometry import Vec2
from ...core.gestures import PointerSample


class SimulatedPointer:
    """
    Single pointer with down/held/up semantics.

    The window reports raw mouse events in top-left pixel coordinates;
    samples are produced with a bottom-left origin. A press and release
    inside one frame still yields a down edge on that frame.
    """

    def __init__(self, screen_height: int = 0) -> None:
        self.screen_height = screen_height
        self._pressed = False
        self._went_down = False
        self._position = Vec2()

    @property
    def position(self) -> Vec2:
        """Latest position, bottom-left origin."""
        return self._position

    def _flip(self, x: float, y: float) -> Vec2:
        return Vec2(float(x), float(self.screen_height - y))

    def _move(self, x: float, y: float) -> None:
        """Called by simulator on mouse motion."""
        self._position = self._flip(x, y)

    def _press(self, x: float, y: float) -> None:
        """Called by simulator when the button goes down."""
        self._position = self._flip(x, y)
        if not self._pressed:
            self._pressed = True
            self._went_down = True

    def _release(self, x: float, y: float) -> None:
        """Called by simulator when the button goes up."""
        self._position = self._flip(x, y)
        self._pressed = False

    def sample(self) -> PointerSample:
        """Consume this frame's state."""
        sample = PointerSample(
            position=self._position,
            is_down=self._went_down,
            is_held=self._pressed,
        )
        self._went_down = False
        return sample
