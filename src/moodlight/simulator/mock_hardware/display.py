"""
Simulated background display.

Holds a numpy RGB buffer that is painted each frame from the
controller's color and joystick markers, then blitted with pygame.
"""

import pygame
import numpy as np
from numpy.typing import NDArray

from ...controller import JoystickMarkers
from ...core.color import ColorState
from ...graphics.primitives import contrast_color, draw_circle, fill


class SimulatedBackground:
    """Full-window background surface."""

    def __init__(
        self,
        width: int,
        height: int,
        outer_marker_width: float = 200.0,
        inner_marker_width: float = 80.0,
    ) -> None:
        self.outer_radius = int(outer_marker_width / 2)
        self.inner_radius = int(inner_marker_width / 2)
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._buffer.shape[1]

    @property
    def height(self) -> int:
        return self._buffer.shape[0]

    def resize(self, width: int, height: int) -> None:
        self._buffer = np.zeros((max(1, height), max(1, width), 3), dtype=np.uint8)

    def get_buffer(self) -> NDArray[np.uint8]:
        return self._buffer.copy()

    def paint(self, color: ColorState, markers: JoystickMarkers) -> None:
        """Paint the background and, while dragging, the joystick."""
        rgb = color.to_rgb8()
        fill(self._buffer, rgb)

        if markers.visible and markers.outer is not None and markers.inner is not None:
            ring = contrast_color(rgb)
            h = self.height
            # Markers arrive with a bottom-left origin
            draw_circle(
                self._buffer,
                int(markers.outer.x), int(h - markers.outer.y),
                self.outer_radius, ring, filled=False, thickness=3,
            )
            draw_circle(
                self._buffer,
                int(markers.inner.x), int(h - markers.inner.y),
                self.inner_radius, ring, filled=True,
            )

    def render(self) -> pygame.Surface:
        """Render buffer to a pygame surface."""
        return pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
