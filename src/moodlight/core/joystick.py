"""
Virtual joystick summoned by a press-and-hold gesture.

The joystick works in world units. Its deflection is clamped to a radius
derived from the current layout, and the clamped direction is turned into
channel speeds through an AxisChannelMapping.
"""

from dataclasses import dataclass
import logging

from moodlight.core.color import ChannelSpeeds, STILL
from moodlight.core.geometry import (
    JOYSTICK_SIZE_FACTOR,
    ZERO,
    Vec2,
    clamp_magnitude,
    compute_joystick_max_magnitude,
)
from moodlight.core.mapping import AxisChannelMapping

logger = logging.getLogger(__name__)


@dataclass
class DragState:
    """Origin and latest position of an active drag."""
    origin: Vec2
    current: Vec2


@dataclass(frozen=True)
class SpeedScales:
    """Per-channel multipliers applied to the joystick direction."""
    hue: float = 1.0
    saturation: float = 1.0
    brightness: float = 1.0


class VirtualJoystick:
    """Drag-driven joystick producing HSV channel speeds."""

    def __init__(
        self,
        mapping: AxisChannelMapping,
        scales: SpeedScales | None = None,
        reference_width: float = 200.0,
        size_factor: float = JOYSTICK_SIZE_FACTOR,
    ) -> None:
        self.mapping = mapping
        self.scales = scales or SpeedScales()
        self.reference_width = reference_width
        self.size_factor = size_factor

        self._drag: DragState | None = None
        self._direction = ZERO
        self._speeds = STILL
        self._max_magnitude = 0.0

    @property
    def is_active(self) -> bool:
        return self._drag is not None

    @property
    def drag(self) -> DragState | None:
        return self._drag

    @property
    def max_magnitude(self) -> float:
        return self._max_magnitude

    @property
    def direction(self) -> Vec2:
        """Clamped offset of the current drag (zero when inactive)."""
        return self._direction

    @property
    def speeds(self) -> ChannelSpeeds:
        return self._speeds

    @property
    def outer_marker(self) -> Vec2 | None:
        """World position of the outer marker, None while hidden."""
        if self._drag is None:
            return None
        return self._drag.origin

    @property
    def inner_marker(self) -> Vec2 | None:
        """World position of the inner marker, None while hidden."""
        if self._drag is None:
            return None
        return self._drag.origin + self._direction

    def on_resize(self, width: float, height: float) -> None:
        """Recompute the maximum deflection for a new container size."""
        self._max_magnitude = compute_joystick_max_magnitude(
            width, height, self.reference_width, self.size_factor
        )
        if self._max_magnitude == 0.0:
            logger.debug(f"Layout not measurable ({width}x{height}), joystick disabled")

        # Re-clamp an in-flight drag against the new radius
        if self._drag is not None:
            self.update(self._drag.current)

    def begin(self, origin: Vec2) -> None:
        """Activate the joystick centered at origin."""
        self._drag = DragState(origin=origin, current=origin)
        self._direction = ZERO
        self._speeds = STILL
        logger.debug(f"Joystick begin at ({origin.x:.2f}, {origin.y:.2f})")

    def update(self, current: Vec2) -> ChannelSpeeds:
        """Move the stick and return the resulting channel speeds."""
        if self._drag is None:
            return self._speeds

        self._drag.current = current
        offset = current - self._drag.origin
        self._direction = clamp_magnitude(offset, self._max_magnitude)

        raw = self.mapping.resolve_speeds(self._direction)
        self._speeds = raw.scaled(
            self.scales.hue, self.scales.saturation, self.scales.brightness
        )
        return self._speeds

    def end(self) -> None:
        """Release the joystick; speeds drop to zero first."""
        self._speeds = STILL
        self._direction = ZERO
        if self._drag is not None:
            logger.debug("Joystick released")
        self._drag = None
