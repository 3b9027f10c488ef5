"""
2D geometry helpers for the virtual joystick.

Positions handed to the core use a bottom-left origin (y grows upward).
World coordinates mimic an orthographic camera centered on the screen.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vec2(0.0, 0.0)

# Joystick radius per pixel of reference (outer marker) width
JOYSTICK_SIZE_FACTOR = 0.006


def clamp_magnitude(vector: Vec2, max_magnitude: float) -> Vec2:
    """Confine a vector to a maximum length, keeping its direction.

    Args:
        vector: Input vector
        max_magnitude: Largest allowed length (negative counts as 0)

    Returns:
        The vector itself if short enough, otherwise a scaled copy
        whose length is exactly max_magnitude.
    """
    max_magnitude = max(0.0, max_magnitude)
    length = vector.length
    if length <= max_magnitude:
        return vector
    if length == 0.0:
        return ZERO
    return vector * (max_magnitude / length)


def compute_joystick_max_magnitude(
    width: float,
    height: float,
    reference_width: float,
    size_factor: float = JOYSTICK_SIZE_FACTOR,
) -> float:
    """Maximum joystick deflection in world units for the given layout.

    Returns 0 while the layout is not measurable, which keeps the
    joystick still instead of jumping.
    """
    if width <= 0 or height <= 0 or reference_width <= 0:
        return 0.0
    aspect_ratio = width / height
    return size_factor * reference_width * aspect_ratio


def screen_to_world(
    position: Vec2,
    width: float,
    height: float,
    camera_size: float = 5.0,
) -> Vec2:
    """Convert bottom-left-origin pixels to world units.

    camera_size is the orthographic half-height of the view in world units.
    """
    if width <= 0 or height <= 0:
        return ZERO
    units_per_pixel = (2.0 * camera_size) / height
    return Vec2(
        (position.x - width / 2.0) * units_per_pixel,
        (position.y - height / 2.0) * units_per_pixel,
    )


def world_to_screen(
    position: Vec2,
    width: float,
    height: float,
    camera_size: float = 5.0,
) -> Vec2:
    """Inverse of screen_to_world."""
    if width <= 0 or height <= 0 or camera_size <= 0:
        return ZERO
    pixels_per_unit = height / (2.0 * camera_size)
    return Vec2(
        position.x * pixels_per_unit + width / 2.0,
        position.y * pixels_per_unit + height / 2.0,
    )
