"""
HSV color state and the per-tick color integrator.

Hue is circular and wraps at 1.0. Saturation and brightness are linear
and clamped to [0, 1].
"""

from dataclasses import dataclass


def wrap_unit(x: float) -> float:
    """Map any real number into [0, 1), negative values included."""
    r = x % 1.0
    # Tiny negative inputs round up to exactly 1.0
    if r >= 1.0:
        return 0.0
    return r


def clamp_unit(x: float) -> float:
    """Clamp a value to [0, 1]."""
    return max(0.0, min(1.0, x))


@dataclass(frozen=True)
class ColorState:
    """Normalized HSV color.

    Attributes:
        hue: [0, 1)
        saturation: [0, 1]
        brightness: [0, 1]
    """

    hue: float = 0.0
    saturation: float = 0.0
    brightness: float = 0.0

    @classmethod
    def from_hsv(cls, hue: float, saturation: float, brightness: float) -> "ColorState":
        """Build a state from arbitrary values, normalizing each channel."""
        return cls(wrap_unit(hue), clamp_unit(saturation), clamp_unit(brightness))

    def to_rgb(self) -> tuple[float, float, float]:
        return hsv_to_rgb(self.hue, self.saturation, self.brightness)

    def to_rgb8(self) -> tuple[int, int, int]:
        r, g, b = self.to_rgb()
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


@dataclass(frozen=True)
class ChannelSpeeds:
    """Rate of change per second for each HSV channel."""

    hue: float = 0.0
    saturation: float = 0.0
    brightness: float = 0.0

    def scaled(self, hue: float, saturation: float, brightness: float) -> "ChannelSpeeds":
        return ChannelSpeeds(
            self.hue * hue,
            self.saturation * saturation,
            self.brightness * brightness,
        )

    @property
    def is_zero(self) -> bool:
        return self.hue == 0.0 and self.saturation == 0.0 and self.brightness == 0.0


STILL = ChannelSpeeds()


def advance(state: ColorState, speeds: ChannelSpeeds, delta_time: float) -> ColorState:
    """Integrate channel speeds over one tick.

    Args:
        state: Current color
        speeds: Per-channel speeds (units per second)
        delta_time: Elapsed seconds, non-negative

    Returns:
        The next normalized color
    """
    return ColorState(
        hue=wrap_unit(state.hue + speeds.hue * delta_time),
        saturation=clamp_unit(state.saturation + speeds.saturation * delta_time),
        brightness=clamp_unit(state.brightness + speeds.brightness * delta_time),
    )


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """Convert HSV (all in [0, 1]) to RGB floats in [0, 1]."""
    h = wrap_unit(h) * 360.0
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (r + m, g + m, b + m)
