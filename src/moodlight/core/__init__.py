"""Core framework components for the mood light."""

from .color import ChannelSpeeds, ColorState, advance, clamp_unit, wrap_unit
from .errors import InvalidSelectionError, MoodLightError
from .events import Event, EventBus, EventType
from .flash import FlashColor, FlashConfig, FlashEffect
from .geometry import Vec2, clamp_magnitude
from .gestures import GestureState, GestureStateMachine, PointerSample
from .joystick import VirtualJoystick
from .mapping import AxisChannelMapping, Channel
from .panel import ConfigPanel

__all__ = [
    "ChannelSpeeds",
    "ColorState",
    "advance",
    "clamp_unit",
    "wrap_unit",
    "InvalidSelectionError",
    "MoodLightError",
    "Event",
    "EventBus",
    "EventType",
    "FlashColor",
    "FlashConfig",
    "FlashEffect",
    "Vec2",
    "clamp_magnitude",
    "GestureState",
    "GestureStateMachine",
    "PointerSample",
    "VirtualJoystick",
    "AxisChannelMapping",
    "Channel",
    "ConfigPanel",
]
