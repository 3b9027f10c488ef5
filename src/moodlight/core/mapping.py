"""Mapping of joystick axes onto HSV channels."""

from enum import Enum
import logging

from moodlight.core.color import ChannelSpeeds
from moodlight.core.errors import InvalidSelectionError
from moodlight.core.geometry import Vec2

logger = logging.getLogger(__name__)


class Channel(Enum):
    """Steerable color channels, in selector order."""
    HUE = 0
    SATURATION = 1
    BRIGHTNESS = 2

    @classmethod
    def from_index(cls, index: int) -> "Channel":
        """Look up a channel by selector index.

        Raises:
            InvalidSelectionError: index is not an int in [0, 3)
        """
        # bool is an int subclass but never a valid selector
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError("channel", index, len(cls))
        if not 0 <= index < len(cls):
            raise InvalidSelectionError("channel", index, len(cls))
        return cls(index)


class AxisChannelMapping:
    """
    Assigns the horizontal and vertical joystick axes to channels.

    When both axes point at the same channel the vertical axis wins;
    the horizontal value for that channel is simply overwritten.
    """

    def __init__(
        self,
        horizontal: Channel = Channel.HUE,
        vertical: Channel = Channel.SATURATION,
    ) -> None:
        self._horizontal = self._check(horizontal)
        self._vertical = self._check(vertical)

    @staticmethod
    def _check(channel: Channel) -> Channel:
        if not isinstance(channel, Channel):
            raise InvalidSelectionError("channel", channel)
        return channel

    @property
    def horizontal(self) -> Channel:
        return self._horizontal

    @property
    def vertical(self) -> Channel:
        return self._vertical

    @property
    def has_collision(self) -> bool:
        return self._horizontal is self._vertical

    def set_horizontal_channel(self, channel: Channel) -> None:
        self._horizontal = self._check(channel)
        logger.debug(f"Horizontal axis -> {channel.name}")

    def set_vertical_channel(self, channel: Channel) -> None:
        self._vertical = self._check(channel)
        logger.debug(f"Vertical axis -> {channel.name}")

    def resolve_speeds(self, direction: Vec2) -> ChannelSpeeds:
        """Turn a joystick direction into raw channel speeds."""
        values = {channel: 0.0 for channel in Channel}
        values[self._horizontal] = direction.x
        values[self._vertical] = direction.y
        return ChannelSpeeds(
            hue=values[Channel.HUE],
            saturation=values[Channel.SATURATION],
            brightness=values[Channel.BRIGHTNESS],
        )
