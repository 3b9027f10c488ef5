"""
Flash effect used as tap feedback.

A flash overrides the displayed color for a short fixed duration and
then writes the captured color back.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging

from moodlight.core.color import ColorState, wrap_unit
from moodlight.core.errors import InvalidSelectionError
from moodlight.core.scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)


class FlashColor(Enum):
    """Override colors, in selector order."""
    WHITE = 0
    BLACK = 1
    INVERSE = 2

    @classmethod
    def from_index(cls, index: int) -> "FlashColor":
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError("flash color", index, len(cls))
        if not 0 <= index < len(cls):
            raise InvalidSelectionError("flash color", index, len(cls))
        return cls(index)

    @classmethod
    def from_name(cls, name: str) -> "FlashColor":
        try:
            return cls[name.upper()]
        except KeyError:
            raise InvalidSelectionError("flash color", name) from None


@dataclass
class FlashConfig:
    """Flash configuration, settable at runtime."""
    color: FlashColor = FlashColor.WHITE
    duration: float = 0.1  # seconds
    enabled: bool = True


def override_color(color: FlashColor, captured: ColorState) -> ColorState:
    """Color shown while a flash is in progress."""
    if color is FlashColor.WHITE:
        return ColorState(0.0, 0.0, 1.0)
    if color is FlashColor.BLACK:
        return ColorState(0.0, 0.0, 0.0)
    return ColorState(
        wrap_unit(captured.hue + 0.5),
        captured.saturation,
        captured.brightness,
    )


class FlashEffect:
    """
    Time-bounded override of the displayed color.

    Args:
        scheduler: Runs the deferred restore
        apply_color: Sink that writes a color to the display state
        on_finished: Called after the captured color is restored
        config: Flash configuration (shared, may be changed at runtime)
    """

    def __init__(
        self,
        scheduler: Scheduler,
        apply_color: Callable[[ColorState], None],
        on_finished: Callable[[], None] | None = None,
        config: FlashConfig | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.config = config or FlashConfig()
        self._apply_color = apply_color
        self._on_finished = on_finished

        self._captured: ColorState | None = None
        self._pending: ScheduledCall | None = None

    @property
    def is_active(self) -> bool:
        return self._pending is not None

    @property
    def captured(self) -> ColorState | None:
        return self._captured

    def trigger(self, current_color: ColorState) -> bool:
        """Start a flash from current_color.

        Returns:
            True if a flash started, False when flashes are disabled
        """
        if not self.config.enabled:
            logger.debug("Flash disabled, tap ignored")
            return False

        # Schedule first: a failed schedule must leave the color untouched
        self._pending = self.scheduler.call_later(self.config.duration, self._restore)
        self._captured = current_color
        self._apply_color(override_color(self.config.color, current_color))

        logger.info(f"Flash started: {self.config.color.name} for {self.config.duration:.3f}s")
        return True

    def cancel(self, restore: bool = False) -> None:
        """Cancel a pending restore.

        Args:
            restore: Also write the captured color back (reset path).
                Left False on teardown, where the color target is gone.
        """
        if self._pending is None:
            return

        self._pending.cancel()
        self._pending = None
        captured = self._captured
        self._captured = None

        if restore and captured is not None:
            self._apply_color(captured)
        logger.debug(f"Flash cancelled (restore={restore})")

    def _restore(self) -> None:
        captured = self._captured
        self._pending = None
        self._captured = None

        if captured is not None:
            self._apply_color(captured)
        logger.info("Flash finished")

        if self._on_finished:
            self._on_finished()
