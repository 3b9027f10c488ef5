"""
Gesture state machine for a single pointer.

States:
    IDLE: No gesture in progress
    PENDING_PRESS: Pointer is down, not yet long enough to be a hold
    DRAGGING: Hold recognized, pointer drives the virtual joystick
    FLASHING: A tap flash is running, new presses are ignored

A press over blocking UI or inside the bottom reveal band opens the
config panel instead of starting a gesture. A press while the panel is
open closes it. Both are consumed without a state change.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable
import logging

from moodlight.core.geometry import Vec2
from moodlight.core.panel import ConfigPanel

logger = logging.getLogger(__name__)


class GestureState(Enum):
    """Gesture states."""
    IDLE = auto()
    PENDING_PRESS = auto()
    DRAGGING = auto()
    FLASHING = auto()


@dataclass(frozen=True)
class PointerSample:
    """
    Pointer state read once per tick.

    Attributes:
        position: Screen pixels, bottom-left origin
        is_down: Pointer went down on this tick
        is_held: Pointer is currently pressed
    """
    position: Vec2
    is_down: bool = False
    is_held: bool = False


class GestureStateMachine:
    """
    Classifies press/hold/release sequences into gestures.

    Elapsed time is accumulated from the tick deltas, so behavior is
    fully determined by the sequence of samples and deltas. A release on
    the same tick the hold threshold is reached counts as a hold.
    """

    VALID_TRANSITIONS: list[tuple[GestureState, GestureState]] = [
        (GestureState.IDLE, GestureState.PENDING_PRESS),
        (GestureState.IDLE, GestureState.FLASHING),

        (GestureState.PENDING_PRESS, GestureState.IDLE),      # Tap
        (GestureState.PENDING_PRESS, GestureState.DRAGGING),  # Hold

        (GestureState.DRAGGING, GestureState.IDLE),

        (GestureState.FLASHING, GestureState.IDLE),
    ]

    def __init__(
        self,
        panel: ConfigPanel | None = None,
        tap_hold_threshold_ms: float = 300.0,
        reveal_band_fraction: float = 0.1,
    ) -> None:
        self.panel = panel or ConfigPanel()
        self.tap_hold_threshold_ms = tap_hold_threshold_ms
        self.reveal_band_fraction = reveal_band_fraction

        self._state = GestureState.IDLE
        self._elapsed_ms = 0.0
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        self._listeners: list[Callable[[GestureState, GestureState], None]] = []

        # Callbacks
        self._on_tap: Callable[[Vec2], None] | None = None
        self._on_drag_start: Callable[[Vec2], None] | None = None
        self._on_drag_move: Callable[[Vec2], None] | None = None
        self._on_drag_end: Callable[[], None] | None = None

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def elapsed_ms(self) -> float:
        """Time since the current press started (0 outside a press)."""
        return self._elapsed_ms

    @property
    def is_flashing(self) -> bool:
        return self._state == GestureState.FLASHING

    def set_on_tap(self, callback: Callable[[Vec2], None]) -> None:
        self._on_tap = callback

    def set_on_drag_start(self, callback: Callable[[Vec2], None]) -> None:
        self._on_drag_start = callback

    def set_on_drag_move(self, callback: Callable[[Vec2], None]) -> None:
        self._on_drag_move = callback

    def set_on_drag_end(self, callback: Callable[[], None]) -> None:
        self._on_drag_end = callback

    def add_listener(self, callback: Callable[[GestureState, GestureState], None]) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[GestureState, GestureState], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def can_transition(self, to_state: GestureState) -> bool:
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GestureState) -> bool:
        """Attempt a state change. Returns False if not allowed."""
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid gesture transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.debug(f"Gesture: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in gesture listener: {e}")

        return True

    def is_in_reveal_band(self, position: Vec2, screen_height: float) -> bool:
        """True for positions in the bottom band that reveals the panel."""
        return position.y < screen_height * self.reveal_band_fraction

    def update(
        self,
        sample: PointerSample,
        delta_ms: float,
        over_blocking_ui: bool = False,
        screen_height: float = 0.0,
    ) -> None:
        """Advance by one tick.

        Args:
            sample: Pointer state for this tick
            delta_ms: Milliseconds since the previous tick
            over_blocking_ui: Pointer is over an interactive panel
            screen_height: Screen height in pixels, for the reveal band
        """
        if self._state == GestureState.PENDING_PRESS:
            self._elapsed_ms += delta_ms

        if sample.is_down:
            self._handle_press(sample, over_blocking_ui, screen_height)

        # Hold is checked before release so the boundary resolves to a drag
        if self._state == GestureState.PENDING_PRESS and self._hold_reached():
            self._start_drag(sample.position)
        elif sample.is_held and self._state == GestureState.DRAGGING:
            if self._on_drag_move:
                self._on_drag_move(sample.position)

        if not sample.is_held:
            self._handle_release(sample)

    def begin_flash(self) -> bool:
        """Enter FLASHING after a tap started a flash."""
        return self.transition(GestureState.FLASHING)

    def end_flash(self) -> bool:
        """Leave FLASHING once the flash has completed."""
        if self._state != GestureState.FLASHING:
            return False
        return self.transition(GestureState.IDLE)

    def reset(self) -> None:
        """Drop any gesture in progress without firing callbacks."""
        old_state = self._state
        self._state = GestureState.IDLE
        self._elapsed_ms = 0.0

        if old_state != GestureState.IDLE:
            for listener in self._listeners:
                try:
                    listener(old_state, GestureState.IDLE)
                except Exception as e:
                    logger.error(f"Error in gesture listener during reset: {e}")
        logger.debug("Gesture machine reset to IDLE")

    def _hold_reached(self) -> bool:
        return self._elapsed_ms >= self.tap_hold_threshold_ms

    def _handle_press(
        self,
        sample: PointerSample,
        over_blocking_ui: bool,
        screen_height: float,
    ) -> None:
        if self._state == GestureState.FLASHING:
            logger.debug("Press ignored while flashing")
            return
        if self._state != GestureState.IDLE:
            # Single pointer: a second down edge mid-gesture is ignored
            return

        if over_blocking_ui or self.is_in_reveal_band(sample.position, screen_height):
            self.panel.open()
            return

        if self.panel.is_open:
            # Dismissal only, not a gesture start
            self.panel.close()
            return

        self._elapsed_ms = 0.0
        self.transition(GestureState.PENDING_PRESS)

    def _start_drag(self, position: Vec2) -> None:
        if self.transition(GestureState.DRAGGING):
            logger.debug(f"Hold recognized after {self._elapsed_ms:.0f}ms")
            if self._on_drag_start:
                self._on_drag_start(position)

    def _handle_release(self, sample: PointerSample) -> None:
        if self._state == GestureState.PENDING_PRESS:
            logger.debug(f"Tap recognized after {self._elapsed_ms:.0f}ms")
            self._elapsed_ms = 0.0
            self.transition(GestureState.IDLE)
            if self._on_tap:
                self._on_tap(sample.position)
        elif self._state == GestureState.DRAGGING:
            self._elapsed_ms = 0.0
            self.transition(GestureState.IDLE)
            if self._on_drag_end:
                self._on_drag_end()
