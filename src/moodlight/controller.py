"""
Mood light controller.

Owns the color state and the gesture machine, and is driven by its host
through tick() and on_resize(). Selection events reconfigure the axis
mapping and the flash.
"""

from dataclasses import dataclass
import logging

from moodlight.config.settings import Settings, get_settings
from moodlight.core.color import STILL, ChannelSpeeds, ColorState, advance
from moodlight.core.errors import InvalidSelectionError
from moodlight.core.events import Event, EventBus, EventType
from moodlight.core.flash import FlashColor, FlashConfig, FlashEffect
from moodlight.core.geometry import Vec2, screen_to_world, world_to_screen
from moodlight.core.gestures import GestureState, GestureStateMachine, PointerSample
from moodlight.core.joystick import SpeedScales, VirtualJoystick
from moodlight.core.mapping import AxisChannelMapping, Channel
from moodlight.core.panel import ConfigPanel
from moodlight.core.scheduler import ManualScheduler, Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoystickMarkers:
    """What the display needs to draw the joystick (screen pixels)."""
    visible: bool = False
    inner: Vec2 | None = None
    outer: Vec2 | None = None


class MoodLightController:
    """
    Frame-driven mood light.

    Per tick: pointer sample -> gesture machine -> joystick or flash ->
    channel speeds or color override -> integrator -> displayed color.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        event_bus: EventBus | None = None,
        panel: ConfigPanel | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        # Without a host scheduler, deferred work runs on a clock that
        # tick() advances, so a plain synchronous host needs no event loop
        self._frame_clock: ManualScheduler | None = None
        if scheduler is None:
            self._frame_clock = ManualScheduler()
            scheduler = self._frame_clock
        self.scheduler = scheduler
        self.event_bus = event_bus or EventBus()
        self.panel = panel or ConfigPanel()

        color = self.settings.color
        self._color = ColorState.from_hsv(color.hue, color.saturation, color.brightness)
        self._speeds = STILL
        self._width = 0.0
        self._height = 0.0
        self._shut_down = False

        joy = self.settings.joystick
        self.mapping = AxisChannelMapping(
            horizontal=Channel.from_index(joy.horizontal_channel),
            vertical=Channel.from_index(joy.vertical_channel),
        )
        self.joystick = VirtualJoystick(
            self.mapping,
            scales=SpeedScales(
                hue=joy.hue_speed_scale,
                saturation=joy.saturation_speed_scale,
                brightness=joy.brightness_speed_scale,
            ),
            reference_width=joy.outer_marker_width,
            size_factor=joy.size_factor,
        )

        flash = self.settings.flash
        self.flash = FlashEffect(
            self.scheduler,
            apply_color=self._apply_color,
            on_finished=self._on_flash_finished,
            config=FlashConfig(
                color=FlashColor.from_name(flash.color),
                duration=flash.duration,
                enabled=flash.enabled,
            ),
        )

        gesture = self.settings.gesture
        self.gestures = GestureStateMachine(
            panel=self.panel,
            tap_hold_threshold_ms=gesture.tap_hold_threshold_ms,
            reveal_band_fraction=gesture.reveal_band_fraction,
        )
        self.gestures.set_on_tap(self._on_tap)
        self.gestures.set_on_drag_start(self._on_drag_start)
        self.gestures.set_on_drag_move(self._on_drag_move)
        self.gestures.set_on_drag_end(self._on_drag_end)
        self.gestures.add_listener(self._on_gesture_changed)
        self.panel.add_listener(self._on_panel_changed)

        logger.info(
            f"MoodLightController created: color=({self._color.hue:.2f}, "
            f"{self._color.saturation:.2f}, {self._color.brightness:.2f}), "
            f"threshold={gesture.tap_hold_threshold_ms:.0f}ms"
        )

    # Read side
    @property
    def color(self) -> ColorState:
        return self._color

    @property
    def displayed_rgb(self) -> tuple[float, float, float]:
        return self._color.to_rgb()

    @property
    def speeds(self) -> ChannelSpeeds:
        return self._speeds

    @property
    def gesture_state(self) -> GestureState:
        return self.gestures.state

    @property
    def is_flashing(self) -> bool:
        return self.gestures.is_flashing

    @property
    def size(self) -> tuple[float, float]:
        return (self._width, self._height)

    @property
    def joystick_markers(self) -> JoystickMarkers:
        inner = self.joystick.inner_marker
        outer = self.joystick.outer_marker
        if inner is None or outer is None:
            return JoystickMarkers()
        return JoystickMarkers(
            visible=True,
            inner=self._to_screen(inner),
            outer=self._to_screen(outer),
        )

    # Host-driven lifecycle
    def tick(
        self,
        delta_time: float,
        sample: PointerSample,
        over_blocking_ui: bool = False,
    ) -> ColorState:
        """Advance one frame.

        Args:
            delta_time: Seconds since the previous frame (non-negative)
            sample: Pointer state for this frame
            over_blocking_ui: Pointer is over the open config panel

        Returns:
            The color to display for this frame
        """
        if self._shut_down:
            return self._color

        if self._frame_clock is not None:
            self._frame_clock.advance(delta_time)

        self.gestures.update(
            sample,
            delta_time * 1000,
            over_blocking_ui=over_blocking_ui,
            screen_height=self._height,
        )

        self._speeds = self.joystick.speeds if self.joystick.is_active else STILL
        self._color = advance(self._color, self._speeds, delta_time)
        return self._color

    def on_resize(self, width: float, height: float) -> None:
        """Container size changed (pixels)."""
        self._width = float(width)
        self._height = float(height)
        self.joystick.on_resize(self._width, self._height)
        logger.debug(
            f"Resized to {width}x{height}, joystick radius={self.joystick.max_magnitude:.3f}"
        )
        self._emit(EventType.RESIZED, {"width": width, "height": height})

    def reset(self) -> None:
        """Abort any flash or drag and return to IDLE."""
        was_flashing = self.flash.is_active
        was_dragging = self.joystick.is_active

        self.flash.cancel(restore=True)
        self.joystick.end()
        self.gestures.reset()
        self._speeds = STILL

        if was_flashing:
            self._emit(EventType.FLASH_ENDED, {"cancelled": True})
        if was_dragging:
            self._emit(EventType.DRAG_ENDED, {"cancelled": True})
        logger.info("Controller reset")

    def shutdown(self) -> None:
        """Tear down; a pending flash restore is dropped."""
        if self._shut_down:
            return
        self.flash.cancel(restore=False)
        self.joystick.end()
        self.gestures.reset()
        self._speeds = STILL
        self._shut_down = True
        self._emit(EventType.SHUTDOWN)
        logger.info("Controller shut down")

    # Selection events
    def set_horizontal_channel(self, index: int) -> None:
        channel = Channel.from_index(index)
        self.mapping.set_horizontal_channel(channel)
        self._refresh_joystick()
        self._emit(EventType.SELECTION_CHANGED, {"horizontal": channel.name})

    def set_vertical_channel(self, index: int) -> None:
        channel = Channel.from_index(index)
        self.mapping.set_vertical_channel(channel)
        self._refresh_joystick()
        self._emit(EventType.SELECTION_CHANGED, {"vertical": channel.name})

    def set_flash_color(self, index: int) -> None:
        color = FlashColor.from_index(index)
        self.flash.config.color = color
        logger.debug(f"Flash color -> {color.name}")
        self._emit(EventType.SELECTION_CHANGED, {"flash_color": color.name})

    def set_flash_enabled(self, enabled: bool) -> None:
        if not isinstance(enabled, bool):
            raise InvalidSelectionError("flash enabled", enabled)
        self.flash.config.enabled = enabled
        logger.debug(f"Flash enabled -> {enabled}")
        self._emit(EventType.SELECTION_CHANGED, {"flash_enabled": enabled})

    # Internals
    def _to_world(self, position: Vec2) -> Vec2:
        return screen_to_world(
            position, self._width, self._height, self.settings.joystick.camera_size
        )

    def _to_screen(self, position: Vec2) -> Vec2:
        return world_to_screen(
            position, self._width, self._height, self.settings.joystick.camera_size
        )

    def _refresh_joystick(self) -> None:
        # Mapping changes apply immediately to an active drag
        drag = self.joystick.drag
        if drag is not None:
            self.joystick.update(drag.current)

    def _apply_color(self, color: ColorState) -> None:
        self._color = color

    def _on_tap(self, position: Vec2) -> None:
        self._emit(EventType.TAP, {"x": position.x, "y": position.y})
        if self.flash.trigger(self._color):
            self.gestures.begin_flash()
            self._emit(EventType.FLASH_STARTED, {"color": self.flash.config.color.name})

    def _on_flash_finished(self) -> None:
        self.gestures.end_flash()
        self._emit(EventType.FLASH_ENDED)

    def _on_drag_start(self, position: Vec2) -> None:
        self.joystick.begin(self._to_world(position))
        self._emit(EventType.DRAG_STARTED, {"x": position.x, "y": position.y})

    def _on_drag_move(self, position: Vec2) -> None:
        self.joystick.update(self._to_world(position))

    def _on_drag_end(self) -> None:
        self.joystick.end()
        self._emit(EventType.DRAG_ENDED)

    def _on_gesture_changed(self, old: GestureState, new: GestureState) -> None:
        self._emit(EventType.GESTURE_CHANGED, {"from": old.name, "to": new.name})

    def _on_panel_changed(self, is_open: bool) -> None:
        self._emit(EventType.PANEL_OPENED if is_open else EventType.PANEL_CLOSED)

    def _emit(self, event_type: EventType, data: dict | None = None) -> None:
        self.event_bus.emit(Event(event_type, data=data or {}, source="controller"))
