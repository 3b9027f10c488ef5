"""End-to-end tests for the mood light controller."""

import pytest

from moodlight.config.settings import Settings
from moodlight.controller import MoodLightController
from moodlight.core.color import ChannelSpeeds, ColorState
from moodlight.core.errors import InvalidSelectionError
from moodlight.core.events import EventType
from moodlight.core.flash import FlashColor
from moodlight.core.geometry import Vec2
from moodlight.core.gestures import GestureState
from moodlight.core.mapping import Channel

from conftest import CENTER, SCREEN_H, down, held, up


def hold_until_drag(controller, position=CENTER):
    controller.tick(0.0, down(position))
    for _ in range(3):
        controller.tick(0.1, held(position))
    assert controller.gesture_state == GestureState.DRAGGING


def test_initial_color_comes_from_settings(controller):
    assert controller.color == ColorState(0.5, 1.0, 0.7)


def test_idle_ticks_keep_color(controller):
    before = controller.color
    for _ in range(10):
        controller.tick(0.016, up())
    assert controller.color == before
    assert controller.speeds == ChannelSpeeds()


def test_tap_flashes_white_and_restores(controller, scheduler):
    original = controller.color

    controller.tick(0.0, down())
    controller.tick(0.1, up())

    assert controller.is_flashing
    assert controller.displayed_rgb == (1.0, 1.0, 1.0)

    controller.tick(0.016, up())
    scheduler.advance(0.1)

    assert not controller.is_flashing
    assert controller.gesture_state == GestureState.IDLE
    assert controller.color == original


def test_press_during_flash_is_ignored(controller, scheduler):
    controller.tick(0.0, down())
    controller.tick(0.1, up())
    assert controller.is_flashing

    controller.tick(0.0, down())
    controller.tick(0.5, held())
    assert controller.gesture_state == GestureState.FLASHING
    assert not controller.joystick.is_active

    scheduler.advance(0.1)
    controller.tick(0.5, held())
    controller.tick(0.1, up())

    # The ignored press never turns into a drag or a second flash
    assert controller.gesture_state == GestureState.IDLE
    assert scheduler.pending == 0


def test_release_at_threshold_drags_and_never_flashes(controller, event_bus):
    controller.tick(0.0, down())
    controller.tick(0.1, held())
    controller.tick(0.1, held())
    controller.tick(0.1, up())

    assert event_bus.get_history(EventType.DRAG_STARTED)
    assert not event_bus.get_history(EventType.FLASH_STARTED)
    assert not event_bus.get_history(EventType.TAP)
    assert controller.gesture_state == GestureState.IDLE


def test_drag_steers_hue_and_saturation(controller):
    hold_until_drag(controller)

    # 36px right, 36px up: half a world unit on each axis
    target = CENTER + Vec2(36.0, 36.0)
    before = controller.color
    controller.tick(1.0, held(target))

    assert controller.speeds.hue == pytest.approx(0.5)
    assert controller.speeds.saturation == pytest.approx(0.5)
    # 0.5 + 0.5 wraps to the start of the hue circle
    assert 0.0 <= controller.color.hue < 1.0
    assert controller.color.hue == pytest.approx(0.0, abs=1e-9)
    assert controller.color.saturation == 1.0
    assert controller.color.brightness == before.brightness


def test_release_stops_drift(controller):
    hold_until_drag(controller)
    controller.tick(0.1, held(CENTER + Vec2(50.0, -50.0)))
    controller.tick(0.1, up())

    assert controller.speeds == ChannelSpeeds()
    settled = controller.color
    controller.tick(1.0, up())
    assert controller.color == settled


def test_joystick_markers(controller):
    assert not controller.joystick_markers.visible

    hold_until_drag(controller)
    controller.tick(0.016, held(CENTER + Vec2(1000.0, 0.0)))

    markers = controller.joystick_markers
    assert markers.visible
    assert markers.outer.x == pytest.approx(CENTER.x)
    assert markers.outer.y == pytest.approx(CENTER.y)
    radius_px = controller.joystick.max_magnitude * SCREEN_H / 10.0
    assert markers.inner.x == pytest.approx(CENTER.x + radius_px)


def test_bottom_band_opens_panel_and_next_press_closes_it(controller, event_bus):
    bottom = Vec2(640.0, 10.0)
    controller.tick(0.0, down(bottom))
    controller.tick(0.016, up(bottom))
    assert controller.panel.is_open
    assert controller.gesture_state == GestureState.IDLE

    controller.tick(0.0, down())
    controller.tick(0.016, up())
    assert not controller.panel.is_open
    assert not controller.is_flashing
    assert event_bus.get_history(EventType.PANEL_OPENED)
    assert event_bus.get_history(EventType.PANEL_CLOSED)


def test_press_over_blocking_ui_keeps_panel_open(controller):
    controller.panel.open()
    controller.tick(0.0, down(), over_blocking_ui=True)
    assert controller.panel.is_open


def test_disabled_flash_leaves_state_untouched(controller, scheduler):
    controller.set_flash_enabled(False)
    before = controller.color

    controller.tick(0.0, down())
    controller.tick(0.05, up())

    assert controller.color == before
    assert not controller.is_flashing
    assert scheduler.pending == 0


def test_flash_color_selection(controller, scheduler):
    controller.set_flash_color(FlashColor.INVERSE.value)
    controller.tick(0.0, down())
    controller.tick(0.05, up())

    assert controller.color == ColorState(0.0, 1.0, 0.7)
    scheduler.advance(0.1)
    assert controller.color == ColorState(0.5, 1.0, 0.7)


def test_axis_selection(controller):
    controller.set_horizontal_channel(2)
    controller.set_vertical_channel(2)
    assert controller.mapping.horizontal is Channel.BRIGHTNESS
    assert controller.mapping.vertical is Channel.BRIGHTNESS


@pytest.mark.parametrize("setter", ["set_horizontal_channel", "set_vertical_channel", "set_flash_color"])
@pytest.mark.parametrize("bad", [-1, 3, 2.0, True])
def test_invalid_selection_is_rejected_atomically(controller, setter, bad):
    horizontal = controller.mapping.horizontal
    vertical = controller.mapping.vertical
    flash_color = controller.flash.config.color

    with pytest.raises(InvalidSelectionError):
        getattr(controller, setter)(bad)

    assert controller.mapping.horizontal is horizontal
    assert controller.mapping.vertical is vertical
    assert controller.flash.config.color is flash_color


def test_flash_enabled_requires_bool(controller):
    with pytest.raises(InvalidSelectionError):
        controller.set_flash_enabled(1)
    assert controller.flash.config.enabled


def test_shutdown_cancels_pending_restore(controller, scheduler, event_bus):
    controller.tick(0.0, down())
    controller.tick(0.05, up())
    flashed = controller.color

    controller.shutdown()
    scheduler.advance(1.0)

    assert controller.color == flashed
    assert not event_bus.get_history(EventType.FLASH_ENDED)
    assert event_bus.get_history(EventType.SHUTDOWN)
    assert controller.tick(1.0, down()) == flashed


def test_reset_restores_flash_color(controller):
    original = controller.color
    controller.tick(0.0, down())
    controller.tick(0.05, up())

    controller.reset()

    assert controller.color == original
    assert controller.gesture_state == GestureState.IDLE


def test_reset_mid_flash_emits_flash_ended(controller, scheduler, event_bus):
    controller.tick(0.0, down())
    controller.tick(0.05, up())
    assert event_bus.get_history(EventType.FLASH_STARTED)

    controller.reset()

    ended = event_bus.get_history(EventType.FLASH_ENDED)
    assert len(ended) == 1
    assert ended[0].data == {"cancelled": True}
    assert scheduler.advance(1.0) == 0
    assert len(event_bus.get_history(EventType.FLASH_ENDED)) == 1


def test_reset_mid_drag_emits_drag_ended(controller, event_bus):
    hold_until_drag(controller)

    controller.reset()

    ended = event_bus.get_history(EventType.DRAG_ENDED)
    assert len(ended) == 1
    assert not controller.joystick.is_active


def test_reset_while_idle_emits_no_end_events(controller, event_bus):
    controller.reset()

    assert not event_bus.get_history(EventType.FLASH_ENDED)
    assert not event_bus.get_history(EventType.DRAG_ENDED)


def test_tap_without_host_scheduler_flashes_and_restores_on_ticks(settings):
    controller = MoodLightController(settings=settings)
    controller.on_resize(1280, 720)
    original = controller.color

    controller.tick(0.0, down())
    controller.tick(0.05, up())

    assert controller.is_flashing
    assert controller.displayed_rgb == (1.0, 1.0, 1.0)
    assert controller.flash.captured == original

    controller.tick(0.05, up())
    assert controller.is_flashing

    controller.tick(0.1, up())
    assert not controller.is_flashing
    assert controller.gesture_state == GestureState.IDLE
    assert controller.color == original


def test_unmeasured_layout_keeps_joystick_still(settings, scheduler):
    controller = MoodLightController(settings=settings, scheduler=scheduler)
    controller.tick(0.0, down())
    controller.tick(0.5, held())
    controller.tick(0.5, held(Vec2(900.0, 500.0)))

    assert controller.gesture_state == GestureState.DRAGGING
    assert controller.speeds == ChannelSpeeds()


def test_speed_scales_from_settings(scheduler):
    settings = Settings(
        _env_file=None,
        joystick={"hue_speed_scale": 0.5, "saturation_speed_scale": 2.0},
    )
    controller = MoodLightController(settings=settings, scheduler=scheduler)
    controller.on_resize(1280, 720)
    hold_until_drag(controller)
    controller.tick(0.016, held(CENTER + Vec2(36.0, 36.0)))

    assert controller.speeds.hue == pytest.approx(0.25)
    assert controller.speeds.saturation == pytest.approx(1.0)


def test_resize_events(controller, event_bus):
    controller.on_resize(800, 600)
    assert controller.size == (800.0, 600.0)
    assert event_bus.get_history(EventType.RESIZED)[-1].data == {"width": 800, "height": 600}
