"""Tests for the simulator's input and panel pieces (no display needed)."""

import numpy as np
import pygame
import pytest

from moodlight.controller import JoystickMarkers
from moodlight.core.color import ColorState
from moodlight.core.errors import InvalidSelectionError
from moodlight.core.geometry import Vec2
from moodlight.simulator.mock_hardware.display import SimulatedBackground
from moodlight.simulator.mock_hardware.input import SimulatedPointer
from moodlight.simulator.tab_strip import TabStrip


def test_pointer_flips_y_and_reports_down_edge_once():
    pointer = SimulatedPointer(screen_height=720)
    pointer._press(100, 20)

    first = pointer.sample()
    second = pointer.sample()

    assert first.position == Vec2(100.0, 700.0)
    assert first.is_down and first.is_held
    assert not second.is_down and second.is_held


def test_pointer_press_and_release_within_one_frame():
    pointer = SimulatedPointer(screen_height=100)
    pointer._press(10, 10)
    pointer._release(10, 10)

    sample = pointer.sample()
    assert sample.is_down
    assert not sample.is_held


def test_pointer_release_ends_hold_without_new_down_edge():
    pointer = SimulatedPointer(screen_height=100)
    pointer._press(0, 0)
    pointer.sample()
    pointer._release(5, 10)

    sample = pointer.sample()
    assert sample.position == Vec2(5.0, 90.0)
    assert not sample.is_down
    assert not sample.is_held


def make_strip(picks):
    strip = TabStrip("Horizontal", ["Hue", "Saturation", "Brightness"], picks.append)
    strip.set_rect(pygame.Rect(0, 0, 450, 40))
    return strip


def test_tab_strip_hit_test_and_pick():
    picks = []
    strip = make_strip(picks)

    # Label takes the first 150px, tabs are 100px each
    assert strip.hit_test((50, 20)) is None
    assert strip.hit_test((260, 20)) == 1
    assert strip.handle_click((420, 20))
    assert strip.current_index == 2
    assert picks == [2]


def test_tab_strip_rejects_out_of_range():
    picks = []
    strip = make_strip(picks)
    with pytest.raises(InvalidSelectionError):
        strip.pick(3)
    assert strip.current_index == 0
    assert picks == []


def test_tab_strip_keeps_highlight_when_callback_rejects():
    def reject(index):
        raise InvalidSelectionError("test", index)

    strip = TabStrip("Flash", ["Off", "On"], reject, default_index=1)
    with pytest.raises(InvalidSelectionError):
        strip.pick(0)
    assert strip.current_index == 1


def test_tab_strip_unknown_default_falls_back_to_first():
    strip = TabStrip("Flash color", ["White", "Black", "Inverse"], default_index=7)
    assert strip.current_index == 0
    assert strip.current_tab == "White"


def test_background_paints_color_and_markers():
    background = SimulatedBackground(64, 48, outer_marker_width=20, inner_marker_width=8)
    markers = JoystickMarkers(visible=True, inner=Vec2(32.0, 24.0), outer=Vec2(32.0, 24.0))

    background.paint(ColorState(0.0, 1.0, 1.0), markers)
    buffer = background.get_buffer()

    assert tuple(buffer[0, 0]) == (255, 0, 0)
    # Inner marker is filled with the contrast color
    assert tuple(buffer[24, 32]) == (255, 255, 255)
    assert buffer.shape == (48, 64, 3)
    assert buffer.dtype == np.uint8


def test_background_without_markers_is_flat():
    background = SimulatedBackground(8, 8)
    background.paint(ColorState(0.0, 0.0, 0.0), JoystickMarkers())
    assert not background.get_buffer().any()
