"""Shared fixtures for mood light tests."""

import pytest

from moodlight.config.settings import Settings
from moodlight.controller import MoodLightController
from moodlight.core.events import EventBus
from moodlight.core.geometry import Vec2
from moodlight.core.gestures import PointerSample
from moodlight.core.scheduler import ManualScheduler

SCREEN_W = 1280
SCREEN_H = 720
CENTER = Vec2(SCREEN_W / 2, SCREEN_H / 2)


def down(position: Vec2 = CENTER) -> PointerSample:
    return PointerSample(position, is_down=True, is_held=True)


def held(position: Vec2 = CENTER) -> PointerSample:
    return PointerSample(position, is_down=False, is_held=True)


def up(position: Vec2 = CENTER) -> PointerSample:
    return PointerSample(position, is_down=False, is_held=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def controller(settings, scheduler, event_bus) -> MoodLightController:
    ctrl = MoodLightController(settings=settings, scheduler=scheduler, event_bus=event_bus)
    ctrl.on_resize(SCREEN_W, SCREEN_H)
    return ctrl
