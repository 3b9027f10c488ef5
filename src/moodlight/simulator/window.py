"""
Main simulator window using pygame.

Drives a MoodLightController from mouse input and paints the result,
with the config panel drawn as a bottom sheet of tab strips.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass

import pygame

from ..config.settings import SimulatorSettings
from ..controller import MoodLightController
from ..core.events import Event
from ..core.flash import FlashColor
from ..core.mapping import Channel
from .mock_hardware.display import SimulatedBackground
from .mock_hardware.input import SimulatedPointer
from .tab_strip import TabStrip

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1280
    height: int = 720
    title: str = "Mood Light"
    fullscreen: bool = False
    fps: int = 60
    show_debug: bool = True

    # Config panel
    strip_height: int = 48
    panel_padding: int = 12

    # Colors
    panel_color: tuple[int, int, int] = (40, 40, 50)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (100, 150, 255)

    @classmethod
    def from_settings(cls, settings: SimulatorSettings) -> "WindowConfig":
        return cls(
            width=settings.width,
            height=settings.height,
            title=settings.title,
            fullscreen=settings.fullscreen,
            fps=settings.fps,
            show_debug=settings.show_debug,
        )


def channel_names() -> list[str]:
    return [channel.name.title() for channel in Channel]


def flash_color_names() -> list[str]:
    return [color.name.title() for color in FlashColor]


class SimulatorWindow:
    """
    Desktop host for the mood light.

    Mouse Mapping:
        LEFT BUTTON: Tap to flash, hold to summon the joystick
        Bottom 10% of the window: Open config panel

    Keyboard Mapping:
        D: Toggle debug overlay
        R: Reset controller
        ESC / Q: Exit simulator
    """

    def __init__(
        self,
        controller: MoodLightController,
        config: WindowConfig | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.controller = controller

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = self.config.show_debug

        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        joy = controller.settings.joystick
        self.background = SimulatedBackground(
            self.config.width,
            self.config.height,
            outer_marker_width=joy.outer_marker_width,
            inner_marker_width=joy.inner_marker_width,
        )
        self.pointer = SimulatedPointer(self.config.height)

        mapping = controller.mapping
        flash = controller.flash.config
        self.strips = [
            TabStrip("Horizontal", channel_names(), controller.set_horizontal_channel,
                     default_index=mapping.horizontal.value),
            TabStrip("Vertical", channel_names(), controller.set_vertical_channel,
                     default_index=mapping.vertical.value),
            TabStrip("Flash color", flash_color_names(), controller.set_flash_color,
                     default_index=flash.color.value),
            TabStrip("Flash", ["Off", "On"],
                     lambda index: controller.set_flash_enabled(index == 1),
                     default_index=1 if flash.enabled else 0),
        ]
        self._panel_rect = pygame.Rect(0, 0, 0, 0)

        # Recent events for the overlay
        self._recent_events: deque[str] = deque(maxlen=5)
        controller.event_bus.subscribe_all(self._on_event)

        self._apply_size(self.config.width, self.config.height)
        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF | pygame.RESIZABLE
        if self.config.fullscreen:
            flags = pygame.DOUBLEBUF | pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24)
        self._small_font = pygame.font.SysFont(None, 18)

        width, height = self._screen.get_size()
        self._apply_size(width, height)

        logger.info(f"Pygame initialized: {width}x{height}")

    def _apply_size(self, width: int, height: int) -> None:
        """Propagate a window size to every size-dependent part."""
        self.config.width = width
        self.config.height = height
        self.background.resize(width, height)
        self.pointer.screen_height = height
        self.controller.on_resize(width, height)
        self._calculate_layout()

    def _calculate_layout(self) -> None:
        """Calculate the config panel sheet and strip positions."""
        w, h = self.config.width, self.config.height
        pad = self.config.panel_padding
        strip_h = self.config.strip_height
        panel_h = len(self.strips) * strip_h + pad * 2

        self._panel_rect = pygame.Rect(0, h - panel_h, w, panel_h)
        for i, strip in enumerate(self.strips):
            strip.set_rect(pygame.Rect(
                pad, self._panel_rect.y + pad + i * strip_h, w - pad * 2, strip_h
            ))

    def is_over_panel(self, pos: tuple[int, int]) -> bool:
        """Pointer is over the open config panel (top-left pixels)."""
        return self.controller.panel.is_open and self._panel_rect.collidepoint(pos)

    def _on_event(self, event: Event) -> None:
        name = event.type.name if hasattr(event.type, "name") else str(event.type)
        self._recent_events.append(name)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.VIDEORESIZE:
                self._apply_size(event.w, event.h)

            elif event.type == pygame.MOUSEMOTION:
                self.pointer._move(*event.pos)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.pointer._press(*event.pos)
                if self.is_over_panel(event.pos):
                    for strip in self.strips:
                        if strip.handle_click(event.pos):
                            break

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.pointer._release(*event.pos)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_r:
            self.controller.reset()

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self.background.paint(self.controller.color, self.controller.joystick_markers)
        self._screen.blit(self.background.render(), (0, 0))

        if self.controller.panel.is_open:
            self._render_panel()
        if self._show_debug:
            self._render_debug()

        pygame.display.flip()

    def _render_panel(self) -> None:
        """Render the config panel bottom sheet."""
        surf = pygame.Surface(self._panel_rect.size, pygame.SRCALPHA)
        surf.fill((*self.config.panel_color, 230))
        self._screen.blit(surf, self._panel_rect.topleft)

        if not self._small_font:
            return
        for strip in self.strips:
            strip.render(self._screen, self._small_font)

    def _render_debug(self) -> None:
        """Render the debug overlay."""
        if not self._small_font:
            return

        color = self.controller.color
        speeds = self.controller.speeds
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Gesture: {self.controller.gesture_state.name}",
            f"HSV: {color.hue:.3f} {color.saturation:.3f} {color.brightness:.3f}",
            f"Speed: {speeds.hue:+.2f} {speeds.saturation:+.2f} {speeds.brightness:+.2f}",
            f"Flash: {'on' if self.controller.flash.config.enabled else 'off'}",
            "",
            *self._recent_events,
        ]

        y = 10
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (10, y))
            y += 16

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                sample = self.pointer.sample()
                over_ui = self.is_over_panel(pygame.mouse.get_pos())
                self.controller.tick(delta, sample, over_blocking_ui=over_ui)

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Lets pending flash restores run between frames
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.controller.shutdown()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
