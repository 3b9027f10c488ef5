"""
Tab strips for the simulator's config panel.

Each strip shows a label and a row of tabs of which exactly one is
picked. Picking a tab forwards its index to a selection callback.
"""

from typing import Callable
import logging

import pygame

from ..core.errors import InvalidSelectionError

logger = logging.getLogger(__name__)


class TabStrip:
    """Row of mutually exclusive tabs."""

    LABEL_WIDTH = 150

    picked_color = (240, 240, 250)
    default_color = (60, 60, 80)
    picked_text = (20, 20, 30)
    default_text = (200, 200, 220)

    def __init__(
        self,
        label: str,
        tabs: list[str],
        on_pick: Callable[[int], None] | None = None,
        default_index: int = 0,
    ) -> None:
        if not tabs:
            raise ValueError("TabStrip needs at least one tab")

        self.label = label
        self.tabs = list(tabs)
        self._on_pick = on_pick
        self._rect = pygame.Rect(0, 0, 0, 0)

        if not 0 <= default_index < len(self.tabs):
            logger.warning(
                f"Default tab {default_index} does not belong to strip '{label}', using 0"
            )
            default_index = 0
        self._current = default_index

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_tab(self) -> str:
        return self.tabs[self._current]

    @property
    def rect(self) -> pygame.Rect:
        return self._rect

    def set_rect(self, rect: pygame.Rect) -> None:
        self._rect = pygame.Rect(rect)

    def tab_rects(self) -> list[pygame.Rect]:
        """Screen rectangles of the tabs, left to right."""
        area = self._rect.copy()
        area.width -= self.LABEL_WIDTH
        area.x += self.LABEL_WIDTH
        if area.width <= 0:
            return [pygame.Rect(area.x, area.y, 0, area.height) for _ in self.tabs]

        tab_w = area.width // len(self.tabs)
        return [
            pygame.Rect(area.x + i * tab_w, area.y, tab_w, area.height)
            for i in range(len(self.tabs))
        ]

    def hit_test(self, pos: tuple[int, int]) -> int | None:
        """Index of the tab under pos (top-left pixels), if any."""
        for i, tab_rect in enumerate(self.tab_rects()):
            if tab_rect.collidepoint(pos):
                return i
        return None

    def pick(self, index: int) -> None:
        """Pick a tab and forward the selection.

        Raises:
            InvalidSelectionError: index is not one of this strip's tabs
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError(self.label, index, len(self.tabs))
        if not 0 <= index < len(self.tabs):
            raise InvalidSelectionError(self.label, index, len(self.tabs))

        # Callback validates too; only move the highlight once it accepted
        if self._on_pick:
            self._on_pick(index)
        self._current = index
        logger.debug(f"{self.label}: {self.tabs[index]}")

    def handle_click(self, pos: tuple[int, int]) -> bool:
        """Pick the tab under pos. Returns True if a tab was hit."""
        index = self.hit_test(pos)
        if index is None:
            return False
        self.pick(index)
        return True

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        label_surf = font.render(self.label, True, self.default_text)
        surface.blit(
            label_surf,
            label_surf.get_rect(midleft=(self._rect.x + 10, self._rect.centery)),
        )

        for i, (name, tab_rect) in enumerate(zip(self.tabs, self.tab_rects())):
            picked = i == self._current
            cell = tab_rect.inflate(-6, -6)
            pygame.draw.rect(
                surface,
                self.picked_color if picked else self.default_color,
                cell,
                border_radius=6,
            )
            text = font.render(name, True, self.picked_text if picked else self.default_text)
            surface.blit(text, text.get_rect(center=cell.center))
