"""Open/closed state of the configuration panel."""

from typing import Callable
import logging

logger = logging.getLogger(__name__)


class ConfigPanel:
    """
    Configuration panel visibility.

    The panel itself is drawn by the host; the core only needs to set
    and query whether it is shown.
    """

    def __init__(self, is_open: bool = False) -> None:
        self._open = is_open
        self._listeners: list[Callable[[bool], None]] = []

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self._set(True)

    def close(self) -> None:
        self._set(False)

    def toggle(self) -> None:
        self._set(not self._open)

    def add_listener(self, callback: Callable[[bool], None]) -> None:
        """Add a visibility listener, called with the new state."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[bool], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _set(self, is_open: bool) -> None:
        if is_open == self._open:
            return
        self._open = is_open
        logger.info(f"Config panel {'opened' if is_open else 'closed'}")

        for listener in self._listeners:
            try:
                listener(is_open)
            except Exception as e:
                logger.error(f"Error in panel listener: {e}")
