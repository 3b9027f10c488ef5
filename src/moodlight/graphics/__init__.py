"""Graphics helpers for the mood light display."""

from moodlight.graphics.primitives import contrast_color, draw_circle, fill

__all__ = ["contrast_color", "draw_circle", "fill"]
