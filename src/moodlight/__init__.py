"""Touch-driven HSV mood light."""

from .controller import JoystickMarkers, MoodLightController

__version__ = "0.1.0"

__all__ = ["MoodLightController", "JoystickMarkers"]
