"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. MOODLIGHT_FLASH__DURATION=0.2.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GestureSettings(BaseModel):
    """Tap/hold disambiguation."""

    tap_hold_threshold_ms: float = Field(default=300.0, ge=0.0)

    # Bottom share of the screen that reveals the config panel
    reveal_band_fraction: float = Field(default=0.1, ge=0.0, le=1.0)


class JoystickSettings(BaseModel):
    """Virtual joystick geometry and response."""

    # Per-channel speed multipliers
    hue_speed_scale: float = 1.0
    saturation_speed_scale: float = 1.0
    brightness_speed_scale: float = 1.0

    # Outer marker width in pixels, drives the joystick radius
    outer_marker_width: float = Field(default=200.0, gt=0.0)
    inner_marker_width: float = Field(default=80.0, gt=0.0)
    size_factor: float = Field(default=0.006, gt=0.0)

    # Orthographic half-height of the view in world units
    camera_size: float = Field(default=5.0, gt=0.0)

    # Initial axis selection (0=hue, 1=saturation, 2=brightness)
    horizontal_channel: int = Field(default=0, ge=0, le=2)
    vertical_channel: int = Field(default=1, ge=0, le=2)


class FlashSettings(BaseModel):
    """Tap flash."""

    color: Literal["white", "black", "inverse"] = "white"
    duration: float = Field(default=0.1, gt=0.0)
    enabled: bool = True


class ColorSettings(BaseModel):
    """Initial background color (HSV)."""

    hue: float = Field(default=0.5, ge=0.0, lt=1.0)
    saturation: float = Field(default=1.0, ge=0.0, le=1.0)
    brightness: float = Field(default=0.7, ge=0.0, le=1.0)


class SimulatorSettings(BaseModel):
    """Desktop simulator window."""

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = Field(default=60, ge=1, le=240)
    fullscreen: bool = False
    title: str = "Mood Light"
    show_debug: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MOODLIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Nested settings
    gesture: GestureSettings = Field(default_factory=GestureSettings)
    joystick: JoystickSettings = Field(default_factory=JoystickSettings)
    flash: FlashSettings = Field(default_factory=FlashSettings)
    color: ColorSettings = Field(default_factory=ColorSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
