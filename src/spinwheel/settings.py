"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. SPINWHEEL_WHEEL__SETTLE_MS=2500.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WheelSettings(BaseModel):
    """Spin timing and turn policy."""

    # Settle delay, kept equal to the spin animation length
    settle_ms: int = Field(default=4000, ge=0)

    # Whole turns per spin: min_turns plus 0..extra_turns
    min_turns: int = Field(default=5, ge=1)
    extra_turns: int = Field(default=3, ge=0)

    # Rendering size hint in pixels
    size: int = Field(default=300, gt=0)

    # YAML segment set; None uses the built-in daily wheel
    segments_file: Path | None = None


class DisplaySettings(BaseModel):
    """Simulator window settings."""

    window_width: int = 480
    window_height: int = 560
    fps: int = 60
    bg_color: tuple[int, int, int] = (20, 20, 30)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPINWHEEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    seed: int | None = None

    config_path: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent.parent / "config"
    )

    wheel: WheelSettings = Field(default_factory=WheelSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def wheels_path(self) -> Path:
        """Directory holding bundled wheel YAML files."""
        return self.config_path / "wheels"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
