"""Pydantic settings for plan computation and animation timing."""

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


AnimationSpeed = Literal["snail", "turtle", "rabbit"]

#: How much slower than normal each speed preset plays.
SPEED_MULTIPLIERS: dict[str, float] = {
    "snail": 4.0,
    "turtle": 2.0,
    "rabbit": 1.0,
}

#: Upper bound for every duration when reduced motion is requested.
REDUCED_MOTION_MAX_MS = 50


class WordmorphSettings(BaseSettings):
    """Configuration read from ``WORDMORPH_*`` environment variables or ``.env``."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="WORDMORPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    highlight_threshold: int = Field(
        default=1,
        ge=0,
        description="Largest displacement of a move that is still highlighted.",
    )
    animation_speed: AnimationSpeed = Field(
        default="rabbit",
        description="Speed preset applied to every phase duration.",
    )
    reduced_motion: bool = Field(
        default=False,
        description="Cap every duration for users who prefer reduced motion.",
    )
    idle_ms: int = Field(default=0, ge=0)
    deleting_ms: int = Field(default=400, ge=0)
    moving_ms: int = Field(default=1000, ge=0)
    inserting_ms: int = Field(default=300, ge=0)
    final_ms: int = Field(default=0, ge=0)
    deletion_hold_ms: int = Field(
        default=150,
        ge=0,
        description="How long the post-removal deleting frame is held.",
    )

    @field_validator("animation_speed", mode="before")
    @classmethod
    def _normalise_speed(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def speed_multiplier(self) -> float:
        return SPEED_MULTIPLIERS[self.animation_speed]


@lru_cache(maxsize=1)
def get_settings() -> WordmorphSettings:
    """Return a cached settings instance."""

    return WordmorphSettings()


__all__ = [
    "AnimationSpeed",
    "REDUCED_MOTION_MAX_MS",
    "SPEED_MULTIPLIERS",
    "WordmorphSettings",
    "get_settings",
]
