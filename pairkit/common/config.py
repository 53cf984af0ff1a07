import logging
import random
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pairkit.common.models import MatchType

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class PhaseConfig(BaseModel):
    """One phase of a tournament: a Swiss stage or a single-elimination bracket."""

    name: str = "Main"
    type: Literal["swiss", "bracket"]
    match_type: MatchType = MatchType.BO3
    rounds: int | None = None
    top_cut: int | None = None

    @field_validator("rounds")
    @classmethod
    def validate_rounds(cls, v: int | None) -> int | None:
        """Validate rounds is at least 1."""
        if v is not None and v < 1:
            raise ValueError("rounds must be at least 1")
        return v

    @field_validator("top_cut")
    @classmethod
    def validate_top_cut(cls, v: int | None) -> int | None:
        """Validate top_cut leaves room for at least one match."""
        if v is not None and v < 2:
            raise ValueError("top_cut must be at least 2")
        return v

    @model_validator(mode="after")
    def validate_phase_type(self) -> "PhaseConfig":
        """Reject options that only make sense for the other phase type."""
        if self.type == "bracket" and self.rounds is not None:
            raise ValueError("rounds can only be set on a swiss phase")
        if self.type == "swiss" and self.top_cut is not None:
            raise ValueError("top_cut can only be set on a bracket phase")
        return self


class Settings(BaseSettings):
    shuffle_seed: int | None = None
    require_confirmation: bool = False
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="PAIRKIT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Validate and normalize log_level, using default if invalid."""
        default_level = "WARNING"
        if v is None:
            return default_level
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning(f"Invalid log_level value: {v!r}. Using default: {default_level}")
            return default_level
        return level

    def make_rng(self) -> random.Random:
        """Create the randomness source used for round-1 shuffles.

        A configured ``shuffle_seed`` makes every shuffle reproducible, which
        is how a past draw is replayed. Without it the generator is seeded
        from OS entropy.
        """
        return random.Random(self.shuffle_seed)


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the ``pairkit`` logger hierarchy.

    Handlers are left to the host application.
    """
    logging.getLogger("pairkit").setLevel(settings.log_level)
