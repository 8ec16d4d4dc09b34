"""Configuration for skew computations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import DEFAULT_N_JOBS, DEFAULT_SPLIT_EVERY, RoundingMode


@dataclass
class SkewConfig:
    """Skew config."""

    rounding: RoundingMode = RoundingMode.NEAREST
    n_jobs: int = DEFAULT_N_JOBS
    split_every: int = DEFAULT_SPLIT_EVERY
    combine_local: bool = True

    def __post_init__(self):
        try:
            self.rounding = RoundingMode(self.rounding)
        except ValueError:
            choices = ", ".join(repr(m.value) for m in RoundingMode)
            raise ValueError(f"rounding must be one of {choices}, got {self.rounding!r}.") from None
        if not isinstance(self.n_jobs, int) or self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be -1 or a positive integer, got {self.n_jobs!r}.")
        if not isinstance(self.split_every, int) or self.split_every < 2:
            raise ValueError(f"split_every must be an integer >= 2, got {self.split_every!r}.")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {k: v.value if isinstance(v, Enum) else v for k, v in self.__dict__.items()}
