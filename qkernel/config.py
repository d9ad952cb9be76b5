"""
Configuration for the gate-application engine.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class EngineConfig:
    """Execution settings for an ``Applier``."""

    # Use closed-form transforms for gates that have them
    use_specialized: bool = True

    # Hand all index groups of one operation to the kernel as a single stack
    batch_blocks: bool = True

    # Threads sharing the blocks of one operation (1 = no pool)
    max_workers: int = 1
    min_blocks_per_worker: int = 4096

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.min_blocks_per_worker < 1:
            raise ValueError(
                f"min_blocks_per_worker must be >= 1, got {self.min_blocks_per_worker}"
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Read settings from QKERNEL_* environment variables."""
        return cls(
            use_specialized=_env_bool("QKERNEL_USE_SPECIALIZED", cls.use_specialized),
            batch_blocks=_env_bool("QKERNEL_BATCH_BLOCKS", cls.batch_blocks),
            max_workers=_env_int("QKERNEL_MAX_WORKERS", cls.max_workers),
            min_blocks_per_worker=_env_int(
                "QKERNEL_MIN_BLOCKS_PER_WORKER", cls.min_blocks_per_worker
            ),
        )


# Default configuration instance
DEFAULT_CONFIG = EngineConfig()
