"""Environment-driven settings."""

import os
from dataclasses import dataclass, field
from functools import lru_cache

# Byte widths accepted for the data chunk size field.
DATA_SIZE_WIDTHS = (4, 8)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass
class Settings:
    """Codec defaults, read from the environment when constructed.

    WAVECODEC_DATA_SIZE_WIDTH picks how many bytes hold the data chunk size:
    4 for canonical files, 8 for the variant that stores it as 64 bits.
    """

    data_size_width: int = field(default_factory=lambda: _env_int("WAVECODEC_DATA_SIZE_WIDTH", 4))
    log_level: str = field(default_factory=lambda: os.getenv("WAVECODEC_LOG_LEVEL", "WARNING").upper())

    def __post_init__(self):
        if self.data_size_width not in DATA_SIZE_WIDTHS:
            raise ValueError(
                f"data_size_width must be one of {DATA_SIZE_WIDTHS}, got {self.data_size_width}"
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance to avoid repeated environment reads."""
    return Settings()
