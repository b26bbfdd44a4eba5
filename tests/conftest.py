from __future__ import annotations

import struct

import numpy as np
import pytest

from wavecodec import WavContainer
from wavecodec.config import get_settings


def build_wav(
    payload: bytes = b"",
    *,
    riff: bytes = b"RIFF",
    wave: bytes = b"WAVE",
    fmt: bytes = b"fmt ",
    data: bytes = b"data",
    audio_format: int = 1,
    channels: int = 1,
    sample_rate: int = 8000,
    bits_per_sample: int = 16,
    byte_rate: int | None = None,
    block_align: int | None = None,
    data_size: int | None = None,
    riff_size: int | None = None,
) -> bytes:
    """Assemble a WAV file by hand, independently of the codec under test."""
    if block_align is None:
        block_align = channels * bits_per_sample // 8
    if byte_rate is None:
        byte_rate = sample_rate * block_align
    if data_size is None:
        data_size = len(payload)
    if riff_size is None:
        riff_size = 36 + data_size

    header = riff + struct.pack("<I", riff_size) + wave
    header += fmt + struct.pack(
        "<IHHIIHH", 16, audio_format, channels, sample_rate, byte_rate, block_align, bits_per_sample
    )
    header += data + struct.pack("<I", data_size)
    return header + payload


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("WAVECODEC_DATA_SIZE_WIDTH", raising=False)
    monkeypatch.delenv("WAVECODEC_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sine_samples() -> np.ndarray:
    t = np.arange(100_000) / 8000
    return np.round(np.sin(2 * np.pi * 440 * t) * 20000).astype(np.int16)


@pytest.fixture
def sine_container(sine_samples: np.ndarray) -> WavContainer:
    return WavContainer.from_samples(sine_samples, 8000, channels=1, bits_per_sample=16)
