from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import numpy as np
import pytest

from conftest import build_wav
from wavecodec import ErrorKind, WavError, describe, read_wave, write_samples, write_wave
from wavecodec.config import Settings
from wavecodec.tones import pure_tone, quantize


def test_read_nonexistent_file_is_source_unavailable(tmp_path: Path) -> None:
    with pytest.raises(WavError) as excinfo:
        read_wave(str(tmp_path / "nonexistent.wav"))

    assert excinfo.value.kind is ErrorKind.SOURCE_UNAVAILABLE
    assert excinfo.value.code == -8
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_read_directory_is_source_unavailable(tmp_path: Path) -> None:
    with pytest.raises(WavError) as excinfo:
        read_wave(str(tmp_path))

    assert excinfo.value.kind is ErrorKind.SOURCE_UNAVAILABLE


def test_write_into_missing_directory_is_source_unavailable(sine_container, tmp_path: Path) -> None:
    with pytest.raises(WavError) as excinfo:
        write_wave(str(tmp_path / "missing" / "out.wav"), sine_container)

    assert excinfo.value.kind is ErrorKind.SOURCE_UNAVAILABLE


def test_malformed_file_reports_header_code(tmp_path: Path) -> None:
    path = tmp_path / "malformed.wav"
    path.write_bytes(build_wav(b"\x00\x00", wave=b"WAVX"))

    with pytest.raises(WavError) as excinfo:
        read_wave(str(path))

    assert -4 <= excinfo.value.code <= -1


def test_file_round_trip(sine_container, tmp_path: Path) -> None:
    path = tmp_path / "sine.wav"

    written = write_wave(str(path), sine_container)
    reread = read_wave(str(path))

    assert written == path.stat().st_size == 200_044
    assert describe(reread) == describe(sine_container)
    assert np.array_equal(reread.samples, sine_container.samples)


def test_write_samples_uses_sample_width_in_bytes(tmp_path: Path) -> None:
    path = tmp_path / "stereo.wav"
    audio = np.array([[1, -1], [2, -2]], dtype=np.int32)

    write_samples(str(path), audio, 32000, sample_width=4)
    reread = read_wave(str(path))

    assert reread.fmt.bits_per_sample == 32
    assert reread.fmt.channels == 2
    assert reread.frames().tolist() == [[1, -1], [2, -2]]


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAVECODEC_DATA_SIZE_WIDTH", "8")
    monkeypatch.setenv("WAVECODEC_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.data_size_width == 8
    assert settings.log_level == "DEBUG"


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.data_size_width == 4
    assert settings.log_level == "WARNING"


def test_settings_reject_bad_width() -> None:
    with pytest.raises(ValueError):
        Settings(data_size_width=6)


def test_quantized_tone_fits_each_width() -> None:
    signal = pure_tone(440, 0.01, 8000, amplitude=1.0)

    assert quantize(signal, 8).min() >= 0
    assert quantize(signal, 8).max() <= 255
    assert np.abs(quantize(signal, 16)).max() <= 32767
    assert pure_tone(440, 0.01, 8000, channels=2).shape == (80, 2)


def test_rejected_container_creates_no_file(sine_container, tmp_path: Path) -> None:
    path = tmp_path / "bad.wav"
    sine_container.fmt = replace(sine_container.fmt, bits_per_sample=24)

    with pytest.raises(WavError):
        write_wave(str(path), sine_container)

    assert not path.exists()


def test_rejected_container_leaves_existing_file_intact(sine_container, tmp_path: Path) -> None:
    path = tmp_path / "existing.wav"
    original = build_wav(b"\x01\x00\x02\x00")
    path.write_bytes(original)
    sine_container.fmt = replace(sine_container.fmt, channels=70000)

    with pytest.raises(ValueError):
        write_wave(str(path), sine_container)

    assert path.read_bytes() == original
