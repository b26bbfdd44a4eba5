"""Test signal generation."""

import numpy as np

# Peak integer value and offset used when quantizing [-1, 1] floats.
_SCALE = {
    8: (127, 128),
    16: (32767, 0),
    32: (2147483647, 0),
}


def pure_tone(frequency, duration, sample_rate, amplitude=0.5, channels=1):
    """Generate a pure sine wave tone.

    Args:
        frequency: Frequency in Hz
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        amplitude: Amplitude (0-1)
        channels: Copies of the tone, one per column

    Returns:
        Float signal of shape (n_samples,) or (n_samples, channels)
    """
    t = np.arange(int(sample_rate * duration)) / sample_rate
    signal = amplitude * np.sin(2 * np.pi * frequency * t)
    if channels > 1:
        signal = np.repeat(signal[:, None], channels, axis=1)
    return signal


def quantize(signal: np.ndarray, bits_per_sample: int) -> np.ndarray:
    """Scale a [-1, 1] float signal to integer PCM of the given width.

    8-bit PCM is unsigned and centred on 128; wider formats are signed.
    """
    if bits_per_sample not in _SCALE:
        raise ValueError(f"Unsupported bits per sample: {bits_per_sample}")

    peak, offset = _SCALE[bits_per_sample]
    scaled = np.round(np.clip(signal, -1.0, 1.0) * peak) + offset
    return scaled.astype(np.int64)
