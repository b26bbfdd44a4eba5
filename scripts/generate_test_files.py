#!/usr/bin/env python3
"""Generate WAV fixture files, valid and broken, for exercising readers."""

import argparse
import os

from wavecodec import WavContainer, encode
from wavecodec.bytecodec import u16_to_bytes_le, u32_to_bytes_le
from wavecodec.tones import pure_tone, quantize


def tone_file(frequency, duration, sample_rate, bits, channels=1):
    """Encoded sine tone at the given format."""
    signal = pure_tone(frequency, duration, sample_rate, channels=channels)
    return encode(WavContainer.from_samples(quantize(signal, bits), sample_rate, channels, bits))


def malformed_file(base):
    """Valid file with the WAVE tag replaced."""
    return base[:8] + b"WAVX" + base[12:]


def compressed_file(base):
    """Valid file claiming audio format 2 (ADPCM)."""
    return base[:20] + u16_to_bytes_le(2) + base[22:]


def truncated_file(base, keep=500):
    """Header declaring more payload than the file holds."""
    header = base[:40] + u32_to_bytes_le(keep * 2)
    return header + base[44:44 + keep]


def main():
    parser = argparse.ArgumentParser(description="Generate WAV fixture files")
    parser.add_argument("--output-dir", default="res", help="Output directory (default: res)")
    parser.add_argument("--sample-rate", type=int, default=8000, help="Sample rate (default: 8000)")
    args = parser.parse_args()

    os.makedirs(args.output_dir, exist_ok=True)

    base = tone_file(440, 0.5, args.sample_rate, 16)
    files = {
        "tone_8bit.wav": tone_file(440, 0.5, args.sample_rate, 8),
        "tone_16bit.wav": base,
        "tone_32bit.wav": tone_file(440, 0.5, args.sample_rate, 32),
        "tone_16bit_stereo.wav": tone_file(440, 0.5, args.sample_rate, 16, channels=2),
        "malformed.wav": malformed_file(base),
        "compressed.wav": compressed_file(base),
        "truncated.wav": truncated_file(base),
    }

    for name, data in files.items():
        path = os.path.join(args.output_dir, name)
        with open(path, "wb") as f:
            f.write(data)
        print(f"Generated: {path} ({len(data)} bytes)")


if __name__ == "__main__":
    main()
