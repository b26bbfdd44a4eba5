"""wavecodec - Read and write canonical PCM WAV files."""

from .container import (
    DataDescriptor,
    FormatDescriptor,
    Pcm8Payload,
    Pcm16Payload,
    Pcm32Payload,
    RiffDescriptor,
    WavContainer,
    decode,
    describe,
    encode,
)
from .errors import ErrorKind, HeaderField, WavError
from .io import read_wave, write_samples, write_wave

__version__ = "0.1.0"
__all__ = [
    "WavContainer",
    "RiffDescriptor",
    "FormatDescriptor",
    "DataDescriptor",
    "Pcm8Payload",
    "Pcm16Payload",
    "Pcm32Payload",
    "decode",
    "encode",
    "describe",
    "read_wave",
    "write_wave",
    "write_samples",
    "WavError",
    "ErrorKind",
    "HeaderField",
]
