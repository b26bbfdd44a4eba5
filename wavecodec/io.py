"""Audio file I/O utilities."""

import logging
from typing import Optional

import numpy as np

from .container import WavContainer, decode, encode
from .streams import ByteSource, open_sink, open_source

logger = logging.getLogger(__name__)


def read_wave(filename: str, data_size_width: Optional[int] = None) -> WavContainer:
    """Read a WAV file into a container.

    Args:
        filename: Path to WAV file
        data_size_width: Bytes in the data size field, 4 or 8

    Returns:
        container: Decoded header chunks and samples

    Raises:
        WavError: SOURCE_UNAVAILABLE if the file cannot be opened, otherwise
            the first structural problem found in its contents
    """
    with open_source(filename) as stream:
        container = decode(ByteSource(stream), data_size_width)

    logger.info(
        "Read %s: %d Hz, %d ch, %d-bit, %d frames",
        filename,
        container.fmt.sample_rate,
        container.fmt.channels,
        container.fmt.bits_per_sample,
        container.n_frames,
    )
    return container


def write_wave(
    filename: str,
    container: WavContainer,
    recompute_derived: bool = False,
    data_size_width: Optional[int] = None,
) -> int:
    """Write a container to a WAV file.

    Args:
        filename: Output WAV file path
        container: Container to write
        recompute_derived: Recompute byte rate and block align on the way out
        data_size_width: Bytes in the data size field, 4 or 8

    Returns:
        Number of bytes written
    """
    # Encode first so a rejected container never creates or truncates the file.
    data = encode(container, recompute_derived, data_size_width)
    with open_sink(filename) as stream:
        stream.write(data)
    written = len(data)

    logger.info("Wrote %d bytes to %s", written, filename)
    return written


def write_samples(
    filename: str, audio_data: np.ndarray, sample_rate: int, sample_width: int = 2
) -> WavContainer:
    """Write integer samples to a WAV file.

    Args:
        filename: Output WAV file path
        audio_data: Integer samples, shape (n_samples, n_channels) or (n_samples,)
        sample_rate: Sample rate in Hz
        sample_width: Bytes per sample (1, 2, or 4)

    Returns:
        The container that was written
    """
    container = WavContainer.from_samples(audio_data, sample_rate, bits_per_sample=sample_width * 8)
    write_wave(filename, container)
    return container
