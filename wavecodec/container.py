"""WAV container model and the decode/encode paths."""

import logging
from dataclasses import dataclass, replace
from typing import BinaryIO, Optional, Union

import numpy as np

from .bytecodec import (
    ascii_to_bytes,
    bytes_to_ascii,
    bytes_to_u16_le,
    bytes_to_u32_le,
    bytes_to_u64_le,
    u16_to_bytes_le,
    u32_to_bytes_le,
    u64_to_bytes_le,
)
from .config import DATA_SIZE_WIDTHS, get_settings
from .errors import ErrorKind, HeaderField, WavError
from .streams import ByteSink, ByteSource

logger = logging.getLogger(__name__)

# Only linear PCM is supported; every other format code is compressed audio.
FORMAT_PCM = 1

ID_RIFF = HeaderField.RIFF.value
ID_WAVE = HeaderField.WAVE.value
ID_FMT = HeaderField.FMT.value
ID_DATA = HeaderField.DATA.value

# Bytes after the RIFF size field up to the end of a 4-byte data size field.
HEADER_SIZE = 36
FMT_CHUNK_SIZE = 16


@dataclass(frozen=True)
class RiffDescriptor:
    chunk_id: str = ID_RIFF
    chunk_size: int = 0
    format: str = ID_WAVE


@dataclass(frozen=True)
class FormatDescriptor:
    chunk_id: str = ID_FMT
    chunk_size: int = FMT_CHUNK_SIZE
    audio_format: int = FORMAT_PCM
    channels: int = 1
    sample_rate: int = 44100
    byte_rate: int = 88200
    block_align: int = 2
    bits_per_sample: int = 16

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @classmethod
    def for_samples(cls, sample_rate: int, channels: int, bits_per_sample: int) -> "FormatDescriptor":
        """Build a PCM format block with byte rate and block align derived."""
        return cls(
            channels=channels, sample_rate=sample_rate, bits_per_sample=bits_per_sample
        ).with_derived_rates()

    def with_derived_rates(self) -> "FormatDescriptor":
        block_align = self.channels * self.bytes_per_sample
        return replace(self, block_align=block_align, byte_rate=self.sample_rate * block_align)


@dataclass(frozen=True)
class DataDescriptor:
    chunk_id: str = ID_DATA
    chunk_size: int = 0


class SamplePayload:
    """Decoded samples for one sample width.

    Subclasses fix the width and the little-endian dtype. The raw bytes are
    always produced from the typed samples, so the two cannot disagree.
    """

    bits_per_sample = None
    dtype = None

    def __init__(self, samples: np.ndarray):
        if samples.dtype != self.dtype or samples.ndim != 1:
            raise ValueError(f"{type(self).__name__} needs a flat {self.dtype} array")
        self._samples = samples

    @classmethod
    def from_bytes(cls, raw: bytes) -> "SamplePayload":
        return cls(np.frombuffer(raw, dtype=cls.dtype))

    @classmethod
    def from_samples(cls, samples) -> "SamplePayload":
        values = np.asarray(samples)
        if values.dtype.kind not in "iu":
            raise TypeError(f"Samples must be integers, got dtype {values.dtype}")

        info = np.iinfo(cls.dtype)
        if values.size and (values.min() < info.min or values.max() > info.max):
            raise ValueError(
                f"Samples out of range for {cls.bits_per_sample}-bit PCM "
                f"[{info.min}, {info.max}]"
            )
        return cls(values.astype(cls.dtype).ravel())

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    @property
    def raw(self) -> bytes:
        return self._samples.tobytes()

    @property
    def nbytes(self) -> int:
        return self._samples.nbytes

    def __len__(self):
        return len(self._samples)

    def __repr__(self):
        return f"{type(self).__name__}(n_samples={len(self)})"


class Pcm8Payload(SamplePayload):
    """Unsigned 8-bit samples; the raw buffer is the sample sequence."""

    bits_per_sample = 8
    dtype = np.dtype("u1")


class Pcm16Payload(SamplePayload):
    bits_per_sample = 16
    dtype = np.dtype("<i2")


class Pcm32Payload(SamplePayload):
    bits_per_sample = 32
    dtype = np.dtype("<i4")


PAYLOAD_TYPES = {cls.bits_per_sample: cls for cls in (Pcm8Payload, Pcm16Payload, Pcm32Payload)}


def payload_type(bits_per_sample: int):
    """Return the payload class for a bit depth."""
    try:
        return PAYLOAD_TYPES[bits_per_sample]
    except KeyError:
        raise WavError(
            ErrorKind.UNSUPPORTED_SAMPLE_WIDTH,
            f"Unsupported bits per sample: {bits_per_sample} (expected 8, 16 or 32)",
        ) from None


def _data_size_width(data_size_width: Optional[int]) -> int:
    width = data_size_width if data_size_width is not None else get_settings().data_size_width
    if width not in DATA_SIZE_WIDTHS:
        raise ValueError(f"data_size_width must be one of {DATA_SIZE_WIDTHS}, got {width}")
    return width


class WavContainer:
    """A PCM WAV file held in memory: three header chunks plus samples."""

    def __init__(
        self,
        riff: RiffDescriptor,
        fmt: FormatDescriptor,
        data: DataDescriptor,
        payload: SamplePayload,
    ):
        if not isinstance(payload, payload_type(fmt.bits_per_sample)):
            raise WavError(
                ErrorKind.UNSUPPORTED_SAMPLE_WIDTH,
                f"{type(payload).__name__} does not hold {fmt.bits_per_sample}-bit samples",
            )
        if data.chunk_size != payload.nbytes:
            raise ValueError(
                f"Data chunk size {data.chunk_size} does not match payload of {payload.nbytes} bytes"
            )

        self.riff = riff
        self.fmt = fmt
        self.data = data
        self.payload = payload

    @classmethod
    def from_samples(
        cls,
        samples,
        sample_rate: int,
        channels: Optional[int] = None,
        bits_per_sample: int = 16,
        data_size_width: Optional[int] = None,
    ) -> "WavContainer":
        """Build a container around integer samples.

        Args:
            samples: Integer samples, shape (n_samples,) or (n_frames, n_channels).
                Multi-channel data is interleaved frame by frame.
            sample_rate: Sample rate in Hz
            channels: Channel count; defaults to the second dimension of
                `samples`, or 1 for flat input
            bits_per_sample: 8, 16 or 32
            data_size_width: Bytes in the data size field, 4 or 8

        Returns:
            Container whose byte rate and block align are derived from the
            format rather than supplied.
        """
        samples = np.asarray(samples)
        if channels is None:
            channels = samples.shape[1] if samples.ndim == 2 else 1
        if channels < 1:
            raise ValueError("channels must be >= 1")
        if sample_rate <= 0:
            raise ValueError("sample_rate must be > 0")

        payload = payload_type(bits_per_sample).from_samples(samples)
        if len(payload) % channels:
            raise ValueError(f"{len(payload)} samples do not split evenly into {channels} channels")

        width = _data_size_width(data_size_width)
        return cls(
            RiffDescriptor(chunk_size=HEADER_SIZE + (width - 4) + payload.nbytes),
            FormatDescriptor.for_samples(sample_rate, channels, bits_per_sample),
            DataDescriptor(chunk_size=payload.nbytes),
            payload,
        )

    @staticmethod
    def decode(source, data_size_width: Optional[int] = None) -> "WavContainer":
        return decode(source, data_size_width)

    def encode(self, recompute_derived: bool = False, data_size_width: Optional[int] = None) -> bytes:
        return encode(self, recompute_derived, data_size_width)

    def write_to(self, sink, recompute_derived: bool = False, data_size_width: Optional[int] = None) -> int:
        return write_to(self, sink, recompute_derived, data_size_width)

    def describe(self) -> str:
        return describe(self)

    @property
    def samples(self) -> np.ndarray:
        return self.payload.samples

    @property
    def raw(self) -> bytes:
        return self.payload.raw

    @property
    def n_frames(self) -> int:
        return len(self.payload) // max(self.fmt.channels, 1)

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.n_frames / self.fmt.sample_rate if self.fmt.sample_rate else 0.0

    def frames(self) -> np.ndarray:
        """Samples as (n_frames, n_channels), or flat for mono."""
        if self.fmt.channels > 1:
            return self.samples.reshape(-1, self.fmt.channels)
        return self.samples

    def __repr__(self):
        return (
            f"WavContainer(channels={self.fmt.channels}, sample_rate={self.fmt.sample_rate}, "
            f"bits_per_sample={self.fmt.bits_per_sample}, data_size={self.data.chunk_size})"
        )


def _expect_tag(reader: ByteSource, read, field: HeaderField) -> str:
    offset = reader.position
    tag = bytes_to_ascii(read(4, f'"{field.value}" tag'))
    if tag != field.value:
        raise WavError.malformed(field, tag, offset)
    return tag


def decode(
    source: Union[ByteSource, BinaryIO, bytes, bytearray, memoryview],
    data_size_width: Optional[int] = None,
) -> WavContainer:
    """Decode a complete WAV file.

    Args:
        source: ByteSource, binary file object, or bytes-like buffer
        data_size_width: Bytes in the data size field, 4 (canonical) or 8.
            Defaults to the configured setting.

    Returns:
        The decoded container

    Raises:
        WavError: On the first structural check that fails. Checks run in
            header order and nothing after a failed field is inspected.
    """
    width = _data_size_width(data_size_width)
    reader = source if isinstance(source, ByteSource) else ByteSource(source)

    def read(n, what):
        try:
            return reader.read_exact(n)
        except EOFError as exc:
            raise WavError(
                ErrorKind.TRUNCATED_HEADER, f"Input ended while reading {what}: {exc}"
            ) from exc

    try:
        # RIFF chunk
        riff_id = _expect_tag(reader, read, HeaderField.RIFF)
        riff_size = bytes_to_u32_le(read(4, "RIFF chunk size"))
        riff_format = _expect_tag(reader, read, HeaderField.WAVE)
        riff = RiffDescriptor(riff_id, riff_size, riff_format)

        # fmt chunk
        fmt_id = _expect_tag(reader, read, HeaderField.FMT)
        fmt_size = bytes_to_u32_le(read(4, "fmt chunk size"))
        audio_format = bytes_to_u16_le(read(2, "audio format"))
        if audio_format != FORMAT_PCM:
            raise WavError(
                ErrorKind.UNSUPPORTED_AUDIO_FORMAT,
                f"Cannot handle compressed audio (audio format {audio_format})",
            )
        channels = bytes_to_u16_le(read(2, "channel count"))
        sample_rate = bytes_to_u32_le(read(4, "sample rate"))
        byte_rate = bytes_to_u32_le(read(4, "byte rate"))
        block_align = bytes_to_u16_le(read(2, "block align"))
        bits_per_sample = bytes_to_u16_le(read(2, "bits per sample"))
        fmt = FormatDescriptor(
            fmt_id, fmt_size, audio_format, channels, sample_rate, byte_rate, block_align, bits_per_sample
        )

        # data chunk
        data_id = _expect_tag(reader, read, HeaderField.DATA)
        size_field = read(width, "data chunk size")
        data_size = bytes_to_u32_le(size_field) if width == 4 else bytes_to_u64_le(size_field)
        data = DataDescriptor(data_id, data_size)

        try:
            raw = reader.read_exact(data_size)
        except EOFError as exc:
            raise WavError(
                ErrorKind.TRUNCATED_PAYLOAD,
                f"Data chunk declares {data_size} bytes: {exc}",
            ) from exc

        cls = payload_type(bits_per_sample)
        if data_size % fmt.bytes_per_sample:
            raise WavError(
                ErrorKind.TRUNCATED_PAYLOAD,
                f"Data chunk of {data_size} bytes ends inside a {bits_per_sample}-bit sample",
            )
        container = WavContainer(riff, fmt, data, cls.from_bytes(raw))
    except WavError as err:
        logger.debug("Decode failed at byte %d (code %d): %s", reader.position, err.code, err.message)
        raise

    logger.debug("Decoded %r", container)
    return container


def _check_fits(value: int, width: int, name: str):
    if not 0 <= value < (1 << (8 * width)):
        raise ValueError(f"{name} {value} does not fit in {width} bytes")


def write_to(
    container: WavContainer,
    sink,
    recompute_derived: bool = False,
    data_size_width: Optional[int] = None,
) -> int:
    """Write the header fields and samples of `container` to `sink`.

    Args:
        container: Container to serialize
        sink: Object with a write(bytes) method
        recompute_derived: Recompute byte rate and block align from the
            channel count, sample rate and bit depth instead of passing the
            stored values through
        data_size_width: Bytes in the data size field, 4 or 8

    Returns:
        Number of bytes written
    """
    width = _data_size_width(data_size_width)
    fmt = container.fmt
    cls = payload_type(fmt.bits_per_sample)
    if not isinstance(container.payload, cls):
        raise WavError(
            ErrorKind.UNSUPPORTED_SAMPLE_WIDTH,
            f"Format declares {fmt.bits_per_sample}-bit samples but payload is "
            f"{type(container.payload).__name__}",
        )
    if recompute_derived:
        fmt = fmt.with_derived_rates()

    raw = container.raw
    # Rebuilt from the payload; a decoded RIFF size is never carried over.
    riff_size = HEADER_SIZE + (width - 4) + len(raw)
    _check_fits(riff_size, 4, "RIFF chunk size")
    _check_fits(len(raw), width, "Data chunk size")
    for name, value, size in (
        ("channels", fmt.channels, 2),
        ("sample_rate", fmt.sample_rate, 4),
        ("byte_rate", fmt.byte_rate, 4),
        ("block_align", fmt.block_align, 2),
    ):
        _check_fits(value, size, name)

    fields = [
        # RIFF chunk
        ascii_to_bytes(ID_RIFF),
        u32_to_bytes_le(riff_size),
        ascii_to_bytes(ID_WAVE),
        # fmt chunk
        ascii_to_bytes(ID_FMT),
        u32_to_bytes_le(FMT_CHUNK_SIZE),
        u16_to_bytes_le(FORMAT_PCM),
        u16_to_bytes_le(fmt.channels),
        u32_to_bytes_le(fmt.sample_rate),
        u32_to_bytes_le(fmt.byte_rate),
        u16_to_bytes_le(fmt.block_align),
        u16_to_bytes_le(fmt.bits_per_sample),
        # data chunk
        ascii_to_bytes(ID_DATA),
        u32_to_bytes_le(len(raw)) if width == 4 else u64_to_bytes_le(len(raw)),
        raw,
    ]
    written = 0
    for field in fields:
        sink.write(field)
        written += len(field)
    return written


def encode(
    container: WavContainer,
    recompute_derived: bool = False,
    data_size_width: Optional[int] = None,
) -> bytes:
    """Serialize a container to WAV bytes. See `write_to` for the arguments."""
    sink = ByteSink()
    write_to(container, sink, recompute_derived, data_size_width)
    return sink.getvalue()


def describe(container: WavContainer) -> str:
    """Human-readable dump of every header field."""
    riff, fmt, data = container.riff, container.fmt, container.data
    lines = [
        f"___{riff.chunk_id}___",
        f"Chunk size: {riff.chunk_size}",
        f"Format: {riff.format}",
        f"___{fmt.chunk_id}___",
        f"Chunk size: {fmt.chunk_size}",
        f"Audio format: {fmt.audio_format}",
        f"Channels: {fmt.channels}",
        f"Sample rate: {fmt.sample_rate}",
        f"Byte rate: {fmt.byte_rate}",
        f"Block align: {fmt.block_align}",
        f"Bits per sample: {fmt.bits_per_sample}",
        f"___{data.chunk_id}___",
        f"Data size: {data.chunk_size}",
    ]
    return "\n".join(lines)
