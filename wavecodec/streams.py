"""Byte source and sink wrappers used by the codec."""

import io
import logging
from typing import BinaryIO, Union

from .errors import ErrorKind, WavError

logger = logging.getLogger(__name__)

# Upper bound on a single read request.
READ_CHUNK_SIZE = 1 << 20

BytesLike = Union[bytes, bytearray, memoryview]


class ByteSource:
    """Reads fixed-size fields from a binary stream.

    Args:
        stream: Binary file object, or a bytes-like buffer to read from
    """

    def __init__(self, stream: Union[BinaryIO, BytesLike]):
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        self._stream = stream
        self.position = 0

    def read_exact(self, n: int) -> bytes:
        """Read exactly `n` bytes.

        Raises:
            EOFError: If the stream ends first. The bytes read so far are
                consumed and the error message says how many there were.
        """
        chunks = []
        remaining = n
        while remaining > 0:
            chunk = self._stream.read(min(remaining, READ_CHUNK_SIZE))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

        data = b"".join(chunks)
        self.position += len(data)
        if len(data) < n:
            raise EOFError(f"needed {n} bytes, only {len(data)} available")
        return data


class ByteSink:
    """Collects encoded bytes, in memory unless a stream is given."""

    def __init__(self, stream: BinaryIO = None):
        self._stream = stream if stream is not None else io.BytesIO()
        self.written = 0

    def write(self, data: BytesLike):
        self._stream.write(data)
        self.written += len(data)

    def getvalue(self) -> bytes:
        return self._stream.getvalue()


def open_source(path) -> BinaryIO:
    """Open a file for reading, reporting OS failures as SOURCE_UNAVAILABLE."""
    try:
        return open(path, "rb")
    except OSError as exc:
        logger.debug("Cannot open %s for reading: %s", path, exc)
        raise WavError(ErrorKind.SOURCE_UNAVAILABLE, f"Cannot read {path}: {exc}") from exc


def open_sink(path) -> BinaryIO:
    """Open a file for writing, reporting OS failures as SOURCE_UNAVAILABLE."""
    try:
        return open(path, "wb")
    except OSError as exc:
        logger.debug("Cannot open %s for writing: %s", path, exc)
        raise WavError(ErrorKind.SOURCE_UNAVAILABLE, f"Cannot write {path}: {exc}") from exc
