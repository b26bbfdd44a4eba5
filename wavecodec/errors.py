"""Error type raised by the WAV codec."""

from enum import Enum
from typing import Optional


class HeaderField(Enum):
    """Mandatory chunk tags, valued by the tag text they must match."""

    RIFF = "RIFF"
    WAVE = "WAVE"
    FMT = "fmt "
    DATA = "data"


class ErrorKind(Enum):
    SOURCE_UNAVAILABLE = "source_unavailable"
    MALFORMED_HEADER = "malformed_header"
    UNSUPPORTED_AUDIO_FORMAT = "unsupported_audio_format"
    TRUNCATED_HEADER = "truncated_header"
    TRUNCATED_PAYLOAD = "truncated_payload"
    UNSUPPORTED_SAMPLE_WIDTH = "unsupported_sample_width"


# Stable numeric identifiers. -1 to -5 are shared with existing callers.
ERROR_RIFF = -1
ERROR_FMT = -2
ERROR_WAVE = -3
ERROR_DATA = -4
ERROR_COMPRESSED_AUDIO = -5
ERROR_TRUNCATED_PAYLOAD = -6
ERROR_SAMPLE_WIDTH = -7
ERROR_SOURCE_UNAVAILABLE = -8
ERROR_TRUNCATED_HEADER = -9

_MALFORMED_CODES = {
    HeaderField.RIFF: ERROR_RIFF,
    HeaderField.FMT: ERROR_FMT,
    HeaderField.WAVE: ERROR_WAVE,
    HeaderField.DATA: ERROR_DATA,
}

_KIND_CODES = {
    ErrorKind.UNSUPPORTED_AUDIO_FORMAT: ERROR_COMPRESSED_AUDIO,
    ErrorKind.TRUNCATED_PAYLOAD: ERROR_TRUNCATED_PAYLOAD,
    ErrorKind.UNSUPPORTED_SAMPLE_WIDTH: ERROR_SAMPLE_WIDTH,
    ErrorKind.SOURCE_UNAVAILABLE: ERROR_SOURCE_UNAVAILABLE,
    ErrorKind.TRUNCATED_HEADER: ERROR_TRUNCATED_HEADER,
}


class WavError(Exception):
    """A WAV file could not be read or written.

    Every failure mode shares this one type; `kind` says what went wrong,
    `code` is the stable numeric identifier for it, and `field` names the
    chunk tag involved for malformed headers.
    """

    def __init__(self, kind: ErrorKind, message: str, field: Optional[HeaderField] = None):
        if kind is ErrorKind.MALFORMED_HEADER:
            if field is None:
                raise ValueError("MALFORMED_HEADER errors need a header field")
            code = _MALFORMED_CODES[field]
        else:
            code = _KIND_CODES[kind]

        super().__init__(message)
        self.kind = kind
        self.code = code
        self.field = field
        self.message = message

    @classmethod
    def malformed(cls, field: HeaderField, found: str, offset: int) -> "WavError":
        return cls(
            ErrorKind.MALFORMED_HEADER,
            f'bytes {offset}-{offset + 3} did not contain "{field.value}", '
            f"instead they contained {found!r}",
            field,
        )

    def __repr__(self):
        return f"WavError(kind={self.kind.name}, code={self.code}, message={self.message!r})"
