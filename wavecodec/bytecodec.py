"""Conversions between raw bytes and header field values.

Multi-byte fields in a WAV header are little-endian. Every function here takes
the byte order as an explicit argument or fixes it in its name; the host byte
order is never consulted.
"""

LITTLE = "little"
BIG = "big"


def _check_length(b: bytes, size: int):
    if len(b) != size:
        raise ValueError(f"Expected {size} bytes, got {len(b)}")


def bytes_to_int(b: bytes, byteorder: str = LITTLE, signed: bool = False) -> int:
    """Assemble an integer from bytes in the given order.

    Args:
        b: Field bytes, any length
        byteorder: "little" (byte 0 least significant) or "big"
        signed: Interpret the top bit as a two's complement sign

    Returns:
        Integer value of the field
    """
    if byteorder not in (LITTLE, BIG):
        raise ValueError(f"Unknown byte order: {byteorder}")

    ordered = b if byteorder == LITTLE else b[::-1]
    value = 0
    for shift, byte in enumerate(ordered):
        value |= (byte & 0xFF) << (8 * shift)

    if signed and len(b) and value & (1 << (8 * len(b) - 1)):
        value -= 1 << (8 * len(b))
    return value


def int_to_bytes(value: int, width: int, byteorder: str = LITTLE) -> bytes:
    """Split an integer into `width` bytes in the given order.

    The value is masked to the field width, so negative values come out in
    two's complement form.
    """
    if byteorder not in (LITTLE, BIG):
        raise ValueError(f"Unknown byte order: {byteorder}")

    out = bytearray(width)
    for i in range(width):
        out[i] = (value >> (8 * i)) & 0xFF
    if byteorder == BIG:
        out.reverse()
    return bytes(out)


def reverse_bytes(b: bytes) -> bytes:
    """Swap the byte order of a field."""
    return bytes(b[::-1])


def bytes_to_u16_le(b: bytes) -> int:
    _check_length(b, 2)
    return (b[0] & 0xFF) | ((b[1] & 0xFF) << 8)


def bytes_to_i16_le(b: bytes) -> int:
    value = bytes_to_u16_le(b)
    if value & 0x8000:
        value -= 0x10000
    return value


def bytes_to_u32_le(b: bytes) -> int:
    _check_length(b, 4)
    return (
        (b[0] & 0xFF)
        | ((b[1] & 0xFF) << 8)
        | ((b[2] & 0xFF) << 16)
        | ((b[3] & 0xFF) << 24)
    )


def bytes_to_i32_le(b: bytes) -> int:
    value = bytes_to_u32_le(b)
    if value & 0x80000000:
        value -= 0x100000000
    return value


def bytes_to_u64_le(b: bytes) -> int:
    _check_length(b, 8)
    return bytes_to_u32_le(b[:4]) | (bytes_to_u32_le(b[4:]) << 32)


def bytes_to_ascii(b: bytes) -> str:
    """Decode a chunk tag, one character per byte.

    No validation is done: any byte value maps to the code point of the same
    number, so a corrupt tag still shows up verbatim in error messages.
    """
    return "".join(chr(byte & 0xFF) for byte in b)


def ascii_to_bytes(s: str) -> bytes:
    return bytes(ord(c) & 0xFF for c in s)


def u16_to_bytes_le(value: int) -> bytes:
    return int_to_bytes(value, 2, LITTLE)


def u32_to_bytes_le(value: int) -> bytes:
    return int_to_bytes(value, 4, LITTLE)


def u64_to_bytes_le(value: int) -> bytes:
    return int_to_bytes(value, 8, LITTLE)


def u16_to_bytes_be(value: int) -> bytes:
    return int_to_bytes(value, 2, BIG)


def u32_to_bytes_be(value: int) -> bytes:
    return int_to_bytes(value, 4, BIG)
