"""UTF-8 boundary rules shared by text sequence operations.

Every helper here assumes strict UTF-8: one to four bytes per character, lead
bytes in ``00-7F``, ``C2-DF``, ``E0-EF`` or ``F0-F4`` and continuation bytes in
``80-BF``. Buffers are validated once with :func:`validate`; the remaining
helpers rely on that and only inspect lead and continuation bits.
"""
from __future__ import annotations

from typing import Iterator, Tuple

from .errors import EncodingError

_CONTINUATION_MASK = 0xC0
_CONTINUATION_TAG = 0x80


def is_continuation(byte: int) -> bool:
    return byte & _CONTINUATION_MASK == _CONTINUATION_TAG


def char_width(lead: int) -> int:
    """Return the encoded width announced by ``lead``.

    Raises
    ------
    ValueError
        If ``lead`` cannot start a character (a continuation byte, an overlong
        two-byte lead or a byte above ``F4``).
    """

    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    raise ValueError(f"Byte 0x{lead:02X} is not a UTF-8 lead byte")


def validate(data: bytes) -> None:
    """Ensure ``data`` is strict UTF-8.

    The standard codec already rejects invalid leads, bad continuation bytes,
    truncated trailing characters, overlong forms, surrogates and code points
    above U+10FFFF, so it is the single source of truth here.
    """

    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Invalid UTF-8 at byte {exc.start}: {exc.reason}",
            offset=exc.start,
            reason=exc.reason,
        ) from None


def encode_text(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(
            f"Character at index {exc.start} cannot be encoded: {exc.reason}",
            offset=None,
            reason=exc.reason,
        ) from None


def as_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(data, str):
        return encode_text(data)
    return bytes(data)


def decode_at(data: bytes, offset: int) -> Tuple[str, int]:
    """Decode the character starting at boundary ``offset``.

    Returns the character and its encoded width.
    """

    width = char_width(data[offset])
    return data[offset : offset + width].decode("utf-8"), width


def is_boundary(data: bytes, offset: int) -> bool:
    if offset == len(data):
        return True
    if offset < 0 or offset > len(data):
        return False
    return not is_continuation(data[offset])


def boundary_before(data: bytes, offset: int) -> int:
    """Return the start of the character that ends at ``offset``."""

    index = offset - 1
    while index > 0 and is_continuation(data[index]):
        index -= 1
    return index


def count_chars(data: bytes) -> int:
    return sum(1 for byte in data if not is_continuation(byte))


def iter_boundaries(data: bytes, start: int = 0) -> Iterator[int]:
    """Yield every character start from ``start`` up to (not including) the end."""

    offset = start
    end = len(data)
    while offset < end:
        yield offset
        offset += char_width(data[offset])


__all__ = [
    "is_continuation",
    "char_width",
    "validate",
    "encode_text",
    "as_bytes",
    "decode_at",
    "is_boundary",
    "boundary_before",
    "count_chars",
    "iter_boundaries",
]
