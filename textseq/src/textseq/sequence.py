"""Immutable UTF-8 text sequence navigated by byte positions."""
from __future__ import annotations

from typing import Iterator, List, Optional, Union

from . import codec
from .errors import InvalidPositionError
from .models import NOT_FOUND, CharStep, Found, Position, PositionFault, SearchResult

PositionLike = Union[Position, int]


class TextSequence:
    """A validated UTF-8 byte buffer viewed as a sequence of characters.

    Positions are byte offsets. Only offsets on a character boundary, plus the
    end sentinel ``byte_size()``, are accepted; everything else raises
    :class:`~textseq.errors.InvalidPositionError`. Reaching the k-th character
    always costs k calls to :meth:`next_position` because characters are one to
    four bytes wide.

    Instances never change after construction. Operations that "modify" text
    return a new sequence.
    """

    __slots__ = ("_data", "_length")

    def __init__(self, data: str | bytes | bytearray | memoryview = b"") -> None:
        if isinstance(data, str):
            raw = codec.encode_text(data)
            length: Optional[int] = len(data)
        else:
            raw = bytes(data)
            codec.validate(raw)
            length = None
        self._data = raw
        self._length = length

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "TextSequence":
        if isinstance(data, str):
            raise TypeError("from_bytes() expects a bytes-like object, use from_text() for str")
        return cls(data)

    @classmethod
    def from_text(cls, text: str) -> "TextSequence":
        if not isinstance(text, str):
            raise TypeError(f"from_text() expects str, got {type(text).__name__}")
        return cls._wrap(codec.encode_text(text), len(text))

    @classmethod
    def empty(cls) -> "TextSequence":
        return cls._wrap(b"", 0)

    @classmethod
    def _wrap(cls, data: bytes, length: Optional[int] = None) -> "TextSequence":
        # ``data`` must already be valid UTF-8.
        instance = cls.__new__(cls)
        instance._data = data
        instance._length = length
        return instance

    # sizes

    def length(self) -> int:
        """Number of characters; scanned once and then cached."""

        if self._length is None:
            self._length = codec.count_chars(self._data)
        return self._length

    def byte_size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self.length()

    def __bool__(self) -> bool:
        return bool(self._data)

    # positions

    def is_valid_position(self, position: PositionLike) -> bool:
        return codec.is_boundary(self._data, _offset_of(position))

    def first_position(self) -> Position:
        return Position(0)

    def end_position(self) -> Position:
        return Position(len(self._data))

    def last_position(self) -> Position:
        if not self._data:
            raise InvalidPositionError(
                "Empty sequence has no last character",
                position=0,
                fault=PositionFault.OUT_OF_RANGE,
            )
        return Position(codec.boundary_before(self._data, len(self._data)))

    def next_position(self, position: PositionLike) -> Position:
        offset = self._require_boundary(position, allow_end=False)
        return Position(offset + codec.char_width(self._data[offset]))

    def previous_position(self, position: PositionLike) -> Position:
        offset = self._require_boundary(position, allow_end=True)
        if offset == 0:
            raise InvalidPositionError(
                "No character precedes position 0",
                position=0,
                fault=PositionFault.OUT_OF_RANGE,
            )
        return Position(codec.boundary_before(self._data, offset))

    def char_width(self, position: PositionLike) -> int:
        offset = self._require_boundary(position, allow_end=False)
        return codec.char_width(self._data[offset])

    # access

    def at(self, position: PositionLike) -> str:
        offset = self._require_boundary(position, allow_end=False)
        char, _width = codec.decode_at(self._data, offset)
        return char

    def try_at(self, position: PositionLike) -> Union[CharStep, PositionFault]:
        """Like :meth:`at` but return the fault instead of raising."""

        try:
            offset = self._require_boundary(position, allow_end=False)
        except InvalidPositionError as exc:
            return exc.fault
        char, width = codec.decode_at(self._data, offset)
        return CharStep(position=Position(offset), char=char, width=width)

    def __getitem__(self, key: Union[PositionLike, slice]) -> Union[str, "TextSequence"]:
        if isinstance(key, slice):
            step = 1 if key.step is None else key.step
            return self.slice(key.start, key.stop, step)
        return self.at(key)

    # traversal

    def traverse(self) -> Iterator[CharStep]:
        data = self._data
        for offset in codec.iter_boundaries(data):
            char, width = codec.decode_at(data, offset)
            yield CharStep(position=Position(offset), char=char, width=width)

    def traverse_reversed(self) -> Iterator[CharStep]:
        data = self._data
        offset = len(data)
        while offset > 0:
            start = codec.boundary_before(data, offset)
            char, width = codec.decode_at(data, start)
            yield CharStep(position=Position(start), char=char, width=width)
            offset = start

    def __iter__(self) -> Iterator[str]:
        return (step.char for step in self.traverse())

    def __reversed__(self) -> Iterator[str]:
        return (step.char for step in self.traverse_reversed())

    # slicing and joining

    def slice(
        self,
        start: Optional[PositionLike] = None,
        end: Optional[PositionLike] = None,
        step: int = 1,
    ) -> "TextSequence":
        """Return the characters between two positions, ``step`` characters apart.

        With a positive step the range is ``[start, end)`` and an inverted range
        gives an empty sequence. With a negative step the walk starts at the
        character at ``start`` (the end sentinel means the last character) and
        moves backward while the position stays above ``end``; ``end=None``
        runs through the first character.
        """

        if isinstance(step, bool) or not isinstance(step, int):
            raise TypeError(f"slice step must be an int, got {type(step).__name__}")
        if step == 0:
            raise ValueError("slice step cannot be zero")
        if step > 0:
            return self._slice_forward(start, end, step)
        return self._slice_backward(start, end, -step)

    def _slice_forward(
        self, start: Optional[PositionLike], end: Optional[PositionLike], step: int
    ) -> "TextSequence":
        data = self._data
        low = 0 if start is None else self._require_boundary(start, allow_end=True)
        high = len(data) if end is None else self._require_boundary(end, allow_end=True)
        if low >= high:
            return self.empty()
        if step == 1:
            return self._wrap(data[low:high])
        pieces: List[bytes] = []
        offset = low
        while offset < high:
            width = codec.char_width(data[offset])
            pieces.append(data[offset : offset + width])
            for _ in range(step):
                if offset >= high:
                    break
                offset += codec.char_width(data[offset])
        return self._wrap(b"".join(pieces), len(pieces))

    def _slice_backward(
        self, start: Optional[PositionLike], end: Optional[PositionLike], step: int
    ) -> "TextSequence":
        data = self._data
        if start is None:
            if not data:
                return self.empty()
            offset = codec.boundary_before(data, len(data))
        else:
            offset = self._require_boundary(start, allow_end=True)
            if offset == len(data):
                if not data:
                    return self.empty()
                offset = codec.boundary_before(data, offset)
        # -1 stands for "before the first character"
        floor = -1 if end is None else self._require_boundary(end, allow_end=True)
        pieces: List[bytes] = []
        while offset > floor:
            width = codec.char_width(data[offset])
            pieces.append(data[offset : offset + width])
            for _ in range(step):
                if offset == 0:
                    offset = -1
                    break
                offset = codec.boundary_before(data, offset)
        return self._wrap(b"".join(pieces), len(pieces))

    def concat(self, other: Union["TextSequence", str]) -> "TextSequence":
        if isinstance(other, TextSequence):
            other_data, other_length = other._data, other._length
        elif isinstance(other, str):
            other_data, other_length = codec.encode_text(other), len(other)
        else:
            raise TypeError(f"Cannot concatenate TextSequence and {type(other).__name__}")
        length = None
        if self._length is not None and other_length is not None:
            length = self._length + other_length
        return self._wrap(self._data + other_data, length)

    def __add__(self, other: object) -> "TextSequence":
        if not isinstance(other, (TextSequence, str)):
            return NotImplemented
        return self.concat(other)

    def __radd__(self, other: object) -> "TextSequence":
        if not isinstance(other, str):
            return NotImplemented
        return TextSequence.from_text(other).concat(self)

    # searching

    def find(
        self,
        needle: Union["TextSequence", str],
        from_position: Optional[PositionLike] = None,
    ) -> SearchResult:
        """Return ``Found(position)`` for the first match at or after ``from_position``.

        Only character boundaries are tried, and the needle is compared byte for
        byte, so single characters and longer substrings go through the same
        loop. A miss returns ``NOT_FOUND``.
        """

        pattern = _needle_bytes(needle)
        data = self._data
        offset = 0 if from_position is None else self._require_boundary(from_position, allow_end=True)
        for candidate in codec.iter_boundaries(data, offset):
            if data.startswith(pattern, candidate):
                return Found(Position(candidate))
        return NOT_FOUND

    def contains(self, needle: Union["TextSequence", str]) -> bool:
        return bool(self.find(needle))

    def __contains__(self, needle: object) -> bool:
        if not isinstance(needle, (TextSequence, str)):
            raise TypeError(f"'in <TextSequence>' requires str or TextSequence, not {type(needle).__name__}")
        return self.contains(needle)

    def starts_with(self, prefix: Union["TextSequence", str]) -> bool:
        return self._data.startswith(_as_data(prefix))

    def ends_with(self, suffix: Union["TextSequence", str]) -> bool:
        return self._data.endswith(_as_data(suffix))

    # comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextSequence):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def compare(self, other: "TextSequence") -> int:
        """Order two sequences by code point, returning -1, 0 or 1.

        Code points are compared numerically, so every uppercase ASCII letter
        sorts before every lowercase one: ``"Pineapple" < "banana"``. UTF-8
        byte order matches code point order, which lets the buffers be compared
        directly.
        """

        if not isinstance(other, TextSequence):
            raise TypeError(f"Cannot compare TextSequence with {type(other).__name__}")
        if self._data == other._data:
            return 0
        return -1 if self._data < other._data else 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TextSequence):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, TextSequence):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, TextSequence):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, TextSequence):
            return NotImplemented
        return self.compare(other) >= 0

    # case

    def to_uppercase(self) -> "TextSequence":
        return self.from_text("".join(char.upper() for char in self))

    def to_lowercase(self) -> "TextSequence":
        return self.from_text("".join(char.lower() for char in self))

    # conversions

    def to_text(self) -> str:
        return self._data.decode("utf-8")

    def to_bytes(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self.to_text()

    def __bytes__(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"TextSequence({self.to_text()!r})"

    def __reduce__(self):
        return (TextSequence.from_bytes, (self._data,))

    def _require_boundary(self, position: PositionLike, *, allow_end: bool) -> int:
        offset = _offset_of(position)
        size = len(self._data)
        limit = size if allow_end else size - 1
        if offset < 0 or offset > limit:
            raise InvalidPositionError(
                f"Position {offset} is outside the byte range of a {size}-byte sequence",
                position=offset,
                fault=PositionFault.OUT_OF_RANGE,
            )
        if not codec.is_boundary(self._data, offset):
            raise InvalidPositionError(
                f"Position {offset} falls inside a multi-byte character",
                position=offset,
                fault=PositionFault.NOT_A_BOUNDARY,
            )
        return offset


def _offset_of(position: PositionLike) -> int:
    if isinstance(position, Position):
        return position.offset
    if isinstance(position, int) and not isinstance(position, bool):
        return position
    raise TypeError(f"Expected Position or int offset, got {type(position).__name__}")


def _as_data(value: Union[TextSequence, str]) -> bytes:
    if isinstance(value, TextSequence):
        return value.to_bytes()
    if isinstance(value, str):
        return codec.encode_text(value)
    raise TypeError(f"Expected str or TextSequence, got {type(value).__name__}")


def _needle_bytes(needle: Union[TextSequence, str]) -> bytes:
    pattern = _as_data(needle)
    if not pattern:
        raise ValueError("Search needle must contain at least one character")
    return pattern


__all__ = ["TextSequence", "PositionLike"]
