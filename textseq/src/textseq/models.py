"""Shared value types used across textseq."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Byte offset into a text sequence buffer.

    A position says nothing about how many characters precede it. Only offsets
    that land on a character boundary (or on the end sentinel) are accepted by
    :class:`~textseq.sequence.TextSequence` operations.
    """

    offset: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("Position offset cannot be negative")

    def __int__(self) -> int:
        return self.offset

    def __index__(self) -> int:
        return self.offset

    def __repr__(self) -> str:
        return f"Position({self.offset})"


class PositionFault(str, Enum):
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NOT_A_BOUNDARY = "NOT_A_BOUNDARY"


@dataclass(frozen=True, slots=True)
class CharStep:
    """One character of a traversal together with where it starts."""

    position: Position
    char: str
    width: int

    @property
    def end(self) -> Position:
        return Position(self.position.offset + self.width)


@dataclass(frozen=True, slots=True)
class Found:
    position: Position

    def __bool__(self) -> bool:
        return True


class NotFound:
    """Search miss marker. Falsy, and never equal to any position."""

    __slots__ = ()
    _instance: "NotFound | None" = None

    def __new__(cls) -> "NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = NotFound()

SearchResult = Union[Found, NotFound]


__all__ = [
    "Position",
    "PositionFault",
    "CharStep",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "SearchResult",
]
