"""Small text computations built only on the public TextSequence API."""
from __future__ import annotations

from typing import Iterator, List, Union

from .models import Found, Position
from .sequence import PositionLike, TextSequence

TextLike = Union[TextSequence, str]


def _coerce(value: TextLike) -> TextSequence:
    if isinstance(value, TextSequence):
        return value
    return TextSequence.from_text(value)


def position_of_index(seq: TextSequence, index: int) -> Position:
    """Walk ``index`` characters from the start and return where that lands.

    ``index == seq.length()`` returns the end sentinel.
    """

    if index < 0:
        raise IndexError("Character index cannot be negative")
    position = seq.first_position()
    for _ in range(index):
        if position == seq.end_position():
            raise IndexError(f"Character index {index} out of range")
        position = seq.next_position(position)
    return position


def char_at_index(seq: TextSequence, index: int) -> str:
    position = position_of_index(seq, index)
    if position == seq.end_position():
        raise IndexError(f"Character index {index} out of range")
    return seq.at(position)


def find_all(seq: TextSequence, needle: TextLike) -> Iterator[Position]:
    """Yield the start of every match, overlapping ones included."""

    result = seq.find(needle)
    while isinstance(result, Found):
        yield result.position
        result = seq.find(needle, seq.next_position(result.position))


def count(seq: TextSequence, needle: TextLike) -> int:
    return sum(1 for _ in find_all(seq, needle))


def count_char(seq: TextSequence, char: str) -> int:
    total = 0
    for letter in seq:
        if letter == char:
            total += 1
    return total


def reverse(seq: TextSequence) -> TextSequence:
    return seq.slice(step=-1)


def is_palindrome(value: TextLike) -> bool:
    seq = _coerce(value)
    return seq == reverse(seq)


def reverse_words(value: TextLike) -> TextSequence:
    """Reverse the order of space separated words; runs of spaces collapse."""

    seq = _coerce(value)
    words: List[TextSequence] = []
    start = seq.first_position()
    result = seq.find(" ")
    while isinstance(result, Found):
        if result.position > start:
            words.append(seq.slice(start, result.position))
        start = seq.next_position(result.position)
        result = seq.find(" ", start)
    if start < seq.end_position():
        words.append(seq.slice(start, seq.end_position()))
    joined = TextSequence.empty()
    for index, word in enumerate(reversed(words)):
        if index:
            joined = joined + " "
        joined = joined + word
    return joined


def equals_ignore_case(left: TextLike, right: TextLike) -> bool:
    return _coerce(left).to_lowercase() == _coerce(right).to_lowercase()


def replace_char_at(seq: TextSequence, position: PositionLike, char: TextLike) -> TextSequence:
    """Return a copy of ``seq`` with the character at ``position`` swapped for ``char``.

    ``seq`` itself is left untouched.
    """

    after = seq.next_position(position)
    return seq.slice(seq.first_position(), position).concat(_coerce(char)).concat(
        seq.slice(after, seq.end_position())
    )


__all__ = [
    "position_of_index",
    "char_at_index",
    "find_all",
    "count",
    "count_char",
    "reverse",
    "is_palindrome",
    "reverse_words",
    "equals_ignore_case",
    "replace_char_at",
]
