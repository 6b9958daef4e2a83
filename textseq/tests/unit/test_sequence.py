import pytest

from textseq import (
    NOT_FOUND,
    CharStep,
    EncodingError,
    Found,
    InvalidPositionError,
    Position,
    PositionFault,
    TextSequence,
)

SMILE = "\U0001F642"


def _seq(text: str) -> TextSequence:
    return TextSequence.from_text(text)


def test_banana_scenario() -> None:
    seq = _seq("banana")
    assert seq.length() == 6
    assert seq.at(seq.first_position()) == "b"
    sixth = Position(5)
    assert seq.slice(0, sixth, 2) == _seq("bnn")


def test_four_byte_character_boundaries() -> None:
    seq = _seq(SMILE + " x")
    assert seq.byte_size() == 6
    assert seq.length() == 3
    assert not seq.is_valid_position(1)
    assert seq.is_valid_position(4)
    assert seq.is_valid_position(6)
    assert not seq.is_valid_position(7)
    assert not seq.is_valid_position(-1)


@pytest.mark.parametrize(
    "data, reason_fragment",
    [
        (b"\x80abc", "invalid start byte"),
        (b"ab\xc3", "unexpected end of data"),
        (b"\xe4\xb8", "unexpected end of data"),
        (b"\xc3\x28", "invalid continuation byte"),
        (b"\xc0\xaf", "invalid start byte"),
        (b"\xe0\x80\xaf", "invalid continuation byte"),
        (b"\xed\xa0\x80", "invalid continuation byte"),
        (b"\xf4\x90\x80\x80", "invalid continuation byte"),
    ],
)
def test_from_bytes_rejects_malformed_input(data: bytes, reason_fragment: str) -> None:
    with pytest.raises(EncodingError) as excinfo:
        TextSequence.from_bytes(data)
    assert reason_fragment in excinfo.value.reason
    assert excinfo.value.offset is not None


def test_encoding_error_reports_offset() -> None:
    with pytest.raises(EncodingError) as excinfo:
        TextSequence.from_bytes(b"ok \xff")
    assert excinfo.value.offset == 3
    assert isinstance(excinfo.value, ValueError)


def test_from_bytes_accepts_bytes_like() -> None:
    raw = "naïve".encode("utf-8")
    assert TextSequence.from_bytes(bytearray(raw)) == TextSequence.from_bytes(memoryview(raw))
    with pytest.raises(TypeError):
        TextSequence.from_bytes("naïve")  # type: ignore[arg-type]


def test_from_text_rejects_lone_surrogate() -> None:
    with pytest.raises(EncodingError):
        TextSequence.from_text("a\ud800b")


def test_empty_sequence() -> None:
    seq = TextSequence.empty()
    assert seq == TextSequence()
    assert seq.length() == 0
    assert seq.byte_size() == 0
    assert seq.first_position() == seq.end_position()
    assert seq.is_valid_position(0)
    assert not seq
    with pytest.raises(InvalidPositionError):
        seq.last_position()
    with pytest.raises(InvalidPositionError):
        seq.at(0)
    assert list(seq.traverse()) == []


def test_next_and_previous_position() -> None:
    seq = _seq("a\u00e9世" + SMILE)
    assert seq.next_position(0) == Position(1)
    assert seq.next_position(1) == Position(3)
    assert seq.next_position(3) == Position(6)
    assert seq.next_position(6) == Position(10)
    assert seq.previous_position(10) == Position(6)
    assert seq.previous_position(6) == Position(3)
    assert seq.previous_position(3) == Position(1)
    assert seq.previous_position(1) == Position(0)
    assert seq.last_position() == Position(6)


def test_next_position_rejects_end_and_interior() -> None:
    seq = _seq("a\u00e9")
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.next_position(3)
    assert excinfo.value.fault is PositionFault.OUT_OF_RANGE
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.next_position(2)
    assert excinfo.value.fault is PositionFault.NOT_A_BOUNDARY


def test_previous_position_rejects_start_and_interior() -> None:
    seq = _seq("a\u00e9")
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.previous_position(0)
    assert excinfo.value.fault is PositionFault.OUT_OF_RANGE
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.previous_position(2)
    assert excinfo.value.fault is PositionFault.NOT_A_BOUNDARY


def test_at_distinguishes_faults() -> None:
    seq = _seq("\u00e9!")
    assert seq.at(0) == "\u00e9"
    assert seq.at(2) == "!"
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.at(1)
    assert excinfo.value.fault is PositionFault.NOT_A_BOUNDARY
    assert excinfo.value.position == 1
    with pytest.raises(InvalidPositionError) as excinfo:
        seq.at(3)
    assert excinfo.value.fault is PositionFault.OUT_OF_RANGE
    with pytest.raises(IndexError):
        seq.at(99)


def test_try_at_returns_tagged_result() -> None:
    seq = _seq("\u00e9!")
    assert seq.try_at(0) == CharStep(position=Position(0), char="\u00e9", width=2)
    assert seq.try_at(1) is PositionFault.NOT_A_BOUNDARY
    assert seq.try_at(5) is PositionFault.OUT_OF_RANGE


def test_position_type_checks() -> None:
    seq = _seq("abc")
    with pytest.raises(TypeError):
        seq.at("0")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        seq.at(True)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Position(-1)


def test_getitem_uses_byte_positions() -> None:
    seq = _seq("h\u00e9llo")
    assert seq[0] == "h"
    assert seq[1] == "\u00e9"
    assert seq[3:] == _seq("llo")
    assert seq[::-1] == _seq("oll\u00e9h")
    with pytest.raises(InvalidPositionError):
        seq[2]


def test_traversal_forward_and_backward() -> None:
    seq = _seq("a世b")
    steps = list(seq.traverse())
    assert [(step.position.offset, step.char, step.width) for step in steps] == [
        (0, "a", 1),
        (1, "世", 3),
        (4, "b", 1),
    ]
    assert [step.end for step in steps] == [Position(1), Position(4), Position(5)]
    backward = list(seq.traverse_reversed())
    assert [step.char for step in backward] == ["b", "世", "a"]
    assert list(seq) == ["a", "世", "b"]
    assert list(reversed(seq)) == ["b", "世", "a"]


def test_traversal_is_restartable() -> None:
    seq = _seq("xyz")
    assert list(seq) == list(seq)
    iterator = seq.traverse()
    next(iterator)
    assert [step.char for step in seq.traverse()] == ["x", "y", "z"]


def test_slice_identity_and_inverted_bounds() -> None:
    seq = _seq("h\u00e9llo")
    assert seq.slice(0, seq.byte_size()) == seq
    assert seq.slice() == seq
    assert seq.slice(4, 1) == TextSequence.empty()


def test_slice_rejects_interior_positions_and_zero_step() -> None:
    seq = _seq("h\u00e9llo")
    with pytest.raises(InvalidPositionError):
        seq.slice(2, 4)
    with pytest.raises(InvalidPositionError):
        seq.slice(0, 42)
    with pytest.raises(ValueError):
        seq.slice(step=0)
    with pytest.raises(TypeError):
        seq.slice(step=1.5)  # type: ignore[arg-type]


def test_slice_reverse() -> None:
    assert _seq("pots").slice(step=-1) == _seq("stop")
    assert _seq("a世" + SMILE).slice(step=-1) == _seq(SMILE + "世a")
    assert TextSequence.empty().slice(step=-1) == TextSequence.empty()


def test_slice_negative_step_bounds() -> None:
    seq = _seq("abcdef")
    assert seq.slice(5, 1, -1) == _seq("fedc")
    assert seq.slice(seq.end_position(), None, -2) == _seq("fdb")
    assert seq.slice(1, 4, -1) == TextSequence.empty()


def test_slice_multibyte_step() -> None:
    seq = _seq("\u00e9世" + SMILE + "!")
    assert seq.slice(step=2) == _seq("\u00e9" + SMILE)
    assert seq.slice(step=3) == _seq("\u00e9!")


def test_concat_and_operators() -> None:
    left = _seq("foo ")
    right = _seq("bär")
    joined = left.concat(right)
    assert joined == _seq("foo bär")
    assert left + "bär" == joined
    assert "foo " + right == joined
    assert joined.slice(0, left.byte_size()) == left
    assert joined.slice(left.byte_size(), joined.byte_size()) == right
    assert left == _seq("foo ")
    with pytest.raises(TypeError):
        left.concat(3)  # type: ignore[arg-type]


def test_find_banana() -> None:
    seq = _seq("banana")
    first = seq.find("na", 0)
    assert first == Found(Position(2))
    second = seq.find("na", seq.next_position(first.position))
    assert second == Found(Position(4))
    assert seq.find("na", 5) is NOT_FOUND
    assert seq.find("x") is NOT_FOUND
    assert not seq.find("x")


def test_find_single_character_and_multibyte() -> None:
    seq = _seq("ch\u1eef Vi\u1ec7t")
    result = seq.find("\u1ec7")
    assert isinstance(result, Found)
    assert seq.at(result.position) == "\u1ec7"
    assert seq.find(_seq("Vi\u1ec7t")) == Found(Position(6))
    assert seq.find("t", seq.end_position()) is NOT_FOUND


def test_find_rejects_empty_needle_and_bad_start() -> None:
    seq = _seq("h\u00e9llo")
    with pytest.raises(ValueError):
        seq.find("")
    with pytest.raises(InvalidPositionError):
        seq.find("l", 2)


def test_contains() -> None:
    seq = _seq("banana")
    assert seq.contains("b")
    assert "nan" in seq
    assert "z" not in seq
    with pytest.raises(TypeError):
        3 in seq  # noqa: B015


def test_starts_and_ends_with() -> None:
    seq = _seq("überall")
    assert seq.starts_with("über")
    assert seq.ends_with(_seq("all"))
    assert not seq.starts_with("all")


def test_equality_is_bytewise() -> None:
    assert _seq("abc") == TextSequence.from_bytes(b"abc")
    assert _seq("abc") != _seq("abd")
    assert _seq("abc") != "abc"
    assert hash(_seq("abc")) == hash(TextSequence.from_bytes(b"abc"))
    assert len({_seq("x"), _seq("x"), _seq("y")}) == 2


def test_code_point_ordering_puts_uppercase_first() -> None:
    assert _seq("Pineapple") < _seq("banana")
    assert _seq("Zebra") < _seq("apple")
    assert _seq("apple") < _seq("apples")
    assert _seq("z") < _seq("\u00e9")
    assert _seq("\u00e9") < _seq(SMILE)
    assert _seq("b").compare(_seq("a")) == 1
    assert _seq("a").compare(_seq("a")) == 0
    assert _seq("a").compare(_seq("b")) == -1
    assert sorted([_seq("banana"), _seq("Pineapple"), _seq("apple")]) == [
        _seq("Pineapple"),
        _seq("apple"),
        _seq("banana"),
    ]


def test_case_conversion() -> None:
    assert _seq("Hello, World!").to_uppercase() == _seq("HELLO, WORLD!")
    assert _seq("Hello, World!").to_lowercase() == _seq("hello, world!")
    assert _seq("123 ?").to_uppercase() == _seq("123 ?")
    upper = _seq("straße").to_uppercase()
    assert upper == _seq("STRASSE")
    assert upper.length() == 7


def test_case_conversion_is_per_character() -> None:
    # whole-string lowering would pick the final-sigma form
    assert _seq("ΟΔΟΣ").to_lowercase() == _seq("οδοσ")


def test_immutability_via_new_values() -> None:
    original = _seq("jello")
    changed = "J" + original.slice(1)
    assert changed == _seq("Jello")
    assert original == _seq("jello")


def test_conversions() -> None:
    seq = _seq("h\u00e9llo")
    assert str(seq) == "h\u00e9llo"
    assert bytes(seq) == "h\u00e9llo".encode("utf-8")
    assert seq.to_bytes() == bytes(seq)
    assert repr(seq) == "TextSequence('h\u00e9llo')"
    assert len(seq) == 5
    assert seq.char_width(1) == 2
