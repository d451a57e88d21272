"""Tests for CharacterSource."""

import io

import pytest

from chessbook.core.errors import BacktrackError, EndOfInput
from chessbook.core.notation.source import CharacterSource


def _read_all(source: CharacterSource) -> str:
    chars = []
    while not source.at_end():
        chars.append(source.read())
    return "".join(chars)


class TestReading:
    def test_peek_does_not_consume(self) -> None:
        source = CharacterSource("ab")
        assert source.peek() == "a"
        assert source.peek() == "a"
        assert source.offset == 0

    def test_read_advances(self) -> None:
        source = CharacterSource("ab")
        assert source.read() == "a"
        assert source.read() == "b"
        assert source.offset == 2
        assert source.at_end()

    def test_read_at_end_raises(self) -> None:
        source = CharacterSource("")
        assert source.peek() is None
        with pytest.raises(EndOfInput):
            source.read()

    def test_read_if_with_character_set(self) -> None:
        source = CharacterSource("x1")
        assert source.read_if("0123456789") is None
        assert source.offset == 0
        assert source.read_if("xyz") == "x"
        assert source.read_if("0123456789") == "1"

    def test_read_if_with_predicate(self) -> None:
        source = CharacterSource("Q")
        assert source.read_if(str.islower) is None
        assert source.read_if(str.isupper) == "Q"

    def test_read_if_at_end(self) -> None:
        assert CharacterSource("").read_if("a") is None

    def test_stream_input(self) -> None:
        source = CharacterSource(io.StringIO("e4 e5\nNf3\n"))
        assert _read_all(source) == "e4 e5\nNf3\n"

    def test_chunked_input(self) -> None:
        source = CharacterSource(io.StringIO("abcdefg"), chunk_size=2)
        assert _read_all(source) == "abcdefg"

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            CharacterSource("", window=-1)
        with pytest.raises(ValueError):
            CharacterSource("", chunk_size=0)


class TestLocation:
    def test_starts_at_line_one_column_one(self) -> None:
        source = CharacterSource("a")
        assert (source.line, source.column) == (1, 1)

    def test_column_advances(self) -> None:
        source = CharacterSource("ab")
        source.read()
        assert (source.line, source.column) == (1, 2)

    def test_newline_starts_next_line(self) -> None:
        source = CharacterSource("a\nb")
        source.read()
        source.read()
        assert (source.line, source.column) == (2, 1)
        source.read()
        assert (source.line, source.column) == (2, 2)


class TestRestore:
    def test_restore_rewinds_cursor_and_location(self) -> None:
        source = CharacterSource("Nd2xa8")
        source.read()
        mark = source.save()
        source.read()
        source.read()
        source.restore(mark)
        assert source.offset == 1
        assert (source.line, source.column) == (1, 2)
        assert source.peek() == "d"

    def test_restore_across_refill(self) -> None:
        source = CharacterSource(io.StringIO("ab\ncd\n"))
        source.read()
        mark = source.save()
        for _ in range(3):  # "b", "\n" and "c" from the next line
            source.read()
        source.restore(mark)
        assert source.peek() == "b"
        assert (source.line, source.column) == (1, 2)
        assert _read_all(source) == "b\ncd\n"

    def test_restore_beyond_window_raises(self) -> None:
        source = CharacterSource(io.StringIO("abc\ndef\n"), window=1)
        mark = source.save()
        for _ in range(5):
            source.read()
        with pytest.raises(BacktrackError):
            source.restore(mark)

    def test_restore_forward_raises(self) -> None:
        source = CharacterSource("abc")
        start = source.save()
        source.read()
        later = source.save()
        source.restore(start)
        with pytest.raises(BacktrackError):
            source.restore(later)
