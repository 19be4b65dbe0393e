"""Tests for Cursor."""

from __future__ import annotations

import pytest

from pegmatch import EOF, Cursor, CursorError


class TestPeekAdvance:
    def test_peek_does_not_consume(self) -> None:
        c = Cursor("ab")
        assert c.peek() == "a"
        assert c.peek() == "a"
        assert c.position == 0

    def test_advance_moves_one_symbol(self) -> None:
        c = Cursor("ab")
        c.advance()
        assert c.position == 1
        assert c.peek() == "b"

    def test_peek_at_end_is_eof(self) -> None:
        c = Cursor("a")
        c.advance()
        assert c.peek() is EOF
        assert c.at_end

    def test_empty_input_starts_at_end(self) -> None:
        c = Cursor("")
        assert c.peek() is EOF
        assert c.at_end
        assert c.end == 0

    def test_advance_at_end_is_a_defect(self) -> None:
        c = Cursor("")
        with pytest.raises(CursorError, match="past end"):
            c.advance()

    def test_bytes_yield_ints(self) -> None:
        c = Cursor(b"hi")
        assert c.peek() == ord("h")

    def test_list_input(self) -> None:
        c = Cursor(["let", "x", "="])
        c.advance()
        assert c.peek() == "x"

    def test_eof_is_singleton(self) -> None:
        assert type(EOF)() is EOF
        assert repr(EOF) == "EOF"


class TestSnapshotRestore:
    def test_restore_discards_consumption(self) -> None:
        c = Cursor("abcdef")
        saved = c.snapshot()
        c.advance()
        c.advance()
        c.restore(saved)
        assert c.position == 0
        assert c.peek() == "a"

    def test_snapshot_is_a_plain_position(self) -> None:
        c = Cursor("abc", position=2)
        assert c.snapshot() == 2

    def test_restore_out_of_range(self) -> None:
        c = Cursor("abc")
        with pytest.raises(CursorError):
            c.restore(4)
        with pytest.raises(CursorError):
            c.restore(-1)

    def test_start_position_out_of_range(self) -> None:
        with pytest.raises(CursorError):
            Cursor("abc", position=5)

    def test_input_is_not_copied(self) -> None:
        data = ["a", "b"]
        c = Cursor(data)
        assert c.input is data

    def test_consumed_since_and_remaining(self) -> None:
        c = Cursor("hello world")
        start = c.snapshot()
        for _ in range(5):
            c.advance()
        assert c.consumed_since(start) == "hello"
        assert c.remaining() == " world"
