"""Tests for LogBuffer - bounded retention and follow mode."""

from __future__ import annotations

import pytest

from kubepick.controllers.session.stream_session import LogBuffer


class TestLogBufferRetention:
    """Tests for eviction of the oldest lines."""

    def test_rejects_non_positive_capacity(self) -> None:
        with pytest.raises(ValueError):
            LogBuffer(max_lines=0)

    def test_evicts_oldest_lines(self) -> None:
        """Test cap 5 with two 3-line chunks keeps lines 2..6."""
        buffer = LogBuffer(max_lines=5)

        buffer.append(["1", "2", "3"])
        buffer.append(["4", "5", "6"])

        assert buffer.lines == ["2", "3", "4", "5", "6"]
        assert buffer.evicted == 1
        assert buffer.appended_total == 6

    def test_large_chunk_keeps_last_lines(self) -> None:
        buffer = LogBuffer(max_lines=3)

        buffer.append([str(i) for i in range(10)])

        assert buffer.lines == ["7", "8", "9"]
        assert len(buffer) == 3

    def test_strips_carriage_returns(self) -> None:
        buffer = LogBuffer()

        buffer.append(["one\r", "two"])

        assert buffer.lines == ["one", "two"]

    def test_drops_only_trailing_empty_lines(self) -> None:
        buffer = LogBuffer()

        appended = buffer.append(["a", "", "b", "", ""])

        assert appended == 3
        assert buffer.lines == ["a", "", "b"]

    def test_all_empty_chunk_is_ignored(self) -> None:
        buffer = LogBuffer()

        assert buffer.append(["", "\r"]) == 0
        assert len(buffer) == 0
        assert buffer.appended_total == 0

    def test_tail(self) -> None:
        buffer = LogBuffer()
        buffer.append(["a", "b", "c"])

        assert buffer.tail(2) == ["b", "c"]
        assert buffer.tail(0) == []
        assert buffer.tail(10) == ["a", "b", "c"]


class TestLogBufferFollowMode:
    """Tests for view tracking."""

    def test_follow_moves_view_to_last_line(self) -> None:
        buffer = LogBuffer(max_lines=5)

        buffer.append(["1", "2", "3"])
        assert buffer.view_line == 2

        buffer.append(["4", "5", "6"])

        assert buffer.view_line == 4
        assert buffer.viewport_at_tail

    def test_follow_disabled_leaves_view(self) -> None:
        buffer = LogBuffer(follow_mode=False)

        buffer.append(["1", "2", "3"])
        buffer.append(["4"])

        assert buffer.view_line == 0
        assert not buffer.viewport_at_tail

    def test_view_near_tail_still_follows(self) -> None:
        """Test a view on the second-to-last line counts as at the tail."""
        buffer = LogBuffer()
        buffer.append([str(i) for i in range(10)])
        buffer.move_view(8)

        buffer.append(["10"])

        assert buffer.view_line == 10

    def test_scrolled_back_view_stays_put(self) -> None:
        buffer = LogBuffer()
        buffer.append([str(i) for i in range(10)])
        buffer.move_view(3)

        buffer.append(["10", "11"])

        assert buffer.view_line == 3
        assert not buffer.viewport_at_tail

    def test_move_view_is_clamped(self) -> None:
        buffer = LogBuffer()
        buffer.append(["a", "b"])

        assert buffer.move_view(-4) == 0
        assert buffer.move_view(99) == 1
