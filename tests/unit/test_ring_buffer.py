"""
Тесты для RingBuffer

Проверяет:
1. Вытеснение и хронологический порядок
2. Checkpoint / rollback одной записи
3. Сериализацию и проверку состояния при загрузке
"""

from decimal import Decimal

import pytest

from ta_stream.core.errors import SnapshotError
from ta_stream.core.math.numeric import ZERO
from ta_stream.indicators import RingBuffer


def filled(capacity: int, *values) -> RingBuffer:
    buffer = RingBuffer(capacity)
    for value in values:
        buffer.push(Decimal(value))
    return buffer


class TestRingBufferBasics:
    """Базовые операции"""

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            RingBuffer(0)

    def test_push_returns_zero_until_full(self) -> None:
        buffer = RingBuffer(2)
        assert buffer.push(Decimal(1)) == ZERO
        assert buffer.push(Decimal(2)) == ZERO
        assert buffer.is_full
        assert buffer.push(Decimal(3)) == Decimal(1)

    def test_chronological_iteration(self) -> None:
        buffer = filled(3, 1, 2, 3, 4, 5)
        assert list(buffer) == [Decimal(3), Decimal(4), Decimal(5)]
        assert buffer.oldest() == Decimal(3)
        assert buffer.newest() == Decimal(5)

    def test_partial_iteration(self) -> None:
        buffer = filled(4, 7, 8)
        assert len(buffer) == 2
        assert list(buffer) == [Decimal(7), Decimal(8)]
        assert buffer.oldest() == Decimal(7)

    def test_empty_access_raises(self) -> None:
        buffer = RingBuffer(2)
        assert not buffer
        with pytest.raises(IndexError):
            buffer.oldest()
        with pytest.raises(IndexError):
            buffer.newest()

    def test_clear(self) -> None:
        buffer = filled(2, 1, 2, 3)
        buffer.clear()
        assert len(buffer) == 0
        assert list(buffer) == []


class TestRingBufferCheckpoint:
    """Checkpoint / rollback"""

    def test_rollback_restores_full_buffer(self) -> None:
        buffer = filled(3, 1, 2, 3)
        checkpoint = buffer.checkpoint()
        buffer.push(Decimal(9))
        buffer.rollback(checkpoint)
        assert list(buffer) == [Decimal(1), Decimal(2), Decimal(3)]

    def test_rollback_restores_partial_buffer(self) -> None:
        buffer = filled(3, 1)
        checkpoint = buffer.checkpoint()
        buffer.push(Decimal(9))
        buffer.rollback(checkpoint)
        assert list(buffer) == [Decimal(1)]
        buffer.push(Decimal(2))
        assert list(buffer) == [Decimal(1), Decimal(2)]


class TestRingBufferState:
    """Сериализация состояния"""

    def test_state_roundtrip(self) -> None:
        buffer = filled(3, 1, 2, 3, 4)
        restored = RingBuffer(3)
        restored.load_state(buffer.to_state())
        assert list(restored) == list(buffer)
        assert restored.push(Decimal(5)) == buffer.push(Decimal(5))

    def test_state_values_are_strings(self) -> None:
        state = filled(2, "1.50").to_state()
        assert state == {"capacity": 2, "cursor": 1, "count": 1, "values": ["1.50", "0"]}

    def test_capacity_mismatch_rejected(self) -> None:
        with pytest.raises(SnapshotError, match="capacity"):
            RingBuffer(4).load_state(filled(3, 1).to_state())

    def test_cursor_invariant_enforced(self) -> None:
        state = {"capacity": 3, "cursor": 0, "count": 2, "values": ["1", "2", "0"]}
        with pytest.raises(SnapshotError):
            RingBuffer(3).load_state(state)

    def test_malformed_values_rejected(self) -> None:
        state = {"capacity": 2, "cursor": 0, "count": 0, "values": ["x", "0"]}
        with pytest.raises(SnapshotError):
            RingBuffer(2).load_state(state)

    def test_failed_load_keeps_contents(self) -> None:
        buffer = filled(2, 1)
        with pytest.raises(SnapshotError):
            buffer.load_state({"capacity": 2})
        assert list(buffer) == [Decimal(1)]
