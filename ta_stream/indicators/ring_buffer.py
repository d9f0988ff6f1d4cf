"""Ring Buffer — кольцевой буфер фиксированной ёмкости для оконных индикаторов.

Арена из capacity слотов, курсор записи и счётчик заполнения. Запись не
аллоцирует память; вытесняемое значение возвращается вызывающему коду
(нужно для running sum).

Инвариант: пока буфер не заполнен, cursor == count.
"""

from decimal import Decimal
from typing import Any, Dict, Iterator, List, Tuple

from ta_stream.core.errors import SnapshotError
from ta_stream.core.math.numeric import ZERO, to_numeric


class RingBuffer:
    """Кольцевой буфер последних capacity значений.

    Checkpoint/rollback рассчитаны на одну запись между ними: next()
    индикатора пишет в каждый свой буфер не более одного раза.
    """

    __slots__ = ("_capacity", "_values", "_cursor", "_count")

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._values: List[Decimal] = [ZERO] * capacity
        self._cursor = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return self._count == self._capacity

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Decimal]:
        """Значения в хронологическом порядке (от старого к новому)."""
        if self._count < self._capacity:
            yield from self._values[: self._count]
        else:
            yield from self._values[self._cursor :]
            yield from self._values[: self._cursor]

    def push(self, value: Decimal) -> Decimal:
        """
        Запись значения на место самого старого.

        Returns:
            Вытесненное значение (ZERO, пока буфер не заполнен)
        """
        evicted = self._values[self._cursor]
        self._values[self._cursor] = value
        self._cursor = (self._cursor + 1) % self._capacity
        if self._count < self._capacity:
            self._count += 1
        return evicted

    def oldest(self) -> Decimal:
        """Самое старое значение в окне."""
        if self._count == 0:
            raise IndexError("oldest() on empty ring buffer")
        if self._count < self._capacity:
            return self._values[0]
        return self._values[self._cursor]

    def newest(self) -> Decimal:
        """Самое новое значение в окне."""
        if self._count == 0:
            raise IndexError("newest() on empty ring buffer")
        return self._values[self._cursor - 1]

    def clear(self) -> None:
        for i in range(self._capacity):
            self._values[i] = ZERO
        self._cursor = 0
        self._count = 0

    # -------------------------------------------------------------------------
    # Checkpoint / rollback
    # -------------------------------------------------------------------------

    def checkpoint(self) -> Tuple[int, int, Decimal]:
        """O(1) checkpoint: курсор, счётчик и слот, который перезапишет push()."""
        return self._cursor, self._count, self._values[self._cursor]

    def rollback(self, checkpoint: Tuple[int, int, Decimal]) -> None:
        cursor, count, slot = checkpoint
        self._cursor = cursor
        self._count = count
        self._values[cursor] = slot

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def to_state(self) -> Dict[str, Any]:
        return {
            "capacity": self._capacity,
            "cursor": self._cursor,
            "count": self._count,
            "values": [str(value) for value in self._values],
        }

    def load_state(self, state: Dict[str, Any]) -> None:
        """
        Загрузка содержимого из snapshot.

        Raises:
            SnapshotError: Ёмкость не совпадает или нарушен инвариант курсора
        """
        try:
            capacity = state["capacity"]
            cursor = state["cursor"]
            count = state["count"]
            values = [to_numeric(value) for value in state["values"]]
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise SnapshotError(f"Malformed ring buffer state: {exc}") from exc

        if capacity != self._capacity or len(values) != self._capacity:
            raise SnapshotError(
                f"Ring buffer capacity mismatch: expected {self._capacity}, "
                f"got {capacity} with {len(values)} values"
            )
        if not 0 <= count <= capacity or not 0 <= cursor < capacity:
            raise SnapshotError(f"Ring buffer cursor/count out of range: {cursor}/{count}")
        if count < capacity and cursor != count:
            raise SnapshotError(
                f"Ring buffer not full but cursor {cursor} != count {count}"
            )

        self._values = values
        self._cursor = cursor
        self._count = count
