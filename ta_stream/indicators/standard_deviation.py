"""Standard Deviation (SD) — популяционное стандартное отклонение окна.

σ = sqrt(Σx² / N − (Σx / N)²)

Running sum и sum-of-squares по кольцевому буферу: O(1) на обновление.
Отрицательная дисперсия от округления клампится к нулю до извлечения корня.
Warm-up: N — число увиденных значений (первое значение → 0).
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.math.numeric import ZERO, from_period, numeric_scope, sqrt, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.ring_buffer import RingBuffer


@register_indicator
class StandardDeviation(Indicator):
    """SD(period), period — целое > 0 (по умолчанию 9)."""

    kind = "standard_deviation"
    _STATE = ("_window", "_sum", "_sum_sq")

    def __init__(self, period: int = 9):
        super().__init__()
        self._period = validate_period(period)
        self._window = RingBuffer(self._period)
        self._sum = ZERO
        self._sum_sq = ZERO

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def mean(self) -> Decimal:
        """Среднее текущего окна (ZERO до первого наблюдения)."""
        if not self._window:
            return ZERO
        with numeric_scope():
            return self._sum / from_period(len(self._window))

    def _update(self, value: Decimal) -> Decimal:
        evicted = self._window.push(value)
        self._sum = self._sum - evicted + value
        self._sum_sq = self._sum_sq - evicted * evicted + value * value

        count = from_period(len(self._window))
        mean = self._sum / count
        variance = self._sum_sq / count - mean * mean
        if variance < ZERO:
            variance = ZERO
        return sqrt(variance)

    def _reset_state(self) -> None:
        self._window.clear()
        self._sum = ZERO
        self._sum_sq = ZERO

    def __str__(self) -> str:
        return f"SD({self._period})"
