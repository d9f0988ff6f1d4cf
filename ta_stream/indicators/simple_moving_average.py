"""Simple Moving Average (SMA).

SMA_t = (p_t + p_{t-1} + ... + p_{t-period+1}) / period

Running sum по кольцевому буферу последних period значений: O(1) на
обновление. Warm-up: пока наблюдений меньше period, выход — среднее всех
увиденных значений (не NaN и не дополнение нулями).
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.math.numeric import ZERO, from_period, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.ring_buffer import RingBuffer


@register_indicator
class SimpleMovingAverage(Indicator):
    """SMA(period), period — целое > 0 (по умолчанию 9)."""

    kind = "sma"
    _STATE = ("_window", "_sum")

    def __init__(self, period: int = 9):
        super().__init__()
        self._period = validate_period(period)
        self._window = RingBuffer(self._period)
        self._sum = ZERO

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        evicted = self._window.push(value)
        self._sum = self._sum - evicted + value
        return self._sum / from_period(len(self._window))

    def _reset_state(self) -> None:
        self._window.clear()
        self._sum = ZERO

    def __str__(self) -> str:
        return f"SMA({self._period})"
