"""Kaufman's Efficiency Ratio (ER).

ER = |p_t − p_{t-period}| / Σ |p_i − p_{i-1}|

Отношение чистого смещения цены к пройденному пути за окно. Значения в [0, 1]:
1 — движение по прямой, около 0 — шум. Нулевой путь (flat) → 1.
Warm-up: опорой служит первое значение окна.
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.math.numeric import ONE, ZERO, safe_divide, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.ring_buffer import RingBuffer


@register_indicator
class EfficiencyRatio(Indicator):
    """ER(period), period — целое > 0 (по умолчанию 14)."""

    kind = "efficiency_ratio"
    _STATE = ("_window",)

    def __init__(self, period: int = 14):
        super().__init__()
        self._period = validate_period(period)
        self._window = RingBuffer(self._period)

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        first = self._window.oldest() if self._window else value
        self._window.push(value)

        volatility = ZERO
        previous = first
        for price in self._window:
            volatility += abs(price - previous)
            previous = price

        return safe_divide(abs(first - value), volatility, ONE)

    def _reset_state(self) -> None:
        self._window.clear()

    def __str__(self) -> str:
        return f"ER({self._period})"
