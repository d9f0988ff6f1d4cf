"""Wilder's smoothed moving average.

Экспоненциальное сглаживание с коэффициентом 1/period (в отличие от
2/(period + 1) у EMA). Используется в RSI для средних gain/loss.

W_1 = p_1 (seed)
W_t = W_{t-1} + (p_t − W_{t-1}) / period
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from ta_stream.core.math.numeric import from_period, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator


@register_indicator
class WilderMovingAverage(Indicator):
    """WILDER(period), period — целое > 0 (по умолчанию 14)."""

    kind = "wilder"
    _STATE = ("_current",)

    def __init__(self, period: int = 14):
        super().__init__()
        self._period = validate_period(period)
        self._current: Optional[Decimal] = None

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        if self._current is None:
            self._current = value
        else:
            self._current = self._current + (value - self._current) / from_period(self._period)
        return self._current

    def _reset_state(self) -> None:
        self._current = None

    def __str__(self) -> str:
        return f"WILDER({self._period})"
