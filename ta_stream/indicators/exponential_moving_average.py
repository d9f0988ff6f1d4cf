"""Exponential Moving Average (EMA).

α = 2 / (period + 1)
EMA_1 = p_1 (seed)
EMA_t = α × p_t + (1 − α) × EMA_{t-1}

Обновление считается в эквивалентной форме EMA_{t-1} + α × (p_t − EMA_{t-1}):
при p_t == EMA_{t-1} выход не меняется ни на один разряд (неподвижная точка).
Состояние O(1) — только предыдущий выход.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from ta_stream.core.math.numeric import TWO, from_period, numeric_scope, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator


@register_indicator
class ExponentialMovingAverage(Indicator):
    """EMA(period), period — целое > 0 (по умолчанию 9)."""

    kind = "ema"
    _STATE = ("_current",)

    def __init__(self, period: int = 9):
        super().__init__()
        self._period = validate_period(period)
        with numeric_scope():
            self._alpha = TWO / from_period(self._period + 1)
        self._current: Optional[Decimal] = None

    @property
    def period(self) -> int:
        return self._period

    @property
    def alpha(self) -> Decimal:
        """Коэффициент сглаживания 2 / (period + 1)."""
        return self._alpha

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        if self._current is None:
            self._current = value
        else:
            self._current = self._current + self._alpha * (value - self._current)
        return self._current

    def _reset_state(self) -> None:
        self._current = None

    def __str__(self) -> str:
        return f"EMA({self._period})"
