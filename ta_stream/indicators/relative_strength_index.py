"""Relative Strength Index (RSI).

delta_t = p_t − p_{t-1}
avg_gain = Wilder(max(delta, 0)), avg_loss = Wilder(max(−delta, 0))
RS = avg_gain / avg_loss
RSI = 100 − 100 / (1 + RS)

Граничные политики:
- первое наблюдение (delta ещё нет) → 50
- avg_loss == 0 → 100 (насыщение вместо деления на ноль)

Выход всегда в [0, 100].
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from ta_stream.core.math.numeric import FIFTY, HUNDRED, ONE, ZERO, clamp, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.wilder_moving_average import WilderMovingAverage

RSI_NEUTRAL = FIFTY
RSI_MAX = HUNDRED
RSI_MIN = ZERO


@register_indicator
class RelativeStrengthIndex(Indicator):
    """RSI(period), period — целое > 0 (по умолчанию 14)."""

    kind = "rsi"
    _STATE = ("_previous",)
    _CHILDREN = ("_avg_gain", "_avg_loss")

    def __init__(self, period: int = 14):
        super().__init__()
        self._period = validate_period(period)
        self._avg_gain = WilderMovingAverage(self._period)
        self._avg_loss = WilderMovingAverage(self._period)
        self._previous: Optional[Decimal] = None

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        if self._previous is None:
            self._previous = value
            return RSI_NEUTRAL

        delta = value - self._previous
        self._previous = value
        avg_gain = self._avg_gain.next(max(delta, ZERO))
        avg_loss = self._avg_loss.next(max(-delta, ZERO))

        if avg_loss == ZERO:
            return RSI_MAX
        rs = avg_gain / avg_loss
        return clamp(HUNDRED - HUNDRED / (ONE + rs), RSI_MIN, RSI_MAX)

    def _reset_state(self) -> None:
        self._previous = None

    def __str__(self) -> str:
        return f"RSI({self._period})"
