"""Rate of Change (ROC).

ROC_t = (p_t − p_{t-period}) / p_{t-period} × 100

Warm-up: пока p_{t-period} ещё не наблюдалось, опорой служит самое первое
значение окна (первый выход — 0). Нулевая опорная цена — DivisionByZero.
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.errors import DivisionByZero
from ta_stream.core.math.numeric import HUNDRED, ZERO, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.ring_buffer import RingBuffer


@register_indicator
class RateOfChange(Indicator):
    """ROC(period), period — целое > 0 (по умолчанию 9)."""

    kind = "rate_of_change"
    _STATE = ("_window",)

    def __init__(self, period: int = 9):
        super().__init__()
        self._period = validate_period(period)
        self._window = RingBuffer(self._period)

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _update(self, value: Decimal) -> Decimal:
        reference = self._window.oldest() if self._window else value
        if reference == ZERO:
            raise DivisionByZero(f"{self}: reference price is zero")
        change = (value - reference) / reference * HUNDRED
        self._window.push(value)
        return change

    def _reset_state(self) -> None:
        self._window.clear()

    def __str__(self) -> str:
        return f"ROC({self._period})"
