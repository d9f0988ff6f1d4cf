"""Moving Average Convergence Divergence (MACD).

MACD line = EMA_fast(p) − EMA_slow(p)
Signal    = EMA_signal(MACD line)
Histogram = MACD line − Signal

fast_period должен быть строго меньше slow_period.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from ta_stream.core.domain.outputs import MacdOutput
from ta_stream.core.errors import InvalidParameter
from ta_stream.core.math.numeric import validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.exponential_moving_average import ExponentialMovingAverage
from ta_stream.indicators.registry import register_indicator


def validate_fast_slow(fast_period: int, slow_period: int) -> None:
    """
    Проверка, что быстрая EMA реагирует быстрее медленной.

    Raises:
        InvalidParameter: fast_period >= slow_period
    """
    if fast_period >= slow_period:
        raise InvalidParameter(
            f"fast_period ({fast_period}) must be less than slow_period ({slow_period})"
        )


@register_indicator
class MovingAverageConvergenceDivergence(Indicator):
    """MACD(fast_period, slow_period, signal_period), по умолчанию (12, 26, 9)."""

    kind = "macd"
    _STATE = ("_macd",)
    _CHILDREN = ("_fast", "_slow", "_signal")

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9):
        super().__init__()
        fast_period = validate_period(fast_period, "fast_period")
        slow_period = validate_period(slow_period, "slow_period")
        signal_period = validate_period(signal_period, "signal_period")
        validate_fast_slow(fast_period, slow_period)

        self._fast = ExponentialMovingAverage(fast_period)
        self._slow = ExponentialMovingAverage(slow_period)
        self._signal = ExponentialMovingAverage(signal_period)
        # Последняя линия MACD, вход сигнальной EMA
        self._macd: Optional[Decimal] = None

    @property
    def fast_period(self) -> int:
        return self._fast.period

    @property
    def slow_period(self) -> int:
        return self._slow.period

    @property
    def signal_period(self) -> int:
        return self._signal.period

    @property
    def warmup_period(self) -> int:
        return self.slow_period

    def params(self) -> Dict[str, Any]:
        return {
            "fast_period": self.fast_period,
            "slow_period": self.slow_period,
            "signal_period": self.signal_period,
        }

    def _update(self, value: Decimal) -> MacdOutput:
        macd = self._fast.next(value) - self._slow.next(value)
        self._macd = macd
        signal = self._signal.next(macd)
        return MacdOutput(macd=macd, signal=signal, histogram=macd - signal)

    def _reset_state(self) -> None:
        self._macd = None

    def __str__(self) -> str:
        return f"MACD({self.fast_period}, {self.slow_period}, {self.signal_period})"
