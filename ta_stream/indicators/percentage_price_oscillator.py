"""Percentage Price Oscillator (PPO).

PPO       = (EMA_fast(p) − EMA_slow(p)) / EMA_slow(p) × 100
Signal    = EMA_signal(PPO)
Histogram = PPO − Signal

Нулевая медленная EMA (нулевые цены) — DivisionByZero, состояние откатывается.
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.domain.outputs import PpoOutput
from ta_stream.core.errors import DivisionByZero
from ta_stream.core.math.numeric import HUNDRED, ZERO, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.exponential_moving_average import ExponentialMovingAverage
from ta_stream.indicators.moving_average_convergence_divergence import validate_fast_slow
from ta_stream.indicators.registry import register_indicator


@register_indicator
class PercentagePriceOscillator(Indicator):
    """PPO(fast_period, slow_period, signal_period), по умолчанию (12, 26, 9)."""

    kind = "ppo"
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

    def _update(self, value: Decimal) -> PpoOutput:
        fast = self._fast.next(value)
        slow = self._slow.next(value)
        if slow == ZERO:
            raise DivisionByZero(f"{self}: slow EMA is zero")
        ppo = (fast - slow) / slow * HUNDRED
        signal = self._signal.next(ppo)
        return PpoOutput(ppo=ppo, signal=signal, histogram=ppo - signal)

    def __str__(self) -> str:
        return f"PPO({self.fast_period}, {self.slow_period}, {self.signal_period})"
