"""Stochastic Oscillator.

%K = 100 × (close − lowest low) / (highest high − lowest low)
%D = SMA(d_period) от %K

Экстремумы окна ведут дочерние Minimum (по low) и Maximum (по high).
Скалярный вход используется как high, low и close одновременно.

Flat-окно (highest high == lowest low): %K = 0 — граничная конвенция,
на которую опираются потребители, а не ошибка деления.
"""

from decimal import Decimal
from typing import Any, Dict, Union

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.domain.outputs import StochasticOutput
from ta_stream.core.math.numeric import HUNDRED, ZERO, safe_divide, to_numeric, validate_period
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.min_max import Maximum, Minimum
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.simple_moving_average import SimpleMovingAverage


@register_indicator
class StochasticOscillator(Indicator):
    """STOCH(period, d_period), по умолчанию (14, 3)."""

    kind = "stochastic"
    _CHILDREN = ("_lowest", "_highest", "_smooth")

    def __init__(self, period: int = 14, d_period: int = 3):
        super().__init__()
        period = validate_period(period)
        d_period = validate_period(d_period, "d_period")
        self._lowest = Minimum(period)
        self._highest = Maximum(period)
        self._smooth = SimpleMovingAverage(d_period)

    @property
    def period(self) -> int:
        return self._lowest.period

    @property
    def d_period(self) -> int:
        return self._smooth.period

    def params(self) -> Dict[str, Any]:
        return {"period": self.period, "d_period": self.d_period}

    def _extract(self, observation: Observation) -> Union[DataItem, Decimal]:
        if isinstance(observation, DataItem):
            return observation
        return to_numeric(observation)

    def _update(self, value: Union[DataItem, Decimal]) -> StochasticOutput:
        close = value.close if isinstance(value, DataItem) else value
        lowest = self._lowest.next(value)
        highest = self._highest.next(value)

        percent_k = safe_divide((close - lowest) * HUNDRED, highest - lowest, ZERO)
        percent_d = self._smooth.next(percent_k)
        return StochasticOutput(percent_k=percent_k, percent_d=percent_d)

    def __str__(self) -> str:
        return f"STOCH({self.period}, {self.d_period})"
