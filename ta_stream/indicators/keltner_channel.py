"""Keltner Channel (KC).

Middle = EMA(period) от typical price (high + low + close) / 3
Upper  = Middle + multiplier × ATR(period)
Lower  = Middle − multiplier × ATR(period)

Скалярный вход: EMA и ATR считаются по самому значению.
"""

from decimal import Decimal
from typing import Any, Dict, Union

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.domain.outputs import BandsOutput
from ta_stream.core.math.numeric import (
    NumericLike,
    to_numeric,
    validate_non_negative,
    validate_period,
)
from ta_stream.indicators.average_true_range import AverageTrueRange
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.exponential_moving_average import ExponentialMovingAverage
from ta_stream.indicators.registry import register_indicator


@register_indicator
class KeltnerChannel(Indicator):
    """KC(period, multiplier), по умолчанию (10, 2)."""

    kind = "keltner_channel"
    _CHILDREN = ("_atr", "_ema")

    def __init__(self, period: int = 10, multiplier: NumericLike = 2):
        super().__init__()
        period = validate_period(period)
        self._multiplier = validate_non_negative(multiplier, "multiplier")
        self._atr = AverageTrueRange(period)
        self._ema = ExponentialMovingAverage(period)

    @property
    def period(self) -> int:
        return self._ema.period

    @property
    def multiplier(self) -> Decimal:
        return self._multiplier

    def params(self) -> Dict[str, Any]:
        return {"period": self.period, "multiplier": str(self._multiplier)}

    def _extract(self, observation: Observation) -> Union[DataItem, Decimal]:
        if isinstance(observation, DataItem):
            return observation
        return to_numeric(observation)

    def _update(self, value: Union[DataItem, Decimal]) -> BandsOutput:
        price = value.typical_price() if isinstance(value, DataItem) else value
        average = self._ema.next(price)
        width = self._atr.next(value) * self._multiplier
        return BandsOutput(average=average, upper=average + width, lower=average - width)

    def __str__(self) -> str:
        return f"KC({self.period}, {self._multiplier})"
