"""Average True Range (ATR).

ATR(period)_t = EMA(period) от True Range_t

Индикатор волатильности J. Welles Wilder; сглаживание — EMA с
α = 2 / (period + 1).
"""

from decimal import Decimal
from typing import Any, Dict, Union

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.math.numeric import to_numeric, validate_period
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.exponential_moving_average import ExponentialMovingAverage
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.true_range import TrueRange


@register_indicator
class AverageTrueRange(Indicator):
    """ATR(period), period — целое > 0 (по умолчанию 14)."""

    kind = "atr"
    _CHILDREN = ("_true_range", "_ema")

    def __init__(self, period: int = 14):
        super().__init__()
        self._true_range = TrueRange()
        self._ema = ExponentialMovingAverage(validate_period(period))

    @property
    def period(self) -> int:
        return self._ema.period

    def params(self) -> Dict[str, Any]:
        return {"period": self.period}

    def _extract(self, observation: Observation) -> Union[DataItem, Decimal]:
        if isinstance(observation, DataItem):
            return observation
        return to_numeric(observation)

    def _update(self, value: Union[DataItem, Decimal]) -> Decimal:
        return self._ema.next(self._true_range.next(value))

    def __str__(self) -> str:
        return f"ATR({self.period})"
