"""Bollinger Bands (BB).

Middle = SMA(period) — среднее окна Standard Deviation
Upper  = Middle + multiplier × SD(period)
Lower  = Middle − multiplier × SD(period)

multiplier — неотрицательное число (обычно 2).
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.domain.outputs import BandsOutput
from ta_stream.core.math.numeric import NumericLike, validate_non_negative, validate_period
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.standard_deviation import StandardDeviation


@register_indicator
class BollingerBands(Indicator):
    """BB(period, multiplier), по умолчанию (9, 2)."""

    kind = "bollinger_bands"
    _CHILDREN = ("_sd",)

    def __init__(self, period: int = 9, multiplier: NumericLike = 2):
        super().__init__()
        self._multiplier = validate_non_negative(multiplier, "multiplier")
        self._sd = StandardDeviation(validate_period(period))

    @property
    def period(self) -> int:
        return self._sd.period

    @property
    def multiplier(self) -> Decimal:
        return self._multiplier

    def params(self) -> Dict[str, Any]:
        return {"period": self.period, "multiplier": str(self._multiplier)}

    def _update(self, value: Decimal) -> BandsOutput:
        sd = self._sd.next(value)
        mean = self._sd.mean()
        width = sd * self._multiplier
        return BandsOutput(average=mean, upper=mean + width, lower=mean - width)

    def __str__(self) -> str:
        return f"BB({self.period}, {self._multiplier})"
