"""True Range.

TR = max(high − low, |high − close_prev|, |low − close_prev|)

Первый бар (close_prev ещё нет): high − low.
Скалярный вход: |p_t − p_{t-1}|, для первого значения 0.
"""

from decimal import Decimal
from typing import Any, Dict, Optional, Union

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.math.numeric import ZERO, max3, to_numeric
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.registry import register_indicator


@register_indicator
class TrueRange(Indicator):
    """TRUE_RANGE() — без параметров."""

    kind = "true_range"
    _STATE = ("_prev_close",)

    def __init__(self) -> None:
        super().__init__()
        self._prev_close: Optional[Decimal] = None

    @property
    def warmup_period(self) -> int:
        # Первый выход не учитывает предыдущее закрытие
        return 2

    def params(self) -> Dict[str, Any]:
        return {}

    def _extract(self, observation: Observation) -> Union[DataItem, Decimal]:
        if isinstance(observation, DataItem):
            return observation
        return to_numeric(observation)

    def _update(self, value: Union[DataItem, Decimal]) -> Decimal:
        if isinstance(value, DataItem):
            if self._prev_close is None:
                distance = value.high - value.low
            else:
                distance = max3(
                    value.high - value.low,
                    abs(value.high - self._prev_close),
                    abs(value.low - self._prev_close),
                )
            self._prev_close = value.close
            return distance

        distance = ZERO if self._prev_close is None else abs(value - self._prev_close)
        self._prev_close = value
        return distance

    def _reset_state(self) -> None:
        self._prev_close = None

    def __str__(self) -> str:
        return "TRUE_RANGE()"
