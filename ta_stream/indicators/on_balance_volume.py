"""On Balance Volume (OBV).

OBV_t = OBV_{t-1} + volume,  если close_t > close_{t-1}
OBV_t = OBV_{t-1} − volume,  если close_t < close_{t-1}
OBV_t = OBV_{t-1},           если close_t == close_{t-1}

Начальное предыдущее закрытие — 0. Требует DataItem (нужен объём).
"""

from decimal import Decimal
from typing import Any, Dict

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.math.numeric import ZERO
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.registry import register_indicator


@register_indicator
class OnBalanceVolume(Indicator):
    """OBV — без параметров."""

    kind = "obv"
    _STATE = ("_obv", "_prev_close")

    def __init__(self) -> None:
        super().__init__()
        self._obv = ZERO
        self._prev_close = ZERO

    @property
    def warmup_period(self) -> int:
        # Первое сравнение идёт с нулевым закрытием
        return 2

    def params(self) -> Dict[str, Any]:
        return {}

    def _extract(self, observation: Observation) -> DataItem:
        if not isinstance(observation, DataItem):
            raise TypeError(f"{self} requires a DataItem with volume, got {type(observation).__name__}")
        return observation

    def _update(self, item: DataItem) -> Decimal:
        if item.close > self._prev_close:
            self._obv += item.volume
        elif item.close < self._prev_close:
            self._obv -= item.volume
        self._prev_close = item.close
        return self._obv

    def _reset_state(self) -> None:
        self._obv = ZERO
        self._prev_close = ZERO

    def __str__(self) -> str:
        return "OBV"
