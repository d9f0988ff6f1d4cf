"""Minimum / Maximum — скользящие экстремумы за period наблюдений.

Minimum по DataItem берёт low, Maximum — high; скалярный вход — само значение.

Экстремум хранится вместе с возрастом (число записей с момента его появления).
Окно пересканируется только когда экстремум покидает окно, поэтому
амортизированная стоимость O(1), худший случай O(period).
Warm-up: экстремум всех увиденных значений.
"""

import operator
from decimal import Decimal
from typing import Any, Callable, ClassVar, Dict, Optional

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.math.numeric import to_numeric, validate_period
from ta_stream.indicators.base import Indicator, Observation
from ta_stream.indicators.registry import register_indicator
from ta_stream.indicators.ring_buffer import RingBuffer


class _RollingExtreme(Indicator):
    """Общая реализация Minimum/Maximum."""

    _STATE = ("_window", "_extreme", "_age")
    # prefer(candidate, current) → candidate становится экстремумом
    _prefer: ClassVar[Callable[[Decimal, Decimal], bool]]
    _field: ClassVar[str]
    _label: ClassVar[str]

    def __init__(self, period: int = 14):
        super().__init__()
        self._period = validate_period(period)
        self._window = RingBuffer(self._period)
        self._extreme: Optional[Decimal] = None
        self._age = 0

    @property
    def period(self) -> int:
        return self._period

    def params(self) -> Dict[str, Any]:
        return {"period": self._period}

    def _extract(self, observation: Observation) -> Decimal:
        if isinstance(observation, DataItem):
            return getattr(observation, self._field)
        return to_numeric(observation)

    def _update(self, value: Decimal) -> Decimal:
        self._window.push(value)
        if self._extreme is None or type(self)._prefer(value, self._extreme):
            self._extreme = value
            self._age = 0
        else:
            self._age += 1
            if self._age >= self._period:
                self._rescan()
        return self._extreme

    def _rescan(self) -> None:
        # При равенстве берётся самое свежее вхождение
        values = list(self._window)
        best_index = 0
        for index, price in enumerate(values):
            if type(self)._prefer(price, values[best_index]):
                best_index = index
        self._extreme = values[best_index]
        self._age = len(values) - 1 - best_index

    def _reset_state(self) -> None:
        self._window.clear()
        self._extreme = None
        self._age = 0

    def __str__(self) -> str:
        return f"{self._label}({self._period})"


@register_indicator
class Minimum(_RollingExtreme):
    """MIN(period) — минимум low за period наблюдений (по умолчанию 14)."""

    kind = "minimum"
    _prefer = operator.le
    _field = "low"
    _label = "MIN"


@register_indicator
class Maximum(_RollingExtreme):
    """MAX(period) — максимум high за period наблюдений (по умолчанию 14)."""

    kind = "maximum"
    _prefer = operator.ge
    _field = "high"
    _label = "MAX"
