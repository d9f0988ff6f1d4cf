"""
DataItem — Модель наблюдения OHLCV

Immutable Pydantic модель одного бара (open, high, low, close, volume).
Создаётся один раз на наблюдение, потребляется одним или несколькими
индикаторами и отбрасывается вызывающим кодом. Индикаторы не хранят ссылок
на DataItem — только производные скаляры.

ИНВАРИАНТ:
    0 <= low <= min(open, close) <= max(open, close) <= high, volume >= 0

Нарушение инварианта при конструировании → InvalidDataItem.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ta_stream.core.errors import InvalidDataItem
from ta_stream.core.math.numeric import THREE, ZERO, numeric_scope, to_numeric


class DataItem(BaseModel):
    """
    Модель бара OHLCV.

    Immutable модель (frozen=True). Все цены и объём — Numeric Value (Decimal),
    принимаются из int/str/float/Decimal через to_numeric (без молчаливого
    округления).

    Конструктор поднимает InvalidDataItem вместо pydantic.ValidationError
    (исходная ошибка доступна через __cause__).
    """

    open: Decimal = Field(..., description="Цена открытия")
    high: Decimal = Field(..., description="Максимальная цена бара")
    low: Decimal = Field(..., description="Минимальная цена бара")
    close: Decimal = Field(..., description="Цена закрытия")
    volume: Decimal = Field(..., description="Объём за бар")
    time: Optional[datetime] = Field(None, description="Время открытия бара (nullable)")

    model_config = {"frozen": True}

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidDataItem(_format_errors(exc)) from exc

    @field_validator("open", "high", "low", "close", "volume", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> Decimal:
        """Конверсия в Numeric Value; NaN/Inf и лишние разряды отвергаются."""
        try:
            return to_numeric(v)
        except (TypeError, ArithmeticError) as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def validate_ohlcv(self) -> "DataItem":
        """
        Проверка инварианта бара.

        Порядок проверок: неотрицательность, затем упорядоченность цен.
        """
        for name in ("open", "high", "low", "close", "volume"):
            value = getattr(self, name)
            if value < ZERO:
                raise ValueError(f"{name} must be non-negative, got {value}")

        if self.low > self.high:
            raise ValueError(f"low {self.low} exceeds high {self.high}")
        if self.low > min(self.open, self.close):
            raise ValueError(
                f"low {self.low} exceeds min(open, close) {min(self.open, self.close)}"
            )
        if self.high < max(self.open, self.close):
            raise ValueError(
                f"high {self.high} below max(open, close) {max(self.open, self.close)}"
            )
        return self

    def typical_price(self) -> Decimal:
        """Typical price: (high + low + close) / 3."""
        with numeric_scope():
            return (self.high + self.low + self.close) / THREE


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "data_item"
        parts.append(f"{location}: {error['msg']}")
    return "Invalid data item: " + "; ".join(parts)
