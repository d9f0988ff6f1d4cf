"""
Errors — иерархия исключений ta_stream

Все ошибки поднимаются синхронно в точке вызова (конструктор или next()).
Повторов внутри ядра нет: повтор — ответственность внешнего источника данных.

Иерархия:
- TaError
  - InvalidParameter      (конструирование индикатора)
  - InvalidDataItem       (конструирование DataItem)
  - NumericError          (арифметика Numeric Value)
    - NumericOverflow
    - PrecisionLoss
    - NonFiniteValue
    - DivisionByZero
  - SnapshotError         (восстановление из State Snapshot)
"""


class TaError(Exception):
    """Базовая ошибка ta_stream."""


class InvalidParameter(TaError, ValueError):
    """
    Недопустимый параметр конструктора.

    Поднимается только при создании индикатора (period <= 0,
    fast_period >= slow_period, отрицательный multiplier), никогда в next().
    """


class InvalidDataItem(TaError, ValueError):
    """
    Нарушен инвариант DataItem.

    Инвариант: 0 <= low <= min(open, close), high >= max(open, close), volume >= 0.
    """


class NumericError(TaError, ArithmeticError):
    """Базовая ошибка арифметики Numeric Value."""


class NumericOverflow(NumericError):
    """Результат выходит за сконфигурированный диапазон экспоненты."""


class PrecisionLoss(NumericError):
    """Значение не представимо без потери точности сверх настроенной."""


class NonFiniteValue(NumericError, ValueError):
    """NaN или ±Infinity на входе."""


class DivisionByZero(NumericError, ZeroDivisionError):
    """Деление на ноль без задокументированной граничной политики."""


class SnapshotError(TaError, ValueError):
    """
    State Snapshot не может быть восстановлен.

    Причины: неизвестная версия или kind, несовпадение параметров,
    повреждённые аккумуляторы, нарушение JSON Schema контракта.
    """
