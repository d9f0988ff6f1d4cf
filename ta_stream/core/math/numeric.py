"""
Numeric Value — десятичный скаляр фиксированной точности

Все вычисления индикаторов выполняются в decimal.Decimal внутри одного
централизованно настроенного decimal.Context. Конфигурация (точность,
округление, диапазон экспоненты) задаётся один раз на границе системы через
configure_numeric() и далее только читается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входные литералы никогда не округляются молча (PrecisionLoss)
2. NaN/Inf никогда не попадают в вычисления (NonFiniteValue)
3. Переполнение и деление на ноль — явные ошибки, не fallback
4. Результаты арифметики округляются только до настроенной точности
5. Все операции детерминированы и воспроизводимы
"""

import decimal
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Final, Iterator, Optional, Union

from ta_stream.core.errors import (
    DivisionByZero,
    InvalidParameter,
    NonFiniteValue,
    NumericOverflow,
    PrecisionLoss,
)

logger = logging.getLogger(__name__)

NumericLike = Union[Decimal, int, str, float]

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)
TWO: Final[Decimal] = Decimal(2)
THREE: Final[Decimal] = Decimal(3)
FIFTY: Final[Decimal] = Decimal(50)
HUNDRED: Final[Decimal] = Decimal(100)

# 28 значащих цифр — та же разрядность, что у 96-битной мантиссы
DEFAULT_PRECISION: Final[int] = 28
DEFAULT_EMAX: Final[int] = 999_999
DEFAULT_EMIN: Final[int] = -999_999

_ROUNDING_MODES: Final[frozenset] = frozenset(
    {
        decimal.ROUND_05UP,
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
    }
)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class NumericConfig:
    """Конфигурация арифметики Numeric Value.

    - precision: число значащих цифр результата
    - rounding: режим округления результатов арифметики
    - emin/emax: допустимый диапазон экспоненты (за пределами — ошибка)
    """

    precision: int = DEFAULT_PRECISION
    rounding: str = ROUND_HALF_EVEN
    emin: int = DEFAULT_EMIN
    emax: int = DEFAULT_EMAX

    def __post_init__(self) -> None:
        if self.precision < 1:
            raise ValueError(f"precision must be positive, got {self.precision}")
        if self.rounding not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding}")
        if self.emin > 0 or self.emax < 0:
            raise ValueError(
                f"Exponent range must contain zero, got [{self.emin}, {self.emax}]"
            )

    def context(self) -> decimal.Context:
        """
        Построение decimal.Context с ловушками на все явные ошибки.

        Inexact не ловится: округление результата до precision — штатное поведение.
        """
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            Emin=self.emin,
            Emax=self.emax,
            capitals=1,
            clamp=0,
            flags=[],
            traps=[
                decimal.InvalidOperation,
                decimal.DivisionByZero,
                decimal.Overflow,
                decimal.Underflow,
            ],
        )


_config: NumericConfig = NumericConfig()
_context: decimal.Context = _config.context()


def configure_numeric(config: NumericConfig) -> None:
    """
    Установка конфигурации Numeric Value для процесса.

    Вызывается один раз на границе (до создания индикаторов). Индикаторы,
    созданные до смены конфигурации, продолжают работу с новой точностью.

    Args:
        config: Новая конфигурация
    """
    global _config, _context
    _config = config
    _context = config.context()
    logger.debug(
        "Numeric config set: precision=%d rounding=%s exp=[%d, %d]",
        config.precision,
        config.rounding,
        config.emin,
        config.emax,
    )


def get_numeric_config() -> NumericConfig:
    """Текущая конфигурация Numeric Value."""
    return _config


@contextmanager
def numeric_scope() -> Iterator[decimal.Context]:
    """
    Контекст арифметики Numeric Value.

    Внутри блока операции Decimal выполняются в настроенном контексте,
    а сигналы модуля decimal переводятся в ошибки ta_stream:
    - DivisionByZero (x / 0 при x != 0) → DivisionByZero
    - Overflow → NumericOverflow
    - Underflow, Inexact (если включён), InvalidOperation → PrecisionLoss

    0 / 0 модуль decimal сигнализирует как InvalidOperation, поэтому
    индикаторы с документированной политикой деления проверяют ноль явно.

    Yields:
        Локальная копия decimal.Context (флаги не накапливаются глобально)
    """
    try:
        with decimal.localcontext(_context) as ctx:
            yield ctx
    except decimal.DivisionByZero as exc:
        raise DivisionByZero("Division by zero in numeric operation") from exc
    except decimal.Overflow as exc:
        raise NumericOverflow(
            f"Result exceeds configured exponent range (emax={_config.emax})"
        ) from exc
    except decimal.Underflow as exc:
        raise PrecisionLoss(
            f"Result underflows configured exponent range (emin={_config.emin})"
        ) from exc
    except decimal.Inexact as exc:
        raise PrecisionLoss(
            f"Value cannot be represented in {_config.precision} significant digits"
        ) from exc
    except decimal.InvalidOperation as exc:
        raise PrecisionLoss(f"Invalid numeric operation: {exc!r}") from exc


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_numeric(value: NumericLike) -> Decimal:
    """
    Конверсия числового литерала в Numeric Value.

    float конвертируется через кратчайший repr, поэтому 0.1 → Decimal("0.1"),
    а не двоичное приближение.

    Args:
        value: int, str, float или Decimal

    Returns:
        Decimal, точно представимый в настроенной точности

    Raises:
        TypeError: bool или неподдерживаемый тип
        ValueError: Строка не является числовым литералом
        NonFiniteValue: NaN или ±Infinity
        PrecisionLoss: Значащих цифр больше, чем precision
        NumericOverflow: Экспонента вне диапазона

    Examples:
        >>> to_numeric(0.1)
        Decimal('0.1')
        >>> to_numeric("2.50")
        Decimal('2.50')
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric value")

    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, int):
        candidate = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise NonFiniteValue(f"Numeric value must be finite, got {value}")
        candidate = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            candidate = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Not a numeric literal: {value!r}") from None
    else:
        raise TypeError(f"Unsupported numeric type: {type(value).__name__}")

    if not candidate.is_finite():
        raise NonFiniteValue(f"Numeric value must be finite, got {candidate}")

    with numeric_scope() as ctx:
        ctx.traps[decimal.Inexact] = True
        return ctx.create_decimal(candidate)


def to_period(value: Union[int, NumericLike], name: str = "period") -> int:
    """
    Конверсия в период (целое > 0).

    Args:
        value: int или целочисленный Numeric Value
        name: Имя параметра для сообщения об ошибке

    Returns:
        Период как int

    Raises:
        InvalidParameter: Значение не целое или <= 0
    """
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")

    if isinstance(value, int):
        period = value
    else:
        try:
            numeric = to_numeric(value)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise InvalidParameter(f"{name} must be an integer, got {value!r}") from exc
        if numeric != numeric.to_integral_value():
            raise InvalidParameter(f"{name} must be an integer, got {value!r}")
        period = int(numeric)

    if period <= 0:
        raise InvalidParameter(f"{name} must be positive, got {period}")
    return period


def from_period(period: int) -> Decimal:
    """Период как Numeric Value (делитель для средних)."""
    return Decimal(period)


def to_display(value: Decimal, places: Optional[int] = None) -> str:
    """
    Строковое представление для отображения.

    Без экспоненциальной записи. При заданном places значение квантуется
    с округлением half-up (как принято в отчётах).

    Examples:
        >>> to_display(Decimal("1E+2"))
        '100'
        >>> to_display(Decimal("2.6666"), places=3)
        '2.667'
    """
    if places is not None:
        if places < 0:
            raise ValueError(f"places must be non-negative, got {places}")
        with numeric_scope():
            value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return format(value, "f")


# =============================================================================
# БЕЗОПАСНЫЕ ОПЕРАЦИИ
# =============================================================================


def safe_divide(numerator: Decimal, denominator: Decimal, fallback: Decimal) -> Decimal:
    """
    Деление с задокументированной граничной политикой.

    Используется ТОЛЬКО там, где значение при нулевом знаменателе является
    конвенцией индикатора (flat-рынок в Stochastic, нулевая волатильность в ER).
    Во всех остальных местах деление на ноль — ошибка DivisionByZero.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Результат при denominator == 0

    Returns:
        numerator / denominator или fallback
    """
    if denominator == ZERO:
        return fallback
    with numeric_scope():
        return numerator / denominator


def sqrt(value: Decimal) -> Decimal:
    """
    Квадратный корень в настроенной точности.

    Raises:
        PrecisionLoss: Отрицательный аргумент (вызывающий код обязан
            клампить отрицательную дисперсию от округления до нуля)
    """
    if value < ZERO:
        raise PrecisionLoss(f"Square root of negative value {value}")
    with numeric_scope():
        return value.sqrt()


def clamp(
    value: Decimal,
    min_value: Optional[Decimal] = None,
    max_value: Optional[Decimal] = None,
) -> Decimal:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(Decimal(105), ZERO, HUNDRED)
        Decimal('100')
    """
    result = value
    if min_value is not None:
        result = max(result, min_value)
    if max_value is not None:
        result = min(result, max_value)
    return result


def max3(a: Decimal, b: Decimal, c: Decimal) -> Decimal:
    """Максимум из трёх значений."""
    return max(a, b, c)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_period(value: int, name: str = "period") -> int:
    """
    Валидация периода индикатора.

    Raises:
        InvalidParameter: Если период не целое положительное число
    """
    return to_period(value, name)


def validate_non_negative(value: NumericLike, name: str) -> Decimal:
    """
    Валидация, что параметр — конечное неотрицательное число.

    Raises:
        InvalidParameter: Если значение отрицательное или не число
    """
    try:
        numeric = to_numeric(value)
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise InvalidParameter(f"{name} must be a finite number, got {value!r}") from exc
    if numeric < ZERO:
        raise InvalidParameter(f"{name} must be non-negative, got {numeric}")
    return numeric
