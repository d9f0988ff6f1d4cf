"""Общие хелперы тестов индикаторов."""

from decimal import Decimal
from typing import Any, Iterable, List

from ta_stream.core.domain import DataItem


def feed(indicator, observations: Iterable[Any]) -> List[Any]:
    """Последовательная подача наблюдений, список выходов."""
    return [indicator.next(observation) for observation in observations]


def close_to(actual: Decimal, expected: str, places: int = 3) -> bool:
    """
    Сравнение с опубликованным значением, округлённым до places знаков.

    Допуск чуть больше половины единицы последнего разряда: опубликованные
    значения округлены, а граничные .5 в Decimal могут уйти в любую сторону.
    """
    return abs(actual - Decimal(expected)) <= Decimal(6).scaleb(-(places + 1))


def all_close(actual: Iterable[Decimal], expected: Iterable[str], places: int = 3) -> bool:
    actual = list(actual)
    expected = list(expected)
    return len(actual) == len(expected) and all(
        close_to(a, e, places) for a, e in zip(actual, expected)
    )


def bar(high, low, close, volume=0, open=None) -> DataItem:
    """Бар с open = close по умолчанию (всегда внутри [low, high])."""
    return DataItem(
        open=close if open is None else open,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )
