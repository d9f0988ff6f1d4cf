"""
Outputs — записи результатов составных индикаторов

Небольшие записи с фиксированными полями Numeric Value. Immutable, создаются
на каждый вызов next().
"""

from dataclasses import astuple, dataclass
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class MacdOutput:
    """Результат MACD: линия MACD, сигнальная линия, гистограмма."""

    macd: Decimal
    signal: Decimal
    histogram: Decimal

    def as_tuple(self) -> Tuple[Decimal, Decimal, Decimal]:
        return astuple(self)


@dataclass(frozen=True)
class PpoOutput:
    """Результат PPO: осциллятор в процентах, сигнальная линия, гистограмма."""

    ppo: Decimal
    signal: Decimal
    histogram: Decimal

    def as_tuple(self) -> Tuple[Decimal, Decimal, Decimal]:
        return astuple(self)


@dataclass(frozen=True)
class StochasticOutput:
    """Результат Stochastic: %K (сырая линия) и %D (SMA от %K)."""

    percent_k: Decimal
    percent_d: Decimal

    def as_tuple(self) -> Tuple[Decimal, Decimal]:
        return astuple(self)


@dataclass(frozen=True)
class BandsOutput:
    """
    Результат канальных индикаторов (Bollinger Bands, Keltner Channel).

    average — средняя линия, upper/lower — average ± multiplier × ширина.
    """

    average: Decimal
    upper: Decimal
    lower: Decimal

    def as_tuple(self) -> Tuple[Decimal, Decimal, Decimal]:
        return astuple(self)


# Псевдонимы по имени индикатора
BollingerBandsOutput = BandsOutput
KeltnerChannelOutput = BandsOutput
