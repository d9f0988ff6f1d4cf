"""Indicators — потоковые индикаторы технического анализа.

- Примитивы: SMA, EMA, Wilder
- Составные: RSI, MACD, PPO, Stochastic, Bollinger Bands, Keltner Channel,
  True Range, ATR, Standard Deviation, ROC, Efficiency Ratio, Minimum/Maximum, OBV
- Общий контракт: next() / reset() / snapshot()

Импорт модулей регистрирует все kind для restore().
"""

from .base import Indicator, IndicatorPhase, Observation
from .ring_buffer import RingBuffer
from .snapshot import SNAPSHOT_VERSION, IndicatorSnapshot, migrate_snapshot
from .registry import indicator_class, indicator_kinds, register_indicator, restore

from .simple_moving_average import SimpleMovingAverage
from .exponential_moving_average import ExponentialMovingAverage
from .wilder_moving_average import WilderMovingAverage
from .relative_strength_index import RelativeStrengthIndex
from .moving_average_convergence_divergence import MovingAverageConvergenceDivergence
from .percentage_price_oscillator import PercentagePriceOscillator
from .min_max import Maximum, Minimum
from .stochastic_oscillator import StochasticOscillator
from .standard_deviation import StandardDeviation
from .bollinger_bands import BollingerBands
from .true_range import TrueRange
from .average_true_range import AverageTrueRange
from .keltner_channel import KeltnerChannel
from .rate_of_change import RateOfChange
from .efficiency_ratio import EfficiencyRatio
from .on_balance_volume import OnBalanceVolume

__all__ = [
    # Contract
    "Indicator",
    "IndicatorPhase",
    "Observation",
    "RingBuffer",
    # Snapshot
    "SNAPSHOT_VERSION",
    "IndicatorSnapshot",
    "migrate_snapshot",
    "indicator_class",
    "indicator_kinds",
    "register_indicator",
    "restore",
    # Indicators
    "SimpleMovingAverage",
    "ExponentialMovingAverage",
    "WilderMovingAverage",
    "RelativeStrengthIndex",
    "MovingAverageConvergenceDivergence",
    "PercentagePriceOscillator",
    "Minimum",
    "Maximum",
    "StochasticOscillator",
    "StandardDeviation",
    "BollingerBands",
    "TrueRange",
    "AverageTrueRange",
    "KeltnerChannel",
    "RateOfChange",
    "EfficiencyRatio",
    "OnBalanceVolume",
]
