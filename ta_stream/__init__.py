"""ta_stream — потоковый движок технического анализа на Decimal.

Индикаторы потребляют по одному наблюдению (DataItem или скаляр) за вызов
next(), хранят только ограниченные аккумуляторы и сериализуют их в
версионированный снапшот для возобновления без повторного прогона истории.
"""

from ta_stream.core.domain import DataItem
from ta_stream.core.errors import (
    DivisionByZero,
    InvalidDataItem,
    InvalidParameter,
    NonFiniteValue,
    NumericError,
    NumericOverflow,
    PrecisionLoss,
    SnapshotError,
    TaError,
)
from ta_stream.core.math import NumericConfig, configure_numeric, to_numeric
from ta_stream.indicators import *  # noqa: F401,F403
from ta_stream.indicators import __all__ as _indicators_all

__version__ = "0.1.0"

__all__ = [
    "DataItem",
    "NumericConfig",
    "configure_numeric",
    "to_numeric",
    "TaError",
    "InvalidParameter",
    "InvalidDataItem",
    "NumericError",
    "NumericOverflow",
    "PrecisionLoss",
    "NonFiniteValue",
    "DivisionByZero",
    "SnapshotError",
    *_indicators_all,
]
