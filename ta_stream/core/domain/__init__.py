"""
Domain models and value objects.

Contains the observation record (DataItem) and composite indicator outputs.
"""

from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.domain.outputs import (
    BandsOutput,
    BollingerBandsOutput,
    KeltnerChannelOutput,
    MacdOutput,
    PpoOutput,
    StochasticOutput,
)

__all__ = [
    # Observation
    "DataItem",
    # Outputs
    "BandsOutput",
    "BollingerBandsOutput",
    "KeltnerChannelOutput",
    "MacdOutput",
    "PpoOutput",
    "StochasticOutput",
]
