"""
Тесты общего контракта индикаторов (next / reset / snapshot)

Параметризованы по всем зарегистрированным kind.

Проверяет:
1. Детерминизм: одинаковые экземпляры на одной последовательности
2. reset() эквивалентен новому экземпляру
3. Snapshot round-trip через JSON на любом префиксе
4. Фазы FRESH → WARMING → STEADY
5. Транзакционность next(): невалидное наблюдение и арифметическая ошибка
   не меняют состояние
"""

import json
import logging
from decimal import Decimal

import pytest

from ta_stream.core.contracts import SchemaLoader, validate_snapshot
from ta_stream.core.errors import NumericOverflow, SnapshotError
from ta_stream.indicators import (
    AverageTrueRange,
    BollingerBands,
    EfficiencyRatio,
    ExponentialMovingAverage,
    IndicatorPhase,
    IndicatorSnapshot,
    KeltnerChannel,
    Maximum,
    Minimum,
    MovingAverageConvergenceDivergence,
    OnBalanceVolume,
    PercentagePriceOscillator,
    RateOfChange,
    RelativeStrengthIndex,
    SimpleMovingAverage,
    StandardDeviation,
    StochasticOscillator,
    TrueRange,
    WilderMovingAverage,
    indicator_class,
    indicator_kinds,
    restore,
)
from tests.helpers import bar, feed

# =============================================================================
# FIXTURES
# =============================================================================

FACTORIES = {
    "sma": lambda: SimpleMovingAverage(4),
    "ema": lambda: ExponentialMovingAverage(5),
    "wilder": lambda: WilderMovingAverage(4),
    "rsi": lambda: RelativeStrengthIndex(5),
    "macd": lambda: MovingAverageConvergenceDivergence(3, 6, 4),
    "ppo": lambda: PercentagePriceOscillator(3, 6, 4),
    "stochastic": lambda: StochasticOscillator(4, 2),
    "bollinger_bands": lambda: BollingerBands(4, "2.5"),
    "keltner_channel": lambda: KeltnerChannel(4, "1.5"),
    "true_range": TrueRange,
    "atr": lambda: AverageTrueRange(4),
    "standard_deviation": lambda: StandardDeviation(4),
    "rate_of_change": lambda: RateOfChange(3),
    "efficiency_ratio": lambda: EfficiencyRatio(4),
    "minimum": lambda: Minimum(3),
    "maximum": lambda: Maximum(3),
    "obv": OnBalanceVolume,
}

CLOSES = ["10", "11.5", "10.75", "12", "13.25", "12.5", "11", "11.75", "13", "14.5", "13.75", "12.25"]

SERIES = [
    bar(
        high=Decimal(close) + 1,
        low=Decimal(close) - Decimal("1.25"),
        close=close,
        volume=100 * (index + 1),
    )
    for index, close in enumerate(CLOSES)
]


@pytest.fixture(params=sorted(FACTORIES))
def kind(request):
    return request.param


@pytest.fixture
def make(kind):
    return FACTORIES[kind]


# =============================================================================
# REGISTRY
# =============================================================================


class TestRegistry:
    """Закрытый набор kind"""

    def test_every_kind_has_factory(self) -> None:
        assert indicator_kinds() == sorted(FACTORIES)

    def test_schema_enumerates_registered_kinds(self) -> None:
        schema = SchemaLoader().load_schema("indicator_snapshot")
        assert sorted(schema["properties"]["kind"]["enum"]) == indicator_kinds()

    def test_kind_attribute_matches(self, kind, make) -> None:
        assert make().kind == kind
        assert indicator_class(kind) is type(make())

    def test_unknown_kind(self) -> None:
        with pytest.raises(SnapshotError):
            indicator_class("vwap")


# =============================================================================
# NEXT / RESET
# =============================================================================


class TestNextAndReset:
    """Детерминизм и reset()"""

    def test_deterministic(self, make) -> None:
        assert feed(make(), SERIES) == feed(make(), SERIES)

    def test_reset_equals_fresh_instance(self, make) -> None:
        indicator = make()
        feed(indicator, SERIES[:7])
        indicator.reset()
        assert indicator.observations == 0
        assert indicator.phase == IndicatorPhase.FRESH
        assert feed(indicator, SERIES[3:]) == feed(make(), SERIES[3:])

    def test_reset_snapshot_equals_fresh(self, make) -> None:
        indicator = make()
        feed(indicator, SERIES)
        indicator.reset()
        assert indicator.snapshot() == make().snapshot()

    def test_phases(self, make) -> None:
        indicator = make()
        assert indicator.phase == IndicatorPhase.FRESH
        warmup = indicator.warmup_period
        for index, item in enumerate(SERIES[:warmup], start=1):
            indicator.next(item)
            expected = IndicatorPhase.STEADY if index >= warmup else IndicatorPhase.WARMING
            assert indicator.phase == expected
        indicator.next(SERIES[warmup])
        assert indicator.phase == IndicatorPhase.STEADY

    def test_invalid_observation_leaves_state(self, make) -> None:
        indicator = make()
        feed(indicator, SERIES[:5])
        before = indicator.snapshot()
        with pytest.raises((TypeError, ValueError)):
            indicator.next("not a number")
        assert indicator.snapshot() == before


# =============================================================================
# SNAPSHOT ROUND-TRIP
# =============================================================================


class TestSnapshotRoundTrip:
    """snapshot → restore → остаток последовательности == непрерывный экземпляр"""

    @pytest.mark.parametrize("split", [0, 1, 3, 6, 11])
    def test_resume_matches_continuous(self, make, split) -> None:
        continuous = feed(make(), SERIES)

        indicator = make()
        prefix = feed(indicator, SERIES[:split])
        payload = indicator.snapshot().to_json()

        resumed = restore(payload)
        assert prefix + feed(resumed, SERIES[split:]) == continuous

    def test_snapshot_is_stable_through_json(self, make) -> None:
        indicator = make()
        feed(indicator, SERIES[:8])
        snapshot = indicator.snapshot()
        restored = IndicatorSnapshot.from_json(snapshot.to_json())
        assert restored == snapshot
        assert restore(restored).snapshot() == snapshot

    def test_snapshot_satisfies_contract(self, make) -> None:
        indicator = make()
        feed(indicator, SERIES[:5])
        data = json.loads(indicator.snapshot().to_json())
        validate_snapshot(data)
        assert data["version"] == 1
        assert data["observations"] == 5

    def test_load_snapshot_in_place(self, make) -> None:
        source = make()
        feed(source, SERIES[:6])
        target = make()
        target.load_snapshot(source.snapshot())
        assert feed(target, SERIES[6:]) == feed(source, SERIES[6:])

    def test_from_snapshot_rejects_other_kind(self, kind, make) -> None:
        other = "obv" if kind != "obv" else "sma"
        snapshot = FACTORIES[other]().snapshot()
        with pytest.raises(SnapshotError, match="kind"):
            type(make()).from_snapshot(snapshot)


# =============================================================================
# ТРАНЗАКЦИОННОСТЬ
# =============================================================================


class TestRollback:
    """Арифметическая ошибка откатывает экземпляр и его дочерние индикаторы"""

    @pytest.mark.parametrize(
        "factory",
        [lambda: StandardDeviation(3), lambda: BollingerBands(3, 2)],
        ids=["standard_deviation", "bollinger_bands"],
    )
    def test_overflow_rolls_back(self, factory) -> None:
        indicator = factory()
        feed(indicator, [1, 2, 3, 4])
        before = indicator.snapshot()

        with pytest.raises(NumericOverflow):
            indicator.next("9E+999990")

        assert indicator.snapshot() == before
        assert indicator.next(5) == factory().__class__.from_snapshot(before).next(5)

    def test_rollback_logged(self, caplog) -> None:
        sd = StandardDeviation(3)
        with caplog.at_level(logging.WARNING, logger="ta_stream.indicators.base"):
            with pytest.raises(NumericOverflow):
                sd.next("9E+999990")
        assert "rolled back" in caplog.text
        assert "SD(3)" in caplog.text
