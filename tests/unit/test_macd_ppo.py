"""
Тесты для MACD и PPO

Проверяет:
1. Опубликованные значения (fast=3, slow=6, signal=4)
2. InvalidParameter при fast_period >= slow_period
3. Откат состояния PPO при нулевой медленной EMA
"""

from decimal import Decimal

import pytest

from ta_stream.core.domain import MacdOutput, PpoOutput
from ta_stream.core.errors import DivisionByZero, InvalidParameter
from ta_stream.indicators import (
    IndicatorPhase,
    MovingAverageConvergenceDivergence,
    PercentagePriceOscillator,
)
from tests.helpers import all_close, feed


def columns(outputs):
    return [list(column) for column in zip(*(output.as_tuple() for output in outputs))]


class TestMovingAverageConvergenceDivergence:
    """Тесты для MACD"""

    def test_published_values(self) -> None:
        macd = MovingAverageConvergenceDivergence(3, 6, 4)
        outputs = feed(macd, [2, 3, "4.2", 7, "6.7", "6.5"])
        line, signal, histogram = columns(outputs)

        assert all_close(line, ["0", "0.21", "0.52", "1.15", "1.15", "0.94"], places=2)
        assert all_close(signal, ["0", "0.09", "0.26", "0.62", "0.83", "0.87"], places=2)
        assert all_close(histogram, ["0", "0.13", "0.26", "0.54", "0.32", "0.07"], places=2)

    def test_output_record(self) -> None:
        output = MovingAverageConvergenceDivergence(3, 6, 4).next(5)
        assert isinstance(output, MacdOutput)
        assert output == MacdOutput(macd=Decimal(0), signal=Decimal(0), histogram=Decimal(0))

    def test_histogram_is_line_minus_signal(self) -> None:
        for output in feed(MovingAverageConvergenceDivergence(2, 5, 3), [5, 8, 3, 9, 11, 4]):
            assert output.histogram == output.macd - output.signal

    @pytest.mark.parametrize("fast,slow", [(26, 12), (12, 12)])
    def test_fast_not_below_slow_rejected(self, fast, slow) -> None:
        with pytest.raises(InvalidParameter, match="fast_period"):
            MovingAverageConvergenceDivergence(fast, slow, 9)

    @pytest.mark.parametrize("params", [(0, 26, 9), (12, 0, 9), (12, 26, 0)])
    def test_non_positive_periods_rejected(self, params) -> None:
        with pytest.raises(InvalidParameter):
            MovingAverageConvergenceDivergence(*params)

    def test_warmup_follows_slow_period(self) -> None:
        macd = MovingAverageConvergenceDivergence(3, 6, 4)
        feed(macd, [1] * 5)
        assert macd.phase == IndicatorPhase.WARMING
        macd.next(1)
        assert macd.phase == IndicatorPhase.STEADY

    def test_defaults_and_display(self) -> None:
        macd = MovingAverageConvergenceDivergence()
        assert (macd.fast_period, macd.slow_period, macd.signal_period) == (12, 26, 9)
        assert str(macd) == "MACD(12, 26, 9)"

    def test_reset(self) -> None:
        macd = MovingAverageConvergenceDivergence(3, 6, 4)
        feed(macd, [2, 3, "4.2"])
        macd.reset()
        assert macd.next(100).as_tuple() == (0, 0, 0)


class TestPercentagePriceOscillator:
    """Тесты для PPO"""

    def test_published_values(self) -> None:
        ppo = PercentagePriceOscillator(3, 6, 4)
        outputs = feed(ppo, [2, 3, "4.2", 8, "6.7", "6.5"])
        line, signal, histogram = columns(outputs)

        assert all_close(line, ["0", "9.38", "18.26", "31.70", "23.94", "16.98"], places=2)
        assert all_close(signal, ["0", "3.75", "9.56", "18.41", "20.63", "19.17"], places=2)
        assert all_close(histogram, ["0", "5.63", "8.71", "13.29", "3.32", "-2.19"], places=2)

    def test_output_record(self) -> None:
        assert isinstance(PercentagePriceOscillator(3, 6, 4).next(5), PpoOutput)

    def test_fast_not_below_slow_rejected(self) -> None:
        with pytest.raises(InvalidParameter):
            PercentagePriceOscillator(6, 3, 4)

    def test_zero_slow_average_rolls_back(self) -> None:
        """Нулевая медленная EMA → DivisionByZero, состояние не изменено"""
        ppo = PercentagePriceOscillator(2, 3, 2)
        with pytest.raises(DivisionByZero):
            ppo.next(0)
        assert ppo.observations == 0
        assert ppo.phase == IndicatorPhase.FRESH
        assert ppo.next(4).as_tuple() == (0, 0, 0)

    def test_defaults_and_display(self) -> None:
        assert str(PercentagePriceOscillator()) == "PPO(12, 26, 9)"
