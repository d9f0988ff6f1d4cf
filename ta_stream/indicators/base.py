"""Indicator — общий контракт потоковых индикаторов.

Каждый индикатор:
- создаётся с валидированными параметрами (InvalidParameter иначе)
- потребляет одно наблюдение за вызов next() (DataItem или скаляр)
- возвращает текущий выход (Numeric Value или запись с фиксированными полями)
- сбрасывается reset() в состояние только что созданного экземпляра
- сериализует аккумуляторы в IndicatorSnapshot и восстанавливается из него

Фазы (переход только по числу наблюдений, назад — только через reset()):
- FRESH: 0 наблюдений
- WARMING: 1..warmup_period-1 наблюдений (warm-up политика индикатора)
- STEADY: >= warmup_period наблюдений (полная рекуррентная формула)

Транзакционность next(): наблюдение валидируется до изменения состояния,
затем обновление выполняется поверх O(1) checkpoint всех аккумуляторов
(включая дочерние индикаторы). NumericError откатывает экземпляр к checkpoint.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Type, TypeVar, Union

from jsonschema import ValidationError as SchemaValidationError

from ta_stream.core.contracts import validate_snapshot
from ta_stream.core.domain.data_item import DataItem
from ta_stream.core.errors import InvalidParameter, NumericError, SnapshotError
from ta_stream.core.math.numeric import NumericLike, numeric_scope, to_numeric
from ta_stream.indicators.ring_buffer import RingBuffer
from ta_stream.indicators.snapshot import (
    SNAPSHOT_VERSION,
    IndicatorSnapshot,
    decode_scalar,
    encode_scalar,
)

logger = logging.getLogger(__name__)

Observation = Union[DataItem, NumericLike]

_T = TypeVar("_T", bound="Indicator")


class IndicatorPhase(str, Enum):
    """Фаза жизненного цикла индикатора."""

    FRESH = "FRESH"
    WARMING = "WARMING"
    STEADY = "STEADY"


class Indicator(ABC):
    """Базовый класс потокового индикатора.

    Подклассы объявляют:
    - kind: идентификатор типа в снапшоте (закрытый набор, см. registry)
    - _STATE: имена атрибутов-аккумуляторов (Decimal, int, None или RingBuffer)
    - _CHILDREN: имена атрибутов с дочерними индикаторами
    - _update(): рекуррентная формула (вызывается внутри numeric_scope)
    - _reset_state(): возврат собственных аккумуляторов к начальным значениям
    - params(): параметры конструктора для снапшота

    Экземпляр не потокобезопасен: один писатель на серию, наблюдения
    строго в порядке времени.
    """

    kind: ClassVar[str]
    _STATE: ClassVar[Tuple[str, ...]] = ()
    _CHILDREN: ClassVar[Tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._observations = 0

    # -------------------------------------------------------------------------
    # Контракт
    # -------------------------------------------------------------------------

    @abstractmethod
    def params(self) -> Dict[str, Any]:
        """Параметры конструктора (JSON-совместимые)."""

    @abstractmethod
    def _update(self, value: Any) -> Any:
        """Обновление аккумуляторов и вычисление выхода."""

    def _reset_state(self) -> None:
        """Сброс собственных аккумуляторов (дочерние сбрасываются в reset())."""

    def _extract(self, observation: Observation) -> Any:
        """
        Извлечение входа индикатора из наблюдения.

        По умолчанию индикатор ценовой: DataItem → close, скаляр → Numeric Value.
        """
        if isinstance(observation, DataItem):
            return observation.close
        return to_numeric(observation)

    @property
    def warmup_period(self) -> int:
        """Число наблюдений до фазы STEADY."""
        return self.period

    @property
    def observations(self) -> int:
        return self._observations

    @property
    def phase(self) -> IndicatorPhase:
        if self._observations == 0:
            return IndicatorPhase.FRESH
        if self._observations < self.warmup_period:
            return IndicatorPhase.WARMING
        return IndicatorPhase.STEADY

    def next(self, observation: Observation) -> Any:
        """
        Поглощение следующего наблюдения.

        Args:
            observation: DataItem или скаляр (int, str, float, Decimal)

        Returns:
            Текущий выход индикатора

        Raises:
            TypeError / ValueError / NumericError: Наблюдение невалидно
                (состояние не изменено)
            NumericError: Арифметика не представима (состояние откатывается)
        """
        value = self._extract(observation)
        checkpoint = self._checkpoint()
        try:
            with numeric_scope():
                output = self._update(value)
        except NumericError as exc:
            self._rollback(checkpoint)
            logger.warning("%s: update rolled back after %s: %s", self, type(exc).__name__, exc)
            raise
        self._observations += 1
        return output

    def reset(self) -> None:
        """Возврат к состоянию только что созданного экземпляра."""
        for name in self._CHILDREN:
            getattr(self, name).reset()
        self._reset_state()
        self._observations = 0
        logger.debug("%s: reset", self)

    # -------------------------------------------------------------------------
    # Checkpoint / rollback
    # -------------------------------------------------------------------------

    def _checkpoint(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        saved: Dict[str, Any] = {"_observations": self._observations}
        for name in self._STATE:
            value = getattr(self, name)
            saved[name] = value.checkpoint() if isinstance(value, RingBuffer) else value
        children = {name: getattr(self, name)._checkpoint() for name in self._CHILDREN}
        return saved, children

    def _rollback(self, checkpoint: Tuple[Dict[str, Any], Dict[str, Any]]) -> None:
        saved, children = checkpoint
        for name, value in saved.items():
            current = getattr(self, name)
            if isinstance(current, RingBuffer):
                current.rollback(value)
            else:
                setattr(self, name, value)
        for name, child_checkpoint in children.items():
            getattr(self, name)._rollback(child_checkpoint)

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def snapshot(self) -> IndicatorSnapshot:
        """Снапшот всех аккумуляторов (рекурсивно для дочерних)."""
        state: Dict[str, Any] = {}
        for name in self._STATE:
            value = getattr(self, name)
            state[name] = value.to_state() if isinstance(value, RingBuffer) else encode_scalar(value)
        return IndicatorSnapshot(
            version=SNAPSHOT_VERSION,
            kind=self.kind,
            params=self.params(),
            observations=self._observations,
            state=state,
            children={name: getattr(self, name).snapshot() for name in self._CHILDREN},
        )

    @classmethod
    def from_snapshot(cls: Type[_T], snapshot: IndicatorSnapshot) -> _T:
        """
        Создание экземпляра из снапшота.

        Raises:
            SnapshotError: Снапшот другого типа, с невалидными параметрами
                или повреждёнными аккумуляторами
        """
        if snapshot.kind != cls.kind:
            raise SnapshotError(
                f"Snapshot kind {snapshot.kind!r} does not match {cls.__name__} ({cls.kind!r})"
            )
        try:
            validate_snapshot(snapshot.to_dict())
        except SchemaValidationError as exc:
            raise SnapshotError(f"Snapshot violates contract: {exc.message}") from exc
        try:
            instance = cls(**snapshot.params)
        except (InvalidParameter, TypeError) as exc:
            raise SnapshotError(f"Snapshot parameters rejected: {exc}") from exc
        instance._apply_snapshot(snapshot)
        logger.debug("%s: restored at %d observations", instance, instance.observations)
        return instance

    def load_snapshot(self, snapshot: IndicatorSnapshot) -> None:
        """
        Восстановление на месте.

        Состояние заменяется целиком только при успешной загрузке.
        """
        restored = type(self).from_snapshot(snapshot)
        self.__dict__.update(restored.__dict__)

    def _apply_snapshot(self, snapshot: IndicatorSnapshot) -> None:
        if set(snapshot.state) != set(self._STATE):
            raise SnapshotError(
                f"{self}: state fields {sorted(snapshot.state)} != {sorted(self._STATE)}"
            )
        if set(snapshot.children) != set(self._CHILDREN):
            raise SnapshotError(
                f"{self}: children {sorted(snapshot.children)} != {sorted(self._CHILDREN)}"
            )

        for name in self._STATE:
            current = getattr(self, name)
            raw = snapshot.state[name]
            if isinstance(current, RingBuffer):
                if not isinstance(raw, dict):
                    raise SnapshotError(f"{self}: {name} must be a ring buffer state")
                current.load_state(raw)
            else:
                setattr(self, name, decode_scalar(raw))

        for name in self._CHILDREN:
            child = getattr(self, name)
            child_snapshot = snapshot.children[name]
            if child_snapshot.kind != child.kind:
                raise SnapshotError(
                    f"{self}: child {name} kind {child_snapshot.kind!r} != {child.kind!r}"
                )
            if child_snapshot.params != child.params():
                raise SnapshotError(
                    f"{self}: child {name} params {child_snapshot.params} != {child.params()}"
                )
            child._apply_snapshot(child_snapshot)

        self._observations = snapshot.observations
