"""Registry — закрытый набор типов индикаторов для восстановления из снапшота.

Диспетчеризация по полю kind снапшота. Набор типов фиксирован модулями пакета
ta_stream.indicators и совпадает с перечислением kind в JSON Schema контракте.
"""

from typing import Any, Dict, List, Type, TypeVar, Union

from ta_stream.core.errors import SnapshotError
from ta_stream.indicators.base import Indicator
from ta_stream.indicators.snapshot import IndicatorSnapshot

_REGISTRY: Dict[str, Type[Indicator]] = {}

_I = TypeVar("_I", bound=Type[Indicator])


def register_indicator(cls: _I) -> _I:
    """Регистрация класса индикатора по его kind."""
    kind = cls.kind
    if kind in _REGISTRY and _REGISTRY[kind] is not cls:
        raise ValueError(f"Indicator kind {kind!r} already registered by {_REGISTRY[kind].__name__}")
    _REGISTRY[kind] = cls
    return cls


def indicator_kinds() -> List[str]:
    """Зарегистрированные kind в алфавитном порядке."""
    return sorted(_REGISTRY)


def indicator_class(kind: str) -> Type[Indicator]:
    """
    Класс индикатора по kind.

    Raises:
        SnapshotError: Неизвестный kind
    """
    try:
        return _REGISTRY[kind]
    except KeyError:
        raise SnapshotError(f"Unknown indicator kind {kind!r}") from None


def restore(snapshot: Union[IndicatorSnapshot, Dict[str, Any], str]) -> Indicator:
    """
    Восстановление индикатора из снапшота любого представления.

    Args:
        snapshot: IndicatorSnapshot, dict (JSON-совместимый) или JSON строка

    Returns:
        Новый экземпляр с состоянием из снапшота

    Raises:
        SnapshotError: Снапшот не может быть восстановлен
    """
    if isinstance(snapshot, str):
        snapshot = IndicatorSnapshot.from_json(snapshot)
    elif isinstance(snapshot, dict):
        snapshot = IndicatorSnapshot.from_dict(snapshot)
    return indicator_class(snapshot.kind).from_snapshot(snapshot)
