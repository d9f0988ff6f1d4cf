"""
IndicatorSnapshot — Модель снапшота состояния индикатора

Immutable Pydantic модель, отражающая ровно внутренние аккумуляторы
индикатора (running sum, содержимое буфера, предыдущий выход, счётчик
наблюдений) и аккумуляторы дочерних индикаторов. Восстановление из снапшота и
последующие вызовы next() дают те же выходы, что и непрерывный экземпляр.

Формат (версия 1):
    {
      "version": 1,
      "kind": "sma",
      "params": {"period": 3},
      "observations": 5,
      "state": {"_sum": "9", "_window": {"capacity": 3, ...}},
      "children": {}
    }

Decimal сериализуется строкой (точно), None — null, счётчики — integer.
Полная совместимость с JSON Schema (contracts/schema/indicator_snapshot.json).
"""

import json
from decimal import Decimal
from typing import Any, Dict, Final

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError

from ta_stream.core.contracts import validate_snapshot
from ta_stream.core.errors import SnapshotError
from ta_stream.core.math.numeric import to_numeric

# =============================================================================
# ВЕРСИЯ ФОРМАТА
# =============================================================================

SNAPSHOT_VERSION: Final[int] = 1


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class IndicatorSnapshot(BaseModel):
    """
    Снапшот состояния индикатора.

    children содержит снапшоты дочерних индикаторов составного индикатора
    по имени атрибута (например, "_fast", "_slow", "_signal" у MACD).
    """

    version: int = Field(SNAPSHOT_VERSION, ge=1, description="Версия формата")
    kind: str = Field(..., min_length=1, description="Тип индикатора")
    params: Dict[str, Any] = Field(..., description="Параметры конструктора")
    observations: int = Field(..., ge=0, description="Число поглощённых наблюдений")
    state: Dict[str, Any] = Field(..., description="Аккумуляторы индикатора")
    children: Dict[str, "IndicatorSnapshot"] = Field(
        default_factory=dict, description="Снапшоты дочерних индикаторов"
    )

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимый dict."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndicatorSnapshot":
        """
        Загрузка снапшота из dict с миграцией и проверкой контракта.

        Raises:
            SnapshotError: Неизвестная версия, нарушение схемы или модели
        """
        migrated = migrate_snapshot(data)
        try:
            validate_snapshot(migrated)
        except SchemaValidationError as exc:
            raise SnapshotError(f"Snapshot violates contract: {exc.message}") from exc
        try:
            return cls.model_validate(migrated)
        except ModelValidationError as exc:
            raise SnapshotError(f"Invalid snapshot: {exc}") from exc

    @classmethod
    def from_json(cls, text: str) -> "IndicatorSnapshot":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot JSON must be an object")
        return cls.from_dict(data)


# =============================================================================
# МИГРАЦИЯ
# =============================================================================


def migrate_snapshot(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Приведение payload к текущей версии формата.

    Версия 1 — единственная; отсутствующее поле version трактуется как ошибка,
    а не как версия по умолчанию.

    Raises:
        SnapshotError: Версия отсутствует или неизвестна
    """
    version = data.get("version")
    if version is None:
        raise SnapshotError("Snapshot has no version field")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(
            f"Unsupported snapshot version {version!r} (supported: {SNAPSHOT_VERSION})"
        )
    return data


# =============================================================================
# КОДИРОВАНИЕ СКАЛЯРОВ
# =============================================================================


def encode_scalar(value: Any) -> Any:
    """Decimal → str, int → int, None → None."""
    if value is None or (isinstance(value, int) and not isinstance(value, bool)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Unsupported accumulator type: {type(value).__name__}")


def decode_scalar(raw: Any) -> Any:
    """
    Обратное преобразование encode_scalar.

    Raises:
        SnapshotError: Значение не является допустимым аккумулятором
    """
    if raw is None or (isinstance(raw, int) and not isinstance(raw, bool)):
        return raw
    if isinstance(raw, str):
        try:
            return to_numeric(raw)
        except (ValueError, ArithmeticError) as exc:
            raise SnapshotError(f"Malformed numeric accumulator {raw!r}") from exc
    raise SnapshotError(f"Unsupported accumulator value {raw!r}")
