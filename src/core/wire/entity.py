"""
EntityType — сборка таблицы полей, валидаторов и модели сущности

Тип сущности не наследует логику преобразований: он передаёт движку
DataDefinition, словарь валидаторов и (опционально) derive-хук.
Определение формы входа, позиционное извлечение и обход валидаторов
реализованы один раз в transform/validation.

Операции:
- construct(data)   — сущность или список сущностей
- unserialize(data) — plain dict без derived полей
- serialize(data)   — позиционный wire-массив (bool_fields как 0/1)
- validate(data)    — ValidationFailure | None
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

from src.core.wire.data_definition import DataDefinition, DataDefinitionError
from src.core.wire.transform import Batch, Record, Single, normalize, serialize, unserialize
from src.core.wire.validation import (
    FieldValidator,
    ValidationFailure,
    check_validators,
    validate_with_definition,
)
from src.observability.logger import get_logger


logger = get_logger(__name__)

# Derive-хук: получает нормализованную запись, возвращает значения derived полей
DeriveHook = Callable[[Mapping[str, Any]], Mapping[str, Any]]


def flag_to_bool(value: Any) -> Any:
    """Wire-флаг 0/1 → bool; прочие значения (включая None) без изменений."""
    if isinstance(value, bool) or not isinstance(value, int):
        return value
    if value in (0, 1):
        return bool(value)
    return value


def bool_to_flag(value: Any) -> Any:
    """bool → wire-флаг 0/1; прочие значения без изменений."""
    if isinstance(value, bool):
        return int(value)
    return value


# =============================================================================
# BASE RECORD MODEL
# =============================================================================


class WireModel(BaseModel):
    """
    Базовая pydantic модель записи сущности.

    Все поля сущности объявляются явно как Optional[...] = None.
    Экземпляры создаются через EntityType.construct (model_construct, без
    приведения типов): типы проверяют валидаторы, а не конструктор.

    Immutable модель (frozen=True).
    """

    model_config = {"frozen": True, "extra": "ignore"}

    def to_record(self) -> Record:
        """Каноническая запись (все поля модели)."""
        return {name: getattr(self, name) for name in type(self).model_fields}


M = TypeVar("M", bound=WireModel)


# =============================================================================
# ENTITY TYPE
# =============================================================================


@dataclass(frozen=True)
class EntityType(Generic[M]):
    """
    Тип сущности: модель + таблица полей + валидаторы + derive-хук.

    bool_fields — поля-флаги, которые по wire передаются как 0/1: при
    конструировании 0/1 становятся bool, при сериализации bool пишется
    обратно как 0/1. Прочие значения остаются как есть (их отклонит
    валидатор). unserialize отдаёт флаги в wire-виде.

    Проверки при объявлении (DataDefinitionError):
    - поля модели совпадают с полями таблицы
    - валидаторы и bool_fields относятся только к объявленным полям
    - derive-хук возвращает только объявленные поля (проверяется при вызове)
    """

    name: str
    model: type[M]
    definition: DataDefinition
    validators: Mapping[str, FieldValidator] = field(default_factory=dict)
    derive: Optional[DeriveHook] = None
    bool_fields: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        model_fields = set(self.model.model_fields)
        declared = set(self.definition.field_names)
        if model_fields != declared:
            raise DataDefinitionError(
                f"{self.name}: model fields {sorted(model_fields ^ declared)} "
                f"do not match the data definition"
            )

        check_validators(self.validators, self.definition)
        object.__setattr__(self, "validators", MappingProxyType(dict(self.validators)))

        unknown_flags = sorted(set(self.bool_fields) - declared)
        if unknown_flags:
            raise DataDefinitionError(f"{self.name}: bool_fields {unknown_flags} are not declared")
        object.__setattr__(self, "bool_fields", frozenset(self.bool_fields))

        logger.debug(
            "Entity type defined",
            extra={"entity": self.name, "fields": len(declared), "validators": len(self.validators)},
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _build(self, record: Record) -> M:
        for name in self.bool_fields:
            record[name] = flag_to_bool(record[name])

        if self.derive is not None:
            derived = self.derive(MappingProxyType(record))
            unknown = [name for name in derived if not self.definition.is_declared(name)]
            if unknown:
                raise DataDefinitionError(f"{self.name}: derive returned undeclared fields {unknown}")
            record.update(derived)

        return self.model.model_construct(**record)

    def construct(self, data: Any) -> Union[M, list[M]]:
        """
        Создание сущности (или списка сущностей) из входа любой формы.

        Derive-хук применяется ровно один раз на запись. Отсутствующие или
        некорректные данные дают сущность с незаданными полями, а не ошибку.

        Returns:
            Сущность для одного элемента, список сущностей для батча
        """
        shape = normalize(data, self.definition)

        if isinstance(shape, Batch):
            return [self._build(record) for record in shape.items]

        return self._build(shape.item)

    def construct_many(self, data: Any) -> list[M]:
        """construct(), всегда возвращающий список."""
        result = self.construct(data)
        return result if isinstance(result, list) else [result]

    # -------------------------------------------------------------------------
    # Transform
    # -------------------------------------------------------------------------

    def unserialize(self, data: Any) -> Union[Record, list[Record]]:
        return unserialize(data, self.definition)

    def serialize(self, data: Any) -> Union[list[Any], list[list[Any]]]:
        """Позиционный wire-массив; bool_fields пишутся как 0/1."""
        shape = normalize(data, self.definition)

        if isinstance(shape, Batch):
            return serialize(Batch([self._to_wire(record) for record in shape.items]), self.definition)

        return serialize(Single(self._to_wire(shape.item)), self.definition)

    def _to_wire(self, record: Record) -> Record:
        for name in self.bool_fields:
            record[name] = bool_to_flag(record[name])
        return record

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, data: Any) -> Optional[ValidationFailure]:
        """
        Валидация записи(ей) валидаторами сущности.

        Не зависит от уже созданных экземпляров: принимает массивы, dict,
        сущности и батчи.

        Returns:
            None если вход валиден, иначе первое нарушение
        """
        return validate_with_definition(data, self.definition, self.validators)

    def is_valid(self, data: Any) -> bool:
        return self.validate(data) is None
