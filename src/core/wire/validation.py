"""
Validation Pipeline — проверка записей валидаторами полей

Контракт валидатора: (value, field_name, record) -> str | None.
None — поле корректно, строка — описание нарушения. record передаётся
read-only, чтобы валидатор мог ссылаться на соседние поля.

Семантика first-failure: проверка останавливается на первом нарушении
(записи по порядку батча, поля в порядке объявления). Вызывающий код
использует результат как gate (принять/отклонить), а не как линтер.

Нарушение возвращается как значение (ValidationFailure), а не исключение.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Optional, Protocol

from src.core.wire.data_definition import DataDefinition, DataDefinitionError
from src.core.wire.transform import Batch, Record, normalize
from src.observability.logger import get_logger


logger = get_logger(__name__)

NO_DATA_MESSAGE: Final[str] = "no data"


# =============================================================================
# CONTRACT
# =============================================================================


class FieldValidator(Protocol):
    """Предикат одного поля."""

    def __call__(self, value: Any, field_name: str, record: Mapping[str, Any]) -> Optional[str]:
        ...


@dataclass(frozen=True)
class ValidationFailure:
    """
    Первое найденное нарушение.

    field и index равны None, если вход не содержит ни одной непустой записи.
    """

    message: str
    field: Optional[str] = None
    index: Optional[int] = None
    value: Any = None

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field}[{self.index}]: {self.message}"


# =============================================================================
# PIPELINE
# =============================================================================


def check_validators(validators: Mapping[str, FieldValidator], definition: DataDefinition) -> None:
    """
    Проверка, что валидаторы зарегистрированы только для объявленных полей.

    Raises:
        DataDefinitionError: Если есть валидатор для необъявленного поля
    """
    unknown = [name for name in validators if not definition.is_declared(name)]
    if unknown:
        raise DataDefinitionError(f"Validators registered for undeclared fields: {unknown}")


def _is_empty(record: Record) -> bool:
    return all(value is None for value in record.values())


def validate_with_definition(
    data: Any,
    definition: DataDefinition,
    validators: Mapping[str, FieldValidator],
) -> Optional[ValidationFailure]:
    """
    Валидация одной записи или батча.

    Порядок:
    1. Нормализация входа (те же формы, что и при конструировании)
    2. Пустой батч или батч только из пустых записей → нарушение "no data"
    3. Для каждой записи, для каждого поля с валидатором — вызов валидатора
    4. Первое нарушение → ValidationFailure(field, index, message, value)

    Args:
        data: Запись(и) в любой допустимой форме, включая сущности
        definition: Таблица полей
        validators: Валидаторы по имени поля

    Returns:
        None если вход валиден, иначе первое нарушение
    """
    shape = normalize(data, definition)
    records = list(shape.items) if isinstance(shape, Batch) else [shape.item]

    if not records or all(_is_empty(record) for record in records):
        logger.debug("Validation rejected empty input")
        return ValidationFailure(message=NO_DATA_MESSAGE)

    for index, record in enumerate(records):
        view = MappingProxyType(record)
        for name in definition.field_names:
            validator = validators.get(name)
            if validator is None:
                continue

            value = record[name]
            error = validator(value, name, view)
            if error is not None:
                logger.debug(
                    "Validation failed",
                    extra={"field": name, "index": index, "reason": error},
                )
                return ValidationFailure(message=error, field=name, index=index, value=value)

    return None
