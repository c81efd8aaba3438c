"""
DataDefinition — таблица полей wire-формата

Декларативное отображение имя поля → позиция в массиве (или None).

Позиционный (wire) формат: массив скаляров, смысл значения задаётся индексом.
Позиции не обязаны идти подряд: между полями бывают зарезервированные слоты,
они просто не отображаются. Поле с позицией None не читается из массива и не
пишется в него — это derived поле, вычисляемое при конструировании сущности.

Таблица неизменяема и создаётся один раз на тип сущности.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DataDefinitionError(ValueError):
    """
    Некорректное объявление типа сущности.

    Возникает при импорте модуля сущности (дубликат позиции, отрицательный
    индекс, валидатор для необъявленного поля, несовпадение модели с таблицей).
    Ошибки данных сюда не относятся: они возвращаются как ValidationFailure.
    """


# =============================================================================
# DATA DEFINITION
# =============================================================================


@dataclass(frozen=True)
class DataDefinition:
    """
    Таблица полей одного типа сущности.

    Поддерживает поиск в обе стороны:
    - position_of(name) — для сериализации
    - field_at(position) — для разбора позиционного массива

    Immutable (frozen=True), безопасно разделяется между потоками.
    """

    fields: Mapping[str, Optional[int]]
    _by_position: Mapping[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.fields:
            raise DataDefinitionError("DataDefinition requires at least one field")

        by_position: dict[int, str] = {}
        for name, position in self.fields.items():
            if not isinstance(name, str) or not name:
                raise DataDefinitionError(f"Field name must be a non-empty string, got {name!r}")
            if position is None:
                continue
            # bool является подклассом int, но как индекс не допускается
            if isinstance(position, bool) or not isinstance(position, int):
                raise DataDefinitionError(
                    f"Position of field '{name}' must be int or None, got {position!r}"
                )
            if position < 0:
                raise DataDefinitionError(
                    f"Position of field '{name}' must be non-negative, got {position}"
                )
            if position in by_position:
                raise DataDefinitionError(
                    f"Fields '{by_position[position]}' and '{name}' share position {position}"
                )
            by_position[position] = name

        # Копия входного mapping: внешнее изменение dict не должно менять таблицу
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "_by_position", MappingProxyType(by_position))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def position_of(self, name: str) -> Optional[int]:
        """
        Позиция поля в wire-массиве.

        Raises:
            KeyError: Если поле не объявлено
        """
        return self.fields[name]

    def field_at(self, position: int) -> Optional[str]:
        """Имя поля на позиции или None для неотображённого слота."""
        return self._by_position.get(position)

    def is_declared(self, name: str) -> bool:
        return name in self.fields

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def field_names(self) -> tuple[str, ...]:
        """Все объявленные поля в порядке объявления."""
        return tuple(self.fields)

    @property
    def mapped_fields(self) -> tuple[tuple[str, int], ...]:
        """Пары (имя, позиция) для полей с позицией, по возрастанию позиции."""
        return tuple(
            (name, position) for position, name in sorted(self._by_position.items())
        )

    @property
    def derived_fields(self) -> tuple[str, ...]:
        """Поля без позиции в wire-формате."""
        return tuple(name for name, position in self.fields.items() if position is None)

    @property
    def width(self) -> int:
        """Длина сериализованного массива (максимальная позиция + 1)."""
        if not self._by_position:
            return 0
        return max(self._by_position) + 1

    def empty_record(self) -> dict[str, Any]:
        """Новая каноническая запись: все объявленные поля не заданы (None)."""
        return dict.fromkeys(self.fields)
