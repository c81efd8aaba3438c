"""
Transform — нормализация входных данных и (де)сериализация wire-формата

Принимаемые формы входа:
- один позиционный массив (значения по wire-позициям)
- батч позиционных массивов
- один объект с именованными полями (Mapping или pydantic модель)
- батч объектов
- None

Неоднозначность single/batch разрешается один раз на границе API функцией
detect_shape(), результат — явный тег Single или Batch. Вызывающий код может
передать Single/Batch сам, если позиционная форма сущности содержит составные
значения и эвристика неприменима.

Извлечение полей реализовано ровно в одном месте — extract_record(); через
него проходят конструирование сущностей, unserialize и валидация.

Нормализация никогда не бросает исключений: некорректная форма превращается
в пустую запись (все поля None), отклонять неполные данные — задача валидации.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel

from src.core.wire.data_definition import DataDefinition
from src.observability.logger import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

# Каноническая запись: имя поля → значение (None = не задано)
Record = dict[str, Any]


# =============================================================================
# SHAPE TAGS
# =============================================================================


@dataclass(frozen=True)
class Single(Generic[T]):
    """Один элемент входа."""

    item: T


@dataclass(frozen=True)
class Batch(Generic[T]):
    """Упорядоченный батч элементов (порядок сохраняется во всех преобразованиях)."""

    items: tuple[T, ...]

    def __init__(self, items: Sequence[T]):
        object.__setattr__(self, "items", tuple(items))

    def __len__(self) -> int:
        return len(self.items)


Shape = Union[Single[T], Batch[T]]


# =============================================================================
# SHAPE DETECTION
# =============================================================================


def _is_positional(value: Any) -> bool:
    # str/bytes считаются скалярами
    return isinstance(value, (list, tuple))


def _is_composite(value: Any) -> bool:
    return _is_positional(value) or isinstance(value, (Mapping, BaseModel))


def detect_shape(data: Any) -> Shape[Any]:
    """
    Определение формы входа: один элемент или батч.

    Непустой list/tuple считается батчем, если его первый элемент, не равный
    None, составной (list, tuple, Mapping, BaseModel). Остальные элементы
    батча не проверяются: некорректный элемент превращается в пустую запись
    в extract_record(). Иначе это один позиционный массив.
    [] и None — один пустой элемент.

    Позиционная форма, у которой первое значение само составное, читается
    как батч; для таких сущностей вызывающий код передаёт Single(...).

    Уже размеченный вход (Single/Batch) возвращается без изменений.

    Args:
        data: Вход в любой допустимой форме

    Returns:
        Single или Batch
    """
    if isinstance(data, (Single, Batch)):
        return data

    if _is_positional(data):
        first = next((item for item in data if item is not None), None)
        if _is_composite(first):
            return Batch(data)

    return Single(data)


# =============================================================================
# EXTRACTION
# =============================================================================


def extract_record(item: Any, definition: DataDefinition) -> Record:
    """
    Извлечение канонической записи из одного элемента.

    - Позиционный массив: для каждого поля с позицией value = item[position]
      (позиция за пределами массива → None). Derived поля остаются None.
    - Mapping: копируются объявленные поля по имени.
    - pydantic модель: копируются объявленные атрибуты.
    - None: пустая запись.

    Неизвестные ключи и неотображённые позиции игнорируются.
    Некорректная форма (скаляр, произвольный объект) даёт пустую запись.

    Args:
        item: Один элемент входа
        definition: Таблица полей сущности

    Returns:
        Новая каноническая запись со всеми объявленными полями
    """
    record = definition.empty_record()

    if item is None:
        return record

    if _is_positional(item):
        size = len(item)
        for name, position in definition.mapped_fields:
            if position < size:
                record[name] = item[position]
        return record

    if isinstance(item, Mapping):
        for name in definition.field_names:
            record[name] = item.get(name)
        return record

    if isinstance(item, BaseModel):
        for name in definition.field_names:
            record[name] = getattr(item, name, None)
        return record

    logger.warning(
        "Unsupported input shape, using empty record",
        extra={"input_type": type(item).__name__},
    )
    return record


def normalize(data: Any, definition: DataDefinition) -> Shape[Record]:
    """
    Нормализация входа в каноническую запись (или батч записей).

    Args:
        data: Вход в любой допустимой форме (включая Single/Batch)
        definition: Таблица полей сущности

    Returns:
        Single[Record] или Batch[Record] в исходном порядке
    """
    shape = detect_shape(data)

    if isinstance(shape, Batch):
        return Batch([extract_record(item, definition) for item in shape.items])

    return Single(extract_record(shape.item, definition))


# =============================================================================
# UNSERIALIZE / SERIALIZE
# =============================================================================


def unserialize(data: Any, definition: DataDefinition) -> Union[Record, list[Record]]:
    """
    Преобразование входа в plain dict (или список dict) без создания сущности.

    Derived поля не вычисляются: они остаются None.

    Returns:
        dict для одного элемента, list[dict] для батча
    """
    shape = normalize(data, definition)

    if isinstance(shape, Batch):
        return list(shape.items)

    return shape.item


def _record_to_array(record: Record, definition: DataDefinition) -> list[Any]:
    array: list[Any] = [None] * definition.width
    for name, position in definition.mapped_fields:
        array[position] = record[name]
    return array


def serialize(data: Any, definition: DataDefinition) -> Union[list[Any], list[list[Any]]]:
    """
    Преобразование записи (или сущности) в позиционный wire-массив.

    Неотображённые позиции и derived поля в массив не попадают (слот = None).

    Returns:
        Массив длины definition.width или список таких массивов для батча
    """
    shape = normalize(data, definition)

    if isinstance(shape, Batch):
        return [_record_to_array(record, definition) for record in shape.items]

    return _record_to_array(shape.item, definition)
