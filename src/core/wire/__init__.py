"""
Wire — движок преобразований позиционного wire-формата.

Общий для всех сущностей: таблица полей, нормализация входа,
(де)сериализация и конвейер валидации.
"""

from src.core.wire.data_definition import DataDefinition, DataDefinitionError
from src.core.wire.entity import DeriveHook, EntityType, WireModel
from src.core.wire.transform import (
    Batch,
    Record,
    Single,
    detect_shape,
    extract_record,
    normalize,
    serialize,
    unserialize,
)
from src.core.wire.validation import (
    NO_DATA_MESSAGE,
    FieldValidator,
    ValidationFailure,
    validate_with_definition,
)

__all__ = [
    # Data definition
    "DataDefinition",
    "DataDefinitionError",
    # Transform
    "Single",
    "Batch",
    "Record",
    "detect_shape",
    "extract_record",
    "normalize",
    "unserialize",
    "serialize",
    # Validation
    "FieldValidator",
    "ValidationFailure",
    "NO_DATA_MESSAGE",
    "validate_with_definition",
    # Entity
    "EntityType",
    "WireModel",
    "DeriveHook",
]
