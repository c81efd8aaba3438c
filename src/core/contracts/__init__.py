"""
Field Contract Validators

Каталог валидаторов полей для wire-сущностей (JSON Schema через jsonschema).
"""

from .validators import (
    SchemaFieldValidator,
    amount_validator,
    boolean_validator,
    currency_validator,
    date_validator,
    number_validator,
    price_validator,
    string_validator,
    symbol_validator,
)

__all__ = [
    # Classes
    "SchemaFieldValidator",
    # Validators
    "number_validator",
    "amount_validator",
    "price_validator",
    "date_validator",
    "currency_validator",
    "symbol_validator",
    "string_validator",
    "boolean_validator",
]
