"""
Field Validators — каталог предикатов полей

Каждый валидатор построен на фрагменте JSON Schema и проверяется
jsonschema.Draft202012Validator. Числовые схемы дополнительно отклоняют
NaN/Inf (JSON Schema их не различает).

Контракт: (value, field_name, record) -> str | None.

Валидаторы:
- number   — конечное число (bool не число)
- amount   — конечное число, знак не ограничен
- price    — конечное число > 0
- date     — целый timestamp в миллисекундах > 0
- currency — код валюты (BTC, USD, TESTBTC)
- symbol   — торговый/funding символ (tBTCUSD, fUSD, tTESTBTC:TESTUSD)
- string   — любая строка
- boolean  — bool или wire-флаг 0/1

Отсутствующее значение (None) отклоняется всеми валидаторами.
"""

import math
from collections.abc import Mapping
from typing import Any, Final, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMAS
# =============================================================================

CURRENCY_PATTERN: Final[str] = r"^[A-Z0-9]{3,}$"

# t: торговая пара, f: funding; пара слитно (BTCUSD) или через ':' (TESTBTC:TESTUSD)
SYMBOL_PATTERN: Final[str] = r"^[tf][A-Z0-9]{3,}(:[A-Z0-9]{3,})?$"

NUMBER_SCHEMA: Final[dict[str, Any]] = {"type": "number"}
AMOUNT_SCHEMA: Final[dict[str, Any]] = {"type": "number"}
PRICE_SCHEMA: Final[dict[str, Any]] = {"type": "number", "exclusiveMinimum": 0}
DATE_SCHEMA: Final[dict[str, Any]] = {"type": "integer", "exclusiveMinimum": 0}
CURRENCY_SCHEMA: Final[dict[str, Any]] = {"type": "string", "pattern": CURRENCY_PATTERN}
SYMBOL_SCHEMA: Final[dict[str, Any]] = {"type": "string", "pattern": SYMBOL_PATTERN}
STRING_SCHEMA: Final[dict[str, Any]] = {"type": "string"}
BOOLEAN_SCHEMA: Final[dict[str, Any]] = {
    "anyOf": [{"type": "boolean"}, {"enum": [0, 1]}],
}


# =============================================================================
# SCHEMA FIELD VALIDATOR
# =============================================================================


class SchemaFieldValidator:
    """
    Валидатор поля на основе JSON Schema.

    Схема проверяется (meta-validation) при создании валидатора.
    """

    def __init__(self, name: str, schema: dict[str, Any], finite: bool = False):
        """
        Args:
            name: Имя правила (используется в сообщениях)
            schema: JSON Schema фрагмент для значения поля
            finite: Отклонять NaN/Inf для числовых значений

        Raises:
            ValueError: Если schema не является валидной JSON Schema
        """
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema for {name} validator: {e.message}")

        self.name = name
        self.schema = schema
        self.finite = finite
        self._validator = Draft202012Validator(schema)

    def __call__(self, value: Any, field_name: str, record: Mapping[str, Any]) -> Optional[str]:
        if value is None:
            return f"{field_name} is required ({self.name})"

        error = next(iter(self._validator.iter_errors(value)), None)
        if error is not None:
            return f"invalid {self.name}: {error.message}"

        if self.finite and isinstance(value, float) and not math.isfinite(value):
            return f"invalid {self.name}: {value!r} is not finite"

        return None

    def __repr__(self) -> str:
        return f"SchemaFieldValidator({self.name!r})"


# =============================================================================
# CATALOGUE
# =============================================================================

number_validator = SchemaFieldValidator("number", NUMBER_SCHEMA, finite=True)
amount_validator = SchemaFieldValidator("amount", AMOUNT_SCHEMA, finite=True)
price_validator = SchemaFieldValidator("price", PRICE_SCHEMA, finite=True)
date_validator = SchemaFieldValidator("date", DATE_SCHEMA)
currency_validator = SchemaFieldValidator("currency", CURRENCY_SCHEMA)
symbol_validator = SchemaFieldValidator("symbol", SYMBOL_SCHEMA)
string_validator = SchemaFieldValidator("string", STRING_SCHEMA)
boolean_validator = SchemaFieldValidator("boolean", BOOLEAN_SCHEMA)
