"""
LedgerEntry — Запись леджера

Wire-формат: [ID, CURRENCY, _, MTS, _, AMOUNT, BALANCE, _, DESCRIPTION]

Поле wallet не передаётся по wire: оно извлекается из описания
("Transfer from wallet margin" → "margin") при создании сущности.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import Field

from src.core.contracts import (
    amount_validator,
    currency_validator,
    date_validator,
    number_validator,
    string_validator,
)
from src.core.wire import DataDefinition, EntityType, WireModel


WALLET_MARKER = "wallet"

FIELDS = DataDefinition({
    "id": 0,
    "currency": 1,
    "mts": 3,
    "amount": 5,
    "balance": 6,
    "description": 8,
    "wallet": None,
})


# =============================================================================
# LEDGER ENTRY MODEL
# =============================================================================


class LedgerEntry(WireModel):
    """Запись леджера (движение средств по кошельку)."""

    id: Optional[int] = Field(None, description="Идентификатор записи")
    currency: Optional[str] = Field(None, description="Валюта (например, 'USD')")
    mts: Optional[int] = Field(None, description="Время транзакции (миллисекунды)")
    amount: Optional[float] = Field(None, description="Сумма транзакции")
    balance: Optional[float] = Field(None, description="Баланс после транзакции")
    description: Optional[str] = Field(None, description="Описание транзакции")
    wallet: Optional[str] = Field(None, description="Кошелёк (из описания)")


def wallet_from_description(description: Any) -> Optional[str]:
    """
    Имя кошелька: текст после последнего вхождения "wallet" в описании.

    Examples:
        >>> wallet_from_description("Transfer from wallet margin")
        'margin'
        >>> wallet_from_description("Trading fees") is None
        True
    """
    if not isinstance(description, str) or not description:
        return None

    parts = description.split(WALLET_MARKER)
    if len(parts) < 2:
        return None

    return parts[-1].strip()


def _derive(record: Mapping[str, Any]) -> dict[str, Any]:
    return {"wallet": wallet_from_description(record["description"])}


LEDGER_ENTRY: EntityType[LedgerEntry] = EntityType(
    name="ledger_entry",
    model=LedgerEntry,
    definition=FIELDS,
    validators={
        "id": number_validator,
        "currency": currency_validator,
        "mts": date_validator,
        "amount": amount_validator,
        "balance": amount_validator,
        "description": string_validator,
    },
    derive=_derive,
)
