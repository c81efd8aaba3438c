"""
Wallet — Баланс кошелька

Wire-формат: [TYPE, CURRENCY, BALANCE, UNSETTLED_INTEREST,
BALANCE_AVAILABLE, DESCRIPTION]
"""

from typing import Optional

from pydantic import Field

from src.core.contracts import amount_validator, currency_validator, string_validator
from src.core.wire import DataDefinition, EntityType, WireModel


FIELDS = DataDefinition({
    "type": 0,
    "currency": 1,
    "balance": 2,
    "unsettled_interest": 3,
    "balance_available": 4,
    "description": 5,
})


class Wallet(WireModel):
    """Баланс одной валюты в кошельке ('exchange', 'margin', 'funding')."""

    type: Optional[str] = Field(None, description="Тип кошелька")
    currency: Optional[str] = Field(None, description="Валюта")
    balance: Optional[float] = Field(None, description="Баланс")
    unsettled_interest: Optional[float] = Field(None, description="Неурегулированный процент")
    balance_available: Optional[float] = Field(None, description="Доступный баланс")
    description: Optional[str] = Field(None, description="Описание последнего изменения")


WALLET: EntityType[Wallet] = EntityType(
    name="wallet",
    model=Wallet,
    definition=FIELDS,
    validators={
        "type": string_validator,
        "currency": currency_validator,
        "balance": amount_validator,
        "unsettled_interest": amount_validator,
        "balance_available": amount_validator,
    },
)
