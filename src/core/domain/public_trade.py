"""
PublicTrade — Публичная сделка торговой пары

Wire-формат: [ID, MTS, AMOUNT, PRICE]

Знак amount задаёт сторону: > 0 — покупка, < 0 — продажа.
"""

from typing import Optional

from pydantic import Field

from src.core.contracts import (
    amount_validator,
    date_validator,
    number_validator,
    price_validator,
)
from src.core.wire import DataDefinition, EntityType, WireModel


FIELDS = DataDefinition({
    "id": 0,
    "mts": 1,
    "amount": 2,
    "price": 3,
})


class PublicTrade(WireModel):
    """Публичная сделка."""

    id: Optional[int] = Field(None, description="Идентификатор сделки")
    mts: Optional[int] = Field(None, description="Время сделки (миллисекунды)")
    amount: Optional[float] = Field(None, description="Объём (знак — сторона)")
    price: Optional[float] = Field(None, description="Цена исполнения")

    def is_buy(self) -> bool:
        return self.amount is not None and self.amount > 0

    def is_sell(self) -> bool:
        return self.amount is not None and self.amount < 0

    def notional(self) -> Optional[float]:
        """|amount| * price, если оба поля заданы."""
        if self.amount is None or self.price is None:
            return None
        return abs(self.amount) * self.price


PUBLIC_TRADE: EntityType[PublicTrade] = EntityType(
    name="public_trade",
    model=PublicTrade,
    definition=FIELDS,
    validators={
        "id": number_validator,
        "mts": date_validator,
        "amount": amount_validator,
        "price": price_validator,
    },
)
