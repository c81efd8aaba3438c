"""
FundingLoan — Funding займ

Wire-формат (позиции 9, 10 и 17 зарезервированы и не отображаются):
[ID, SYMBOL, SIDE, MTS_CREATE, MTS_UPDATE, AMOUNT, FLAGS, STATUS, TYPE,
 _, _, RATE, PERIOD, MTS_OPENING, MTS_LAST_PAYOUT, NOTIFY, HIDDEN, _,
 RENEW, RATE_REAL, NO_CLOSE]

Флаги NOTIFY, HIDDEN, RENEW, NO_CLOSE приходят как 0/1 и хранятся как bool.
"""

from typing import Optional

from pydantic import Field

from src.core.contracts import (
    amount_validator,
    boolean_validator,
    date_validator,
    number_validator,
    string_validator,
    symbol_validator,
)
from src.core.wire import DataDefinition, EntityType, WireModel


FIELDS = DataDefinition({
    "id": 0,
    "symbol": 1,
    "side": 2,
    "mts_create": 3,
    "mts_update": 4,
    "amount": 5,
    "flags": 6,
    "status": 7,
    "type": 8,
    "rate": 11,
    "period": 12,
    "mts_opening": 13,
    "mts_last_payout": 14,
    "notify": 15,
    "hidden": 16,
    "renew": 18,
    "rate_real": 19,
    "no_close": 20,
})


# =============================================================================
# FUNDING LOAN MODEL
# =============================================================================


class FundingLoan(WireModel):
    """Funding займ (выданный или полученный)."""

    id: Optional[int] = Field(None, description="Идентификатор займа")
    symbol: Optional[str] = Field(None, description="Funding символ (например, 'fUSD')")
    side: Optional[int] = Field(None, description="1 — lender, 0 — оба, -1 — borrower")
    mts_create: Optional[int] = Field(None, description="Время создания (миллисекунды)")
    mts_update: Optional[int] = Field(None, description="Время обновления (миллисекунды)")
    amount: Optional[float] = Field(None, description="Сумма займа")
    flags: Optional[int] = Field(None, description="Флаги займа")
    status: Optional[str] = Field(None, description="Статус (например, 'ACTIVE')")
    type: Optional[str] = Field(None, description="Тип ставки ('FIXED' / 'VAR')")
    rate: Optional[float] = Field(None, description="Дневная ставка")
    period: Optional[int] = Field(None, description="Срок займа (дни)")
    mts_opening: Optional[int] = Field(None, description="Время открытия (миллисекунды)")
    mts_last_payout: Optional[int] = Field(None, description="Время последней выплаты")
    notify: Optional[bool] = Field(None, description="Флаг уведомлений")
    hidden: Optional[bool] = Field(None, description="Флаг скрытого займа")
    renew: Optional[bool] = Field(None, description="Флаг автопродления")
    rate_real: Optional[float] = Field(None, description="Фактическая ставка")
    no_close: Optional[bool] = Field(None, description="Не закрывать при закрытии позиции")

    def is_lender(self) -> bool:
        return self.side is not None and self.side > 0

    def is_borrower(self) -> bool:
        return self.side is not None and self.side < 0


FUNDING_LOAN: EntityType[FundingLoan] = EntityType(
    name="funding_loan",
    model=FundingLoan,
    definition=FIELDS,
    validators={
        "id": number_validator,
        "symbol": symbol_validator,
        "side": number_validator,
        "mts_create": date_validator,
        "mts_update": date_validator,
        "amount": amount_validator,
        "flags": number_validator,
        "status": string_validator,
        "type": string_validator,
        "rate": number_validator,
        "period": number_validator,
        "mts_opening": date_validator,
        "mts_last_payout": date_validator,
        "notify": boolean_validator,
        "hidden": boolean_validator,
        "renew": boolean_validator,
        "rate_real": number_validator,
        "no_close": boolean_validator,
    },
    bool_fields=frozenset({"notify", "hidden", "renew", "no_close"}),
)
