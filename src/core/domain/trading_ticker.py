"""
TradingTicker — Тикер торговой пары

Wire-формат: [SYMBOL, BID, BID_SIZE, ASK, ASK_SIZE, DAILY_CHANGE,
DAILY_CHANGE_PERC, LAST_PRICE, VOLUME, HIGH, LOW]

Поля base/quote не передаются по wire: они вычисляются из символа
при создании сущности.
"""

from collections.abc import Mapping
from typing import Any, Final, Optional

from pydantic import Field

from src.core.contracts import (
    amount_validator,
    number_validator,
    price_validator,
    symbol_validator,
)
from src.core.wire import DataDefinition, EntityType, WireModel


# Символ: префикс типа ('t') + пара; без разделителя base занимает 3 символа
SYMBOL_PREFIX_LEN: Final[int] = 1
BASE_CURRENCY_LEN: Final[int] = 3
PAIR_SEPARATOR: Final[str] = ":"

FIELDS = DataDefinition({
    "symbol": 0,
    "bid": 1,
    "bid_size": 2,
    "ask": 3,
    "ask_size": 4,
    "daily_change": 5,
    "daily_change_perc": 6,
    "last_price": 7,
    "volume": 8,
    "high": 9,
    "low": 10,
    "base": None,
    "quote": None,
})


# =============================================================================
# TRADING TICKER MODEL
# =============================================================================


class TradingTicker(WireModel):
    """
    Тикер торговой пары.

    base/quote заполняются при создании через TRADING_TICKER.construct.
    """

    symbol: Optional[str] = Field(None, description="Символ (например, 'tBTCUSD')")
    bid: Optional[float] = Field(None, description="Лучшая цена покупки")
    bid_size: Optional[float] = Field(None, description="Суммарный объём bid")
    ask: Optional[float] = Field(None, description="Лучшая цена продажи")
    ask_size: Optional[float] = Field(None, description="Суммарный объём ask")
    daily_change: Optional[float] = Field(None, description="Изменение цены за 24ч")
    daily_change_perc: Optional[float] = Field(None, description="Изменение за 24ч (доля)")
    last_price: Optional[float] = Field(None, description="Последняя цена")
    volume: Optional[float] = Field(None, description="Объём за 24ч")
    high: Optional[float] = Field(None, description="Максимум за 24ч")
    low: Optional[float] = Field(None, description="Минимум за 24ч")
    base: Optional[str] = Field(None, description="Базовая валюта (из символа)")
    quote: Optional[str] = Field(None, description="Котируемая валюта (из символа)")

    def base_currency(self) -> str:
        """Базовая валюта или '' если символ не задан."""
        return split_symbol(self.symbol)[0]

    def quote_currency(self) -> str:
        """Котируемая валюта или '' если символ не задан."""
        return split_symbol(self.symbol)[1]

    def spread(self) -> Optional[float]:
        """ask - bid, если обе цены заданы."""
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid


def split_symbol(symbol: Any) -> tuple[str, str]:
    """
    Разбор символа на (base, quote).

    Базовое правило: фиксированные срезы после префикса, base = [1:4],
    quote = [4:]. Длинные пары с разделителем ':' (tTESTBTC:TESTUSD)
    дополнительно разбиваются по разделителю.

    Examples:
        >>> split_symbol("tBTCUSD")
        ('BTC', 'USD')
        >>> split_symbol("tTESTBTC:TESTUSD")
        ('TESTBTC', 'TESTUSD')
        >>> split_symbol(None)
        ('', '')
    """
    if not isinstance(symbol, str):
        return "", ""

    pair = symbol[SYMBOL_PREFIX_LEN:]
    if PAIR_SEPARATOR in pair:
        base, _, quote = pair.partition(PAIR_SEPARATOR)
        return base, quote

    return pair[:BASE_CURRENCY_LEN], pair[BASE_CURRENCY_LEN:]


def _derive(record: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(record["symbol"], str) or not record["symbol"]:
        return {"base": None, "quote": None}

    base, quote = split_symbol(record["symbol"])
    return {"base": base or None, "quote": quote or None}


TRADING_TICKER: EntityType[TradingTicker] = EntityType(
    name="trading_ticker",
    model=TradingTicker,
    definition=FIELDS,
    validators={
        "symbol": symbol_validator,
        "bid": price_validator,
        "bid_size": amount_validator,
        "ask": price_validator,
        "ask_size": amount_validator,
        "daily_change": number_validator,
        "daily_change_perc": number_validator,
        "last_price": price_validator,
        "volume": number_validator,
        "high": price_validator,
        "low": price_validator,
    },
    derive=_derive,
)
