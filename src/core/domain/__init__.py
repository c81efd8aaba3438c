"""
Domain entities exchanged in the positional wire format.

Each entity module declares its field table, record model, validators and
derived fields, and exposes an EntityType (LEDGER_ENTRY, TRADING_TICKER, ...).
"""

from src.core.domain.funding_loan import FUNDING_LOAN, FundingLoan
from src.core.domain.ledger_entry import LEDGER_ENTRY, LedgerEntry, wallet_from_description
from src.core.domain.public_trade import PUBLIC_TRADE, PublicTrade
from src.core.domain.trading_ticker import TRADING_TICKER, TradingTicker, split_symbol
from src.core.domain.wallet import WALLET, Wallet

__all__ = [
    # Ledger entry
    "LEDGER_ENTRY",
    "LedgerEntry",
    "wallet_from_description",
    # Trading ticker
    "TRADING_TICKER",
    "TradingTicker",
    "split_symbol",
    # Funding loan
    "FUNDING_LOAN",
    "FundingLoan",
    # Wallet
    "WALLET",
    "Wallet",
    # Public trade
    "PUBLIC_TRADE",
    "PublicTrade",
]
