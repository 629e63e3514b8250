from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

RawTradeRecord = Dict[str, Any]

# Closed value sets
SIDES = ("Buy", "Sell")
EQUITY_CONFIRMATION_STATUSES = ("Confirmed", "Pending", "Failed", "Settled")
FX_TRADE_STATUSES = ("Booked", "Confirmed", "Settled", "Cancelled")
FX_CONFIRMATION_STATUSES = ("Confirmed", "Pending", "Disputed")
FX_PRODUCT_TYPES = ("Spot", "Forward", "Swap")
CONFIRMATION_METHODS = ("SWIFT", "Email", "Manual", "Electronic")
AMENDMENT_FLAGS = ("Yes", "No")

BREAK_STATUSES = ("Failed", "Cancelled")


@dataclass(frozen=True)
class EquityTrade:
    trade_id: str
    order_id: str
    client_id: str
    trade_type: str
    quantity: float
    price: float
    trade_value: float
    currency: str
    trade_date: str
    settlement_date: str
    counterparty: str
    trading_venue: str
    trader_name: str
    confirmation_status: str
    country_of_trade: str
    ops_team_notes: str
    record_id: str = ""


@dataclass(frozen=True)
class FXTrade:
    trade_id: str
    trade_date: str
    value_date: str
    trade_time: str
    trader_id: str
    counterparty: str
    currency_pair: str
    buy_sell: str
    dealt_currency: str
    base_currency: str
    term_currency: str
    trade_status: str
    product_type: str
    maturity_date: Optional[str]
    confirmation_timestamp: str
    settlement_date: str
    amendment_flag: str
    confirmation_method: str
    confirmation_status: str
    notional: float = 0.0
    record_id: str = ""


Trade = Union[EquityTrade, FXTrade]


def trade_kind(trade: Trade) -> str:
    return "equity" if isinstance(trade, EquityTrade) else "fx"


def trade_status_of(trade: Trade) -> str:
    """Workflow status: confirmation status for equities, trade status for FX."""
    if isinstance(trade, EquityTrade):
        return trade.confirmation_status
    return trade.trade_status


def trade_side_of(trade: Trade) -> str:
    if isinstance(trade, EquityTrade):
        return trade.trade_type
    return trade.buy_sell


def has_break(trade: Trade) -> bool:
    return trade_status_of(trade) in BREAK_STATUSES


def trade_key(trade: Trade) -> str:
    """Identity of a trade in the store: its document id, else kind and trade id."""
    return trade.record_id or f"{trade_kind(trade)}:{trade.trade_id}"
