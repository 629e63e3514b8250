"""
Classify raw ``unified_data`` documents into equity or FX trades.

A document from the store is a loose bag of optional fields. Classification
is decided from three of them, in order:

  1. ExecutionVenue present and CurrencyPair absent -> equity
  2. CurrencyPair present, or ProductType one of FX/Spot/Forward/Swap -> FX
  3. anything else -> FX

Rule 3 files an equity-shaped record that lacks a venue as FX.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from trade_models import EquityTrade, FXTrade, RawTradeRecord, Trade

FX_PRODUCT_MARKERS = ("FX", "Spot", "Forward", "Swap")


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _num(value) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(out) or math.isinf(out) else out


def _field(raw: RawTradeRecord, key: str) -> str:
    return _text(raw.get(key))


# ===================== Status normalizers =====================

def normalize_equity_status(status) -> str:
    s = _text(status).lower()
    if "settled" in s or "completed" in s:
        return "Settled"
    if "confirmed" in s or "booked" in s:
        return "Confirmed"
    if "failed" in s or "rejected" in s:
        return "Failed"
    return "Pending"


def normalize_fx_trade_status(status) -> str:
    s = _text(status).lower()
    if "settled" in s or "completed" in s:
        return "Settled"
    if "confirmed" in s:
        return "Confirmed"
    if "cancelled" in s or "failed" in s:
        return "Cancelled"
    return "Booked"


def normalize_fx_confirmation_status(status) -> str:
    s = _text(status).lower()
    if "confirmed" in s or "settled" in s:
        return "Confirmed"
    if "disputed" in s or "exception" in s:
        return "Disputed"
    return "Pending"


def normalize_product_type(product_type) -> str:
    s = _text(product_type).lower()
    if "forward" in s:
        return "Forward"
    if "swap" in s:
        return "Swap"
    return "Spot"


def normalize_confirmation_method(method) -> str:
    s = _text(method).lower()
    if "swift" in s:
        return "SWIFT"
    if "email" in s:
        return "Email"
    if "manual" in s:
        return "Manual"
    return "Electronic"


def normalize_side(side) -> str:
    return "Sell" if "sell" in _text(side).lower() else "Buy"


def normalize_amendment_flag(flag) -> str:
    return "Yes" if _text(flag).lower() in ("yes", "y", "true", "1") else "No"


# ===================== Classification =====================

def is_equity_record(raw: RawTradeRecord) -> bool:
    return bool(_field(raw, "ExecutionVenue")) and not _field(raw, "CurrencyPair")


def is_fx_record(raw: RawTradeRecord) -> bool:
    return bool(_field(raw, "CurrencyPair")) or _field(raw, "ProductType") in FX_PRODUCT_MARKERS


def _to_equity(raw: RawTradeRecord) -> EquityTrade:
    notional = _num(raw.get("NotionalAmount"))
    return EquityTrade(
        trade_id=_field(raw, "TradeID"),
        order_id=_field(raw, "AuditTrailRef"),
        client_id=_field(raw, "Portfolio"),
        trade_type=normalize_side(raw.get("BuySell")),
        quantity=notional,
        price=_num(raw.get("FXRate")),
        trade_value=notional,
        currency=_field(raw, "DealtCurrency") or _field(raw, "SettlementCurrency") or "USD",
        trade_date=_field(raw, "TradeDate"),
        settlement_date=_field(raw, "SettlementDate"),
        counterparty=_field(raw, "Counterparty"),
        trading_venue=_field(raw, "ExecutionVenue"),
        trader_name=_field(raw, "TraderID"),
        confirmation_status=normalize_equity_status(raw.get("TradeStatus")),
        country_of_trade=_field(raw, "BookingLocation"),
        ops_team_notes=_field(raw, "comments"),
        record_id=_field(raw, "id"),
    )


def _to_fx(raw: RawTradeRecord) -> FXTrade:
    status = raw.get("TradeStatus")
    return FXTrade(
        trade_id=_field(raw, "TradeID"),
        trade_date=_field(raw, "TradeDate"),
        value_date=_field(raw, "ValueDate"),
        trade_time=_field(raw, "TradeTime"),
        trader_id=_field(raw, "TraderID"),
        counterparty=_field(raw, "Counterparty"),
        currency_pair=_field(raw, "CurrencyPair"),
        buy_sell=normalize_side(raw.get("BuySell")),
        dealt_currency=_field(raw, "DealtCurrency"),
        base_currency=_field(raw, "BaseCurrency"),
        term_currency=_field(raw, "TermCurrency"),
        trade_status=normalize_fx_trade_status(status),
        product_type=normalize_product_type(raw.get("ProductType")),
        maturity_date=_field(raw, "MaturityDate") or None,
        confirmation_timestamp=_field(raw, "TradeTime"),
        settlement_date=_field(raw, "SettlementDate"),
        amendment_flag=normalize_amendment_flag(raw.get("AmendmentFlag")),
        confirmation_method=normalize_confirmation_method(raw.get("SettlementMethod")),
        confirmation_status=normalize_fx_confirmation_status(status),
        notional=_num(raw.get("NotionalAmount")),
        record_id=_field(raw, "id"),
    )


def classify(raw: RawTradeRecord) -> Trade:
    """Map one raw document to exactly one typed trade."""
    if is_equity_record(raw):
        return _to_equity(raw)
    # Rules 2 and 3 both land on FX
    return _to_fx(raw)


def split_trades(records: Iterable[RawTradeRecord]) -> Tuple[List[EquityTrade], List[FXTrade]]:
    equity: List[EquityTrade] = []
    fx: List[FXTrade] = []
    for raw in records:
        trade = classify(raw)
        if isinstance(trade, EquityTrade):
            equity.append(trade)
        else:
            fx.append(trade)
    return equity, fx


def filter_records_by_trade_type(records: Iterable[RawTradeRecord], trade_type) -> List[RawTradeRecord]:
    """Keep records of one trade type ("equity" or "fx"); any other value keeps all."""
    kind = _text(trade_type).lower()
    if kind == "equity":
        return [r for r in records if is_equity_record(r)]
    if kind == "fx":
        return [r for r in records if is_fx_record(r)]
    return list(records)
