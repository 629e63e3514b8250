# Purpose: Static sample of unified_data documents (equity + FX) for demo mode and seeding.
# Shape matches what the Firestore collection holds: PascalCase keys, optional fields omitted.

import copy
import json
from pathlib import Path
from typing import List, Dict

SAMPLE_UNIFIED_TRADES: List[Dict] = [
    # Equities: ExecutionVenue set, no CurrencyPair
    {"TradeID": "EQ001", "TradeStatus": "Confirmed", "TradeDate": "2024-01-15", "SettlementDate": "2024-01-17", "Counterparty": "Goldman Sachs",  "ExecutionVenue": "NYSE",   "BuySell": "Buy",  "NotionalAmount": 50000,  "FXRate": 50.0,  "DealtCurrency": "USD", "TraderID": "John Smith", "Portfolio": "CLIENT001", "AuditTrailRef": "ORD001", "BookingLocation": "US", "comments": "Standard trade"},
    {"TradeID": "EQ002", "TradeStatus": "Pending",   "TradeDate": "2024-01-16", "SettlementDate": "2024-01-18", "Counterparty": "Morgan Stanley", "ExecutionVenue": "NASDAQ", "BuySell": "Sell", "NotionalAmount": 75000,  "FXRate": 50.0,  "DealtCurrency": "USD", "TraderID": "Jane Doe",   "Portfolio": "CLIENT002", "AuditTrailRef": "ORD002", "BookingLocation": "US", "comments": "Large order"},
    {"TradeID": "EQ003", "TradeStatus": "Failed",    "TradeDate": "2024-01-17", "SettlementDate": "2024-01-19", "Counterparty": "TradeBank",      "ExecutionVenue": "IEX",    "BuySell": "Buy",  "NotionalAmount": 25000,  "FXRate": 50.0,  "SettlementCurrency": "USD", "TraderID": "Trader A", "Portfolio": "CLIENT003", "AuditTrailRef": "ORD003", "BookingLocation": "US", "comments": "Counterparty SSI mismatch"},
    {"TradeID": "EQ004", "TradeStatus": "Settled",   "TradeDate": "2024-01-18", "SettlementDate": "2024-01-22", "Counterparty": "Citigroup",      "ExecutionVenue": "LSE",    "BuySell": "Sell", "NotionalAmount": 120000, "FXRate": 24.0,  "DealtCurrency": "GBP", "TraderID": "Trader B",   "Portfolio": "CLIENT004", "AuditTrailRef": "ORD004", "BookingLocation": "UK", "comments": ""},
    {"TradeID": "EQ005", "TradeStatus": "Rejected by counterparty", "TradeDate": "2024-01-19", "SettlementDate": "2024-01-23", "Counterparty": "Barclays", "ExecutionVenue": "XETRA", "BuySell": "Buy", "NotionalAmount": 64000, "FXRate": 128.0, "DealtCurrency": "EUR", "TraderID": "Trader C", "Portfolio": "CLIENT005", "AuditTrailRef": "ORD005", "BookingLocation": "DE"},

    # FX: CurrencyPair and/or FX product types
    {"TradeID": "FX001", "TradeStatus": "Settled",   "TradeDate": "2024-01-15", "ValueDate": "2024-01-17", "SettlementDate": "2024-01-17", "Counterparty": "JP Morgan", "CurrencyPair": "EUR/USD", "ProductType": "Spot",    "BuySell": "Buy",  "NotionalAmount": 1000000, "DealtCurrency": "EUR", "BaseCurrency": "EUR", "TermCurrency": "USD", "TraderID": "TRADER001", "TradeTime": "14:30:00", "SettlementMethod": "Electronic", "AmendmentFlag": "No"},
    {"TradeID": "FX002", "TradeStatus": "Booked",    "TradeDate": "2024-01-16", "ValueDate": "2024-01-18", "SettlementDate": "2024-02-16", "Counterparty": "Citibank",  "CurrencyPair": "GBP/USD", "ProductType": "Forward", "BuySell": "Sell", "NotionalAmount": 2500000, "DealtCurrency": "GBP", "BaseCurrency": "GBP", "TermCurrency": "USD", "TraderID": "TRADER002", "TradeTime": "09:15:00", "SettlementMethod": "SWIFT", "AmendmentFlag": "No", "MaturityDate": "2024-02-16"},
    {"TradeID": "FX003", "TradeStatus": "Cancelled", "TradeDate": "2025-05-11", "ValueDate": "2025-05-16", "SettlementDate": "2025-05-16", "Counterparty": "HSBC",      "CurrencyPair": "EUR/USD", "ProductType": "Forward", "BuySell": "Sell", "DealtCurrency": "USD", "BaseCurrency": "EUR", "TermCurrency": "USD", "TraderID": "TDR446", "TradeTime": "14:07:18", "SettlementMethod": "SWIFT", "AmendmentFlag": "No", "MaturityDate": "2025-05-16"},
    {"TradeID": "FX004", "TradeStatus": "Disputed",  "TradeDate": "2024-01-18", "ValueDate": "2024-01-22", "SettlementDate": "2024-01-22", "Counterparty": "Deutsche Bank", "CurrencyPair": "USD/JPY", "ProductType": "FX Swap", "BuySell": "Buy", "NotionalAmount": 5000000, "DealtCurrency": "USD", "BaseCurrency": "USD", "TermCurrency": "JPY", "TraderID": "TRADER003", "TradeTime": "11:02:45", "SettlementMethod": "Manual", "AmendmentFlag": "Yes", "MaturityDate": "2024-07-22", "Exception Reason": "Rate mismatch"},
    {"TradeID": "FX005", "TradeStatus": "Pending",   "TradeDate": "2024-01-19", "ValueDate": "2024-01-23", "SettlementDate": "2024-01-23", "Counterparty": "UBS",       "ProductType": "Spot", "BuySell": "Buy", "NotionalAmount": 750000, "DealtCurrency": "CHF", "BaseCurrency": "USD", "TermCurrency": "CHF", "TraderID": "TRADER004", "TradeTime": "16:45:10", "SettlementMethod": "Email confirmation"},
    {"TradeID": "FX006", "TradeStatus": "Failed",    "TradeDate": "2024-01-22", "ValueDate": "2024-01-24", "SettlementDate": "2024-01-24", "Counterparty": "Bank of America", "CurrencyPair": "AUD/USD", "ProductType": "Spot", "BuySell": "Sell", "NotionalAmount": 3200000, "DealtCurrency": "AUD", "BaseCurrency": "AUD", "TermCurrency": "USD", "TraderID": "TRADER005", "TradeTime": "08:05:00", "SettlementMethod": "SWIFT MT300", "AmendmentFlag": "No"},
]


def get_sample_records() -> List[Dict]:
    """Fresh copies of the sample documents, each with a synthetic document id."""
    return [{"id": f"sample-{i:03d}", **copy.deepcopy(r)} for i, r in enumerate(SAMPLE_UNIFIED_TRADES, start=1)]

def save_json(path: str = "data/sample_unified_trades.json") -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(SAMPLE_UNIFIED_TRADES, indent=2), encoding="utf-8")
    return str(p)

if __name__ == "__main__":
    print(save_json())
