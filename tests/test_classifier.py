import pytest

from classifier import (
    classify,
    filter_records_by_trade_type,
    is_equity_record,
    is_fx_record,
    normalize_amendment_flag,
    normalize_confirmation_method,
    normalize_equity_status,
    normalize_fx_confirmation_status,
    normalize_fx_trade_status,
    normalize_product_type,
    normalize_side,
    split_trades,
)
from trade_models import (
    AMENDMENT_FLAGS,
    CONFIRMATION_METHODS,
    EQUITY_CONFIRMATION_STATUSES,
    FX_CONFIRMATION_STATUSES,
    FX_PRODUCT_TYPES,
    FX_TRADE_STATUSES,
    SIDES,
    EquityTrade,
    FXTrade,
    trade_key,
)


class TestClassify:
    def test_equity_record_with_venue_and_no_pair(self):
        raw = {
            "TradeID": "EQ100",
            "ExecutionVenue": "NYSE",
            "TradeStatus": "Confirmed",
            "TradeDate": "2024-01-15",
            "Counterparty": "Acme",
        }
        trade = classify(raw)
        assert isinstance(trade, EquityTrade)
        assert trade.trade_id == "EQ100"
        assert trade.confirmation_status == "Confirmed"
        assert trade.trading_venue == "NYSE"
        assert trade.counterparty == "Acme"

    def test_fx_record_with_pair(self):
        raw = {
            "TradeID": "FX100",
            "CurrencyPair": "EUR/USD",
            "TradeStatus": "cancelled",
            "ProductType": "Forward",
        }
        trade = classify(raw)
        assert isinstance(trade, FXTrade)
        assert trade.trade_status == "Cancelled"
        assert trade.product_type == "Forward"
        assert trade.confirmation_status == "Pending"

    def test_venue_with_pair_is_fx(self):
        raw = {"TradeID": "X1", "ExecutionVenue": "EBS", "CurrencyPair": "USD/JPY", "TradeStatus": "Booked", "TradeDate": "2024-01-01"}
        assert isinstance(classify(raw), FXTrade)

    def test_fx_product_type_without_pair(self):
        raw = {"TradeID": "X2", "ProductType": "Swap", "TradeStatus": "Booked", "TradeDate": "2024-01-01"}
        trade = classify(raw)
        assert isinstance(trade, FXTrade)
        assert trade.product_type == "Swap"
        assert trade.currency_pair == ""

    def test_unclassifiable_record_defaults_to_fx(self):
        raw = {"TradeID": "X3", "TradeStatus": "Confirmed", "TradeDate": "2024-01-01", "ProductType": "Equity"}
        trade = classify(raw)
        assert isinstance(trade, FXTrade)
        assert trade.product_type == "Spot"
        assert trade.confirmation_method == "Electronic"
        assert trade.maturity_date is None

    def test_blank_venue_does_not_count(self):
        raw = {"TradeID": "X4", "ExecutionVenue": "  ", "TradeStatus": "Pending", "TradeDate": "2024-01-01"}
        assert not is_equity_record(raw)
        assert isinstance(classify(raw), FXTrade)

    def test_classification_is_deterministic(self, sample_records):
        for raw in sample_records:
            assert classify(raw) == classify(raw)

    def test_equity_field_mapping(self):
        raw = {
            "TradeID": "EQ7",
            "ExecutionVenue": "LSE",
            "TradeStatus": "Rejected by counterparty",
            "TradeDate": "2024-02-01",
            "SettlementDate": "2024-02-05",
            "Counterparty": "Barclays",
            "NotionalAmount": "1000",
            "FXRate": 12.5,
            "SettlementCurrency": "GBP",
            "BuySell": "SELL",
            "AuditTrailRef": "ORD7",
            "Portfolio": "PF1",
            "TraderID": "T9",
            "BookingLocation": "UK",
            "comments": "check SSI",
        }
        trade = classify(raw)
        assert trade.confirmation_status == "Failed"
        assert trade.quantity == 1000.0
        assert trade.trade_value == 1000.0
        assert trade.price == 12.5
        assert trade.currency == "GBP"
        assert trade.trade_type == "Sell"
        assert (trade.order_id, trade.client_id, trade.trader_name) == ("ORD7", "PF1", "T9")
        assert trade.country_of_trade == "UK"
        assert trade.ops_team_notes == "check SSI"

    def test_equity_defaults(self):
        raw = {"TradeID": "EQ8", "ExecutionVenue": "NYSE", "TradeStatus": "new", "TradeDate": "2024-02-01", "NotionalAmount": "n/a"}
        trade = classify(raw)
        assert trade.currency == "USD"
        assert trade.quantity == 0.0
        assert trade.price == 0.0
        assert trade.trade_type == "Buy"
        assert trade.confirmation_status == "Pending"

    def test_fx_statuses_are_independent(self):
        raw = {"TradeID": "FX9", "CurrencyPair": "EUR/GBP", "TradeStatus": "Booked - exception raised", "TradeDate": "2024-02-01"}
        trade = classify(raw)
        assert trade.trade_status == "Booked"
        assert trade.confirmation_status == "Disputed"

    def test_fx_field_mapping(self):
        raw = {
            "TradeID": "FX10",
            "CurrencyPair": "GBP/USD",
            "TradeStatus": "Settled",
            "TradeDate": "2024-01-16",
            "SettlementMethod": "swift mt300",
            "AmendmentFlag": "Yes",
            "MaturityDate": "2024-02-16",
            "TradeTime": "09:15:00",
            "NotionalAmount": 2500000,
        }
        trade = classify(raw)
        assert trade.confirmation_method == "SWIFT"
        assert trade.amendment_flag == "Yes"
        assert trade.maturity_date == "2024-02-16"
        assert trade.confirmation_timestamp == "09:15:00"
        assert trade.notional == 2500000.0


@pytest.mark.parametrize("status, expected", [
    ("PARTIALLY SETTLED", "Settled"),
    ("Completed", "Settled"),
    ("booked", "Confirmed"),
    ("Confirmed", "Confirmed"),
    ("Rejected by counterparty", "Failed"),
    ("FAILED", "Failed"),
    ("new", "Pending"),
    ("", "Pending"),
    (None, "Pending"),
])
def test_normalize_equity_status(status, expected):
    assert normalize_equity_status(status) == expected


@pytest.mark.parametrize("status, expected", [
    ("Settled", "Settled"),
    ("completed", "Settled"),
    ("Confirmed", "Confirmed"),
    ("cancelled", "Cancelled"),
    ("Failed", "Cancelled"),
    ("Pending", "Booked"),
    (None, "Booked"),
])
def test_normalize_fx_trade_status(status, expected):
    assert normalize_fx_trade_status(status) == expected


@pytest.mark.parametrize("status, expected", [
    ("Confirmed", "Confirmed"),
    ("settled", "Confirmed"),
    ("Disputed", "Disputed"),
    ("Exception", "Disputed"),
    ("Booked", "Pending"),
    (None, "Pending"),
])
def test_normalize_fx_confirmation_status(status, expected):
    assert normalize_fx_confirmation_status(status) == expected


@pytest.mark.parametrize("value, expected", [
    ("FX Forward", "Forward"),
    ("Swap", "Swap"),
    ("Spot", "Spot"),
    ("", "Spot"),
    (None, "Spot"),
])
def test_normalize_product_type(value, expected):
    assert normalize_product_type(value) == expected


@pytest.mark.parametrize("value, expected", [
    ("SWIFT MT300", "SWIFT"),
    ("Email confirmation", "Email"),
    ("manual", "Manual"),
    ("Platform", "Electronic"),
    (None, "Electronic"),
])
def test_normalize_confirmation_method(value, expected):
    assert normalize_confirmation_method(value) == expected


def test_normalizers_are_total():
    inputs = ["", "x", "SETTLED", "??", None, 42, 3.5]
    for value in inputs:
        assert normalize_equity_status(value) in EQUITY_CONFIRMATION_STATUSES
        assert normalize_fx_trade_status(value) in FX_TRADE_STATUSES
        assert normalize_fx_confirmation_status(value) in FX_CONFIRMATION_STATUSES
        assert normalize_product_type(value) in FX_PRODUCT_TYPES
        assert normalize_confirmation_method(value) in CONFIRMATION_METHODS
        assert normalize_side(value) in SIDES
        assert normalize_amendment_flag(value) in AMENDMENT_FLAGS


def test_split_trades_keeps_order(sample_records):
    equity, fx = split_trades(sample_records)
    assert [t.trade_id for t in equity] == ["EQ001", "EQ002", "EQ003", "EQ004", "EQ005"]
    assert [t.trade_id for t in fx] == ["FX001", "FX002", "FX003", "FX004", "FX005", "FX006"]


def test_filter_records_by_trade_type():
    records = [
        {"TradeID": "A", "ExecutionVenue": "NYSE"},
        {"TradeID": "B", "CurrencyPair": "EUR/USD"},
        {"TradeID": "C", "ProductType": "Spot"},
        {"TradeID": "D"},
    ]
    assert [r["TradeID"] for r in filter_records_by_trade_type(records, "equity")] == ["A"]
    assert [r["TradeID"] for r in filter_records_by_trade_type(records, "FX")] == ["B", "C"]
    assert len(filter_records_by_trade_type(records, "all")) == 4
    assert is_fx_record(records[2])
    assert not is_fx_record(records[3])


def test_trade_key_uses_document_id(sample_records):
    equity, fx = split_trades(sample_records)
    keys = [trade_key(t) for t in [*equity, *fx]]
    assert keys[0] == "sample-001"
    assert len(set(keys)) == len(keys)


def test_trade_key_without_document_id_separates_kinds():
    eq = classify({"TradeID": "T1", "ExecutionVenue": "NYSE"})
    fx = classify({"TradeID": "T1", "CurrencyPair": "EUR/USD"})
    assert trade_key(eq) == "equity:T1"
    assert trade_key(fx) == "fx:T1"
