import datetime as dt

import pandas as _pd
import numpy as _np

from trade_models import EquityTrade, has_break, trade_key, trade_kind, trade_side_of, trade_status_of

DISPLAY_DATE_FORMAT = "%d %b %Y"


def _fmt_money(v):
    try:
        return "" if v is None or (_pd.isna(v)) else f"{float(v):,.2f}"
    except Exception:
        return ""

def _fmt_qty(v):
    try:
        return "" if v is None or (_pd.isna(v)) else f"{int(float(v)):,}"
    except Exception:
        return ""

def _fmt_notional(v):
    """Whole-unit amount with thousands separators, e.g. 1,250,000."""
    try:
        return "" if v is None or (_pd.isna(v)) else f"{float(v):,.0f}"
    except Exception:
        return ""

def _fmt_pct(x):
    """Return percent with 1 decimal; '—%' for non-finite."""
    try:
        if x is None:
            return "—%"
        v = float(x)
        if not _np.isfinite(v):
            return "—%"
        return f"{v:.1f}%"
    except Exception:
        return "—%"

def _to_date(value) -> dt.date | None:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if value is None or str(value).strip() == "":
        return None
    try:
        ts = _pd.to_datetime(value, errors="coerce")
    except Exception:
        return None
    if ts is None or _pd.isna(ts):
        return None
    return ts.date()

def fmt_display_date(value, default: str = "N/A") -> str:
    """Render a date-like value as DD Mon YYYY (e.g. 11 May 2025)."""
    d = _to_date(value)
    if d is None:
        return default
    return d.strftime(DISPLAY_DATE_FORMAT)


def build_trades_display_frame(trades) -> _pd.DataFrame:
    """
    Create a display-ready DataFrame for a list of typed trades.
    Equity and FX rows share one column layout; missing values stay blank.
    """
    if not trades:
        return _pd.DataFrame()

    rows = []
    for t in trades:
        is_eq = isinstance(t, EquityTrade)
        rows.append({
            "Trade ID": t.trade_id,
            "Type": "Equity" if is_eq else "FX",
            "Trade Date": fmt_display_date(t.trade_date, default=""),
            "Settlement Date": fmt_display_date(t.settlement_date, default=""),
            "Counterparty": t.counterparty,
            "Side": trade_side_of(t),
            "Instrument": t.trading_venue if is_eq else t.currency_pair,
            "Product": "Equity" if is_eq else t.product_type,
            "Quantity": _fmt_qty(t.quantity) if is_eq else "",
            "Price": _fmt_money(t.price) if is_eq else "",
            "Notional": _fmt_notional(t.trade_value if is_eq else t.notional),
            "Status": trade_status_of(t),
            "Break": "🚨" if has_break(t) else "✅",
        })

    desired_order = [
        "Trade ID",
        "Type",
        "Trade Date",
        "Settlement Date",
        "Counterparty",
        "Side",
        "Instrument",
        "Product",
        "Quantity",
        "Price",
        "Notional",
        "Status",
        "Break",
    ]
    df_disp = _pd.DataFrame(rows)
    # FX-only views have nothing to show under the equity columns
    if all(trade_kind(t) == "fx" for t in trades):
        desired_order = [c for c in desired_order if c not in ("Quantity", "Price")]
    final_cols = [c for c in desired_order if c in df_disp.columns]
    return df_disp[final_cols]


def trade_option_labels(trades) -> dict:
    """Selectbox labels keyed by trade_key; a repeated trade id gets its document id appended."""
    counts: dict = {}
    for t in trades:
        counts[t.trade_id] = counts.get(t.trade_id, 0) + 1
    labels = {}
    for t in trades:
        key = trade_key(t)
        label = t.trade_id or "(no id)"
        if counts[t.trade_id] > 1:
            label = f"{label} [{key}]"
        labels[key] = label
    return labels
