"""Summary statistics and workflow analytics over classified trades.

Inputs are read-only. No I/O side-effects.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from trade_models import (
    EquityTrade,
    RawTradeRecord,
    Trade,
    trade_kind,
    trade_side_of,
    trade_status_of,
)

FRAME_COLUMNS = [
    "trade_id",
    "kind",
    "status",
    "trade_date",
    "settlement_date",
    "counterparty",
    "side",
    "product_type",
]

COMPLETED_STATUSES = {"settled", "confirmed"}

_STAGE_BY_STATUS = {
    "pending": "pending_client_confirmation",
    "confirmed": "matching",
    "booked": "matching",
    "settled": "ccnr",
    "failed": "drafting",
    "disputed": "drafting",
    "cancelled": "drafting",
}

_WORKFLOW_STAGE_BY_STATUS = {
    "pending": "disputed",
    "confirmed": "matching",
    "booked": "matching",
    "settled": "ccnr",
    "failed": "drafting",
    "disputed": "drafting",
    "cancelled": "drafting",
}

_OWNER_BY_STATUS = {
    "pending": "Trading",
    "confirmed": "Settlements",
    "settled": "Completed",
    "failed": "Legal",
    "disputed": "Legal",
    "cancelled": "Legal",
    "booked": "Sales",
}

# department -> raw TradeStatus values (lower-cased) that escalate to it
ESCALATION_STATUSES = {
    "Legal": ("failed", "disputed"),
    "Trading": ("pending",),
    "Sales": ("confirmed",),
    "Middle Office": ("booked",),
}
ESCALATION_FILTER_KEYS = {
    "legal": "Legal",
    "trading": "Trading",
    "sales": "Sales",
    "middleOffice": "Middle Office",
}

SETTLEMENT_GAP_BUCKETS = ("0-1 days", "2 days", "3-5 days")


def trades_frame(trades: Sequence[Trade]) -> pd.DataFrame:
    """One row per trade with the columns the analytics group on."""
    rows = []
    for t in trades:
        rows.append({
            "trade_id": t.trade_id,
            "kind": trade_kind(t),
            "status": trade_status_of(t),
            "trade_date": t.trade_date,
            "settlement_date": t.settlement_date,
            "counterparty": t.counterparty,
            "side": trade_side_of(t),
            "product_type": "Equity" if isinstance(t, EquityTrade) else t.product_type,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _status_lower(df: pd.DataFrame) -> pd.Series:
    return df["status"].astype(str).str.strip().str.lower()


def _bucket_counts(trades: Sequence[Trade], mapping: Dict[str, str], default: str, keys: Iterable[str]) -> Dict[str, int]:
    counts = {k: 0 for k in keys}
    df = trades_frame(trades)
    if df.empty:
        return counts
    buckets = _status_lower(df).map(mapping).fillna(default)
    for bucket, n in buckets.value_counts().items():
        counts[bucket] = counts.get(bucket, 0) + int(n)
    return counts


def summary_stats(trades: Sequence[Trade]) -> Dict[str, float]:
    df = trades_frame(trades)
    total = len(df)
    completed = int(_status_lower(df).isin(COMPLETED_STATUSES).sum()) if total else 0
    return {
        "total": total,
        "in_progress": total - completed,
        "completed": completed,
        "completion_rate": (completed / total * 100.0) if total else 0.0,
    }


def filter_trades(
    trades: Sequence[Trade],
    search: str = "",
    status: str = "all",
    trade_type: str = "all",
    counterparty: str = "all",
    trade_date: str = "",
) -> List[Trade]:
    """Apply the trade list filters; every criterion must match."""
    search_lc = (search or "").strip().lower()
    status_lc = (status or "all").strip().lower()
    type_lc = (trade_type or "all").strip().lower()
    cpty_lc = (counterparty or "all").strip().lower()
    date_s = (trade_date or "").strip()

    out: List[Trade] = []
    for t in trades:
        if search_lc and search_lc not in t.trade_id.lower() and search_lc not in t.counterparty.lower():
            continue
        if status_lc != "all" and trade_status_of(t).lower() != status_lc:
            continue
        if type_lc != "all" and trade_kind(t) != type_lc:
            continue
        if cpty_lc != "all" and cpty_lc not in t.counterparty.lower():
            continue
        if date_s and t.trade_date != date_s:
            continue
        out.append(t)
    return out


def trade_stage_stats(trades: Sequence[Trade]) -> Dict[str, int]:
    return _bucket_counts(
        trades,
        _STAGE_BY_STATUS,
        "pending_client_confirmation",
        ("matching", "drafting", "pending_client_confirmation", "ccnr"),
    )


def workflow_stage_stats(trades: Sequence[Trade]) -> Dict[str, int]:
    return _bucket_counts(
        trades,
        _WORKFLOW_STAGE_BY_STATUS,
        "disputed",
        ("matching", "drafting", "disputed", "ccnr"),
    )


def next_action_owner(status: str) -> str:
    return _OWNER_BY_STATUS.get(str(status or "").strip().lower(), "Trading")


def next_action_owner_stats(trades: Sequence[Trade]) -> Dict[str, int]:
    counts = _bucket_counts(
        trades,
        _OWNER_BY_STATUS,
        "Trading",
        ("Settlements", "Trading", "Sales", "Legal", "Completed"),
    )
    return {k.lower(): v for k, v in counts.items()}


def product_type_stats(trades: Sequence[Trade]) -> Dict[str, Dict[str, int]]:
    stats = {
        "equity": {"buy": 0, "sell": 0},
        "fx": {"buy": 0, "sell": 0, "spot": 0, "forward": 0, "swap": 0},
    }
    df = trades_frame(trades)
    if df.empty:
        return stats
    side_lc = df["side"].astype(str).str.lower()
    for kind in ("equity", "fx"):
        mask = df["kind"] == kind
        buys = int((side_lc[mask] == "buy").sum())
        stats[kind]["buy"] = buys
        stats[kind]["sell"] = int(mask.sum()) - buys
    products = df.loc[df["kind"] == "fx", "product_type"].astype(str).str.lower().value_counts()
    for product in ("spot", "forward", "swap"):
        stats["fx"][product] = int(products.get(product, 0))
    return stats


def settlement_gap_stats(trades: Sequence[Trade]) -> Dict[str, int]:
    """Bucket trades by days between trade and settlement date.

    Gaps of one day or less (including negative) fall in the first bucket;
    gaps over five days and unparseable dates are not counted.
    """
    stats = {k: 0 for k in SETTLEMENT_GAP_BUCKETS}
    df = trades_frame(trades)
    if df.empty:
        return stats
    td = pd.to_datetime(df["trade_date"], errors="coerce", utc=True, format="mixed")
    sd = pd.to_datetime(df["settlement_date"], errors="coerce", utc=True, format="mixed")
    gap_days = np.ceil((sd - td).dt.total_seconds() / 86400.0).dropna()
    stats["0-1 days"] = int((gap_days <= 1).sum())
    stats["2 days"] = int((gap_days == 2).sum())
    stats["3-5 days"] = int(((gap_days >= 3) & (gap_days <= 5)).sum())
    return stats


# ===================== Escalations (raw records) =====================

def _raw_status(record: RawTradeRecord) -> str:
    return str(record.get("TradeStatus") or "").strip().lower()


def records_for_department(records: Iterable[RawTradeRecord], department: str) -> List[RawTradeRecord]:
    statuses = ESCALATION_STATUSES.get(department)
    if statuses is None:
        return []
    return [r for r in records if _raw_status(r) in statuses]


def escalation_requirements(records: Sequence[RawTradeRecord]) -> Dict[str, int]:
    return {
        "legal": len(records_for_department(records, "Legal")),
        "trading": len(records_for_department(records, "Trading")),
        "sales": len(records_for_department(records, "Sales")),
        "middle_office": len(records_for_department(records, "Middle Office")),
    }


def escalation_list(records: Sequence[RawTradeRecord], escalation_filter: str = "all") -> List[RawTradeRecord]:
    """Records needing escalation for one department key, sorted by TradeID."""
    department = ESCALATION_FILTER_KEYS.get(escalation_filter)
    selected = list(records) if department is None else records_for_department(records, department)
    return sorted(selected, key=lambda r: str(r.get("TradeID") or ""))
