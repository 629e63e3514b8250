"""Load the trade dataset for the dashboards.

A load either returns every classified trade or an error string for display;
there is no partial result and no automatic retry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from classifier import split_trades
from firestore_client import TradeStore, TradeStoreError
from trade_models import EquityTrade, FXTrade, RawTradeRecord, Trade

logger = logging.getLogger(__name__)


@dataclass
class TradeDataset:
    equity_trades: List[EquityTrade] = field(default_factory=list)
    fx_trades: List[FXTrade] = field(default_factory=list)
    records: List[RawTradeRecord] = field(default_factory=list)
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None

    @property
    def all_trades(self) -> List[Trade]:
        return [*self.equity_trades, *self.fx_trades]

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def empty(cls, error: Optional[str] = None) -> "TradeDataset":
        return cls(error=error, loaded_at=datetime.now())

    @classmethod
    def from_records(cls, records: List[RawTradeRecord]) -> "TradeDataset":
        equity, fx = split_trades(records)
        return cls(equity_trades=equity, fx_trades=fx, records=list(records), loaded_at=datetime.now())


def load_trade_dataset(store: TradeStore, filters: Optional[Dict[str, Optional[str]]] = None) -> TradeDataset:
    """Fetch from the store and classify; fetch failures become ``error``."""
    try:
        if filters:
            records = store.fetch_filtered_trade_data(**filters)
        else:
            records = store.fetch_unified_trade_data()
    except TradeStoreError as e:
        logger.error("Error fetching trade data: %s", e)
        return TradeDataset.empty(error=str(e) or "Failed to fetch trade data")

    dataset = TradeDataset.from_records(records)
    logger.info(
        "Trade data loaded: total=%d equity=%d fx=%d",
        len(records), len(dataset.equity_trades), len(dataset.fx_trades),
    )
    return dataset
