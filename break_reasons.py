"""
Synthesize a break reason for a trade.

A break reason names one field and shows two display values for it: ours
(authoritative) and the counterparty's. The counterparty side is fabricated
by perturbing the authoritative value, so the output is demo data and is
never persisted.

Randomness comes from an injectable source with the ``random.Random``
interface (``choice``, ``randint``, ``uniform``). Pass a seeded instance, or
any object with those methods, to get a fixed sequence.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import timedelta

from helpers import _fmt_notional, _to_date, fmt_display_date
from trade_models import EquityTrade, Trade

logger = logging.getLogger(__name__)

BREAK_FIELDS = (
    "Trade Date",
    "Notional",
    "Currency Pair",
    "Maturity Date",
    "Settlement Date",
    "Counterparty",
    "Product Type",
)

FX_CURRENCY_PAIRS = ("EUR/USD", "GBP/USD", "USD/JPY", "USD/CHF", "AUD/USD")
COUNTERPARTIES = ("Goldman Sachs", "Morgan Stanley", "JP Morgan", "Citigroup", "Bank of America")

NOT_APPLICABLE = "N/A"
MAX_REGENERATE_ATTEMPTS = 10

SYNTHETIC_NOTIONAL_RANGE = (1_000_000.0, 10_000_000.0)
NOTIONAL_VARIATION = (0.95, 1.05)


@dataclass(frozen=True)
class BreakReason:
    field: str
    authoritative_value: str
    counterparty_value: str

    @property
    def is_discrepancy(self) -> bool:
        return self.authoritative_value != self.counterparty_value


def _notional_base(trade: Trade) -> float:
    if isinstance(trade, EquityTrade):
        return trade.trade_value
    if trade.notional > 0:
        return trade.notional
    # seeded per trade id, stable across calls
    lo, hi = SYNTHETIC_NOTIONAL_RANGE
    return random.Random(f"notional:{trade.trade_id}").uniform(lo, hi)


def _jitter_date(value, rng) -> str:
    d = _to_date(value)
    if d is None:
        return NOT_APPLICABLE
    return fmt_display_date(d + timedelta(days=rng.randint(-1, 1)))


def authoritative_value(field: str, trade: Trade) -> str:
    """Our display value for a break field, taken from the trade itself."""
    is_eq = isinstance(trade, EquityTrade)
    if field == "Trade Date":
        return fmt_display_date(trade.trade_date)
    if field == "Notional":
        return _fmt_notional(_notional_base(trade))
    if field == "Currency Pair":
        return trade.currency if is_eq else trade.currency_pair
    if field == "Maturity Date":
        if is_eq or not trade.maturity_date:
            return NOT_APPLICABLE
        return fmt_display_date(trade.maturity_date)
    if field == "Settlement Date":
        return fmt_display_date(trade.settlement_date)
    if field == "Counterparty":
        return trade.counterparty
    if field == "Product Type":
        return "Equity" if is_eq else trade.product_type
    return NOT_APPLICABLE


def counterparty_value(field: str, trade: Trade, rng) -> str:
    """A perturbed display value for a break field, as the counterparty reports it."""
    is_eq = isinstance(trade, EquityTrade)
    if field == "Trade Date":
        return _jitter_date(trade.trade_date, rng)
    if field == "Notional":
        return _fmt_notional(_notional_base(trade) * rng.uniform(*NOTIONAL_VARIATION))
    if field == "Currency Pair":
        # equities report settlement currency as-is
        return trade.currency if is_eq else rng.choice(FX_CURRENCY_PAIRS)
    if field == "Maturity Date":
        if is_eq or not trade.maturity_date:
            return NOT_APPLICABLE
        return _jitter_date(trade.maturity_date, rng)
    if field == "Settlement Date":
        return _jitter_date(trade.settlement_date, rng)
    if field == "Counterparty":
        return rng.choice(COUNTERPARTIES)
    if field == "Product Type":
        return "Equity" if is_eq else trade.product_type
    return NOT_APPLICABLE


def synthesize(trade: Trade, rng=None) -> BreakReason:
    """Pick a break field at random and fabricate two diverging values for it.

    No status check is made; callers decide whether the trade is broken.
    The counterparty value is regenerated up to ``MAX_REGENERATE_ATTEMPTS``
    times while it equals ours, after which the collision is accepted.
    """
    rng = rng if rng is not None else random.Random()
    field = rng.choice(BREAK_FIELDS)
    ours = authoritative_value(field, trade)
    theirs = counterparty_value(field, trade, rng)

    attempts = 0
    while theirs == ours and attempts < MAX_REGENERATE_ATTEMPTS:
        theirs = counterparty_value(field, trade, rng)
        attempts += 1

    if theirs == ours:
        logger.debug("No discrepancy produced for %s on field %r", trade.trade_id, field)
    return BreakReason(field=field, authoritative_value=ours, counterparty_value=theirs)
