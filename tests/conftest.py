import os
import sys

import pytest

# Repo root holds the modules as top-level files
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sample_trades import get_sample_records
from trade_models import EquityTrade, FXTrade


class ScriptedRandom:
    """Random source with a fixed field choice and scripted perturbations."""

    def __init__(self, field, offsets=(0,), factors=(1.0,), picks=(0,)):
        self.field = field
        self._offsets = list(offsets)
        self._factors = list(factors)
        self._picks = list(picks)
        self.calls = 0

    def choice(self, seq):
        if self.field in seq:
            return self.field
        value = seq[self._picks[0] % len(seq)]
        if len(self._picks) > 1:
            self._picks.pop(0)
        return value

    def randint(self, a, b):
        value = self._offsets[0]
        if len(self._offsets) > 1:
            self._offsets.pop(0)
        self.calls += 1
        return value

    def uniform(self, a, b):
        value = self._factors[0]
        if len(self._factors) > 1:
            self._factors.pop(0)
        return value


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def sample_records():
    return get_sample_records()


@pytest.fixture
def equity_trade():
    return EquityTrade(
        trade_id='TID00001',
        order_id='OID00001',
        client_id='CID5962',
        trade_type='Buy',
        quantity=942,
        price=721.36,
        trade_value=679521.12,
        currency='USD',
        trade_date='2024-01-24',
        settlement_date='2024-01-26',
        counterparty='Citibank',
        trading_venue='IEX',
        trader_name='Trader A',
        confirmation_status='Failed',
        country_of_trade='US',
        ops_team_notes='Clean',
    )


@pytest.fixture
def fx_trade():
    return FXTrade(
        trade_id='FX0001',
        trade_date='2025-05-11',
        value_date='2025-05-16',
        trade_time='14:07:18',
        trader_id='TDR446',
        counterparty='HSBC',
        currency_pair='EUR/USD',
        buy_sell='Sell',
        dealt_currency='USD',
        base_currency='EUR',
        term_currency='USD',
        trade_status='Cancelled',
        product_type='Forward',
        maturity_date='2025-05-16',
        confirmation_timestamp='2025-05-11 13:53',
        settlement_date='2025-05-16',
        amendment_flag='No',
        confirmation_method='SWIFT',
        confirmation_status='Pending',
    )
