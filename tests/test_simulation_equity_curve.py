"""
Tests for the equity curve builder.

This module tests the builder's ability to:
  - Compute static PnL/balance with a fixed dollar risk.
  - Compute compound PnL/balance from the previous rounded balance.
  - Keep static values unrounded and compound values rounded to cents.
  - Stamp sequence numbers, 1-based trade numbers, and unique ids.

All tests use hand-written outcome lists (no randomness) with known expected
values.
"""

import dataclasses
import math

import numpy as np
import pytest

from equity_curves.simulation.equity_curve import TradeRecord, build_equity_curve
from equity_curves.simulation.outcomes import TradeOutcome
from equity_curves.utils.ids import SequentialIdGenerator

WIN = TradeOutcome.WIN
LOSS = TradeOutcome.LOSS


def test_build_equity_curve_all_wins_scenario():
    """
    Test the canonical three-win scenario.

    Scenario:
      - r_multiple = 2, starting_balance = 1000, risk_percentage = 10
      - Outcomes: Win, Win, Win

    Expected:
      - Static: risk 100 every trade, PnL 200, balances 1200, 1400, 1600
      - Compound: risk 100, 120, 144 -> PnL 200, 240, 288 -> balances 1200, 1440, 1728
    """
    records = build_equity_curve(
        [WIN, WIN, WIN],
        r_multiple=2,
        starting_balance=1000,
        risk_percentage=10,
    )

    assert [r.trade for r in records] == [1, 2, 3]
    assert [r.static_pnl for r in records] == [200, 200, 200]
    assert [r.static_balance for r in records] == [1200, 1400, 1600]
    assert [r.compound_pnl for r in records] == [200.00, 240.00, 288.00]
    assert [r.compound_balance for r in records] == [1200.00, 1440.00, 1728.00]


def test_build_equity_curve_all_losses_decrease_but_stay_positive():
    """
    Test that a losing streak shrinks both balances, compound never reaching zero.

    Scenario:
      - 30 losses, starting_balance = 1000, risk_percentage = 10

    Expected:
      - Static balance drops by exactly 100 each trade (1000 -> -2000).
      - Compound balance decreases strictly and stays above zero.
    """
    records = build_equity_curve(
        [LOSS] * 30,
        r_multiple=2,
        starting_balance=1000,
        risk_percentage=10,
    )

    static_balances = [r.static_balance for r in records]
    compound_balances = [r.compound_balance for r in records]

    assert all(r.static_pnl == -100 for r in records)
    assert static_balances[0] == 900
    assert static_balances[-1] == -2000
    assert all(b2 < b1 for b1, b2 in zip(static_balances, static_balances[1:]))

    assert compound_balances[:4] == [900.00, 810.00, 729.00, 656.10]
    assert all(b2 < b1 for b1, b2 in zip(compound_balances, compound_balances[1:]))
    assert all(b > 0 for b in compound_balances)


def test_build_equity_curve_mixed_outcomes():
    """
    Test a win/loss mix with hand-computed values.

    Scenario:
      - Win, Loss, Win with r_multiple = 1.5, starting_balance = 2000, risk = 5%

    Expected:
      - Static risk 100: PnL +150, -100, +150; balances 2150, 2050, 2200
      - Compound: trade 1 risk 100 -> +150 -> 2150
                  trade 2 risk 107.5 -> -107.5 -> 2042.5
                  trade 3 risk 102.125 -> +153.1875 -> 2195.6875 -> 2195.69
    """
    records = build_equity_curve(
        [WIN, LOSS, WIN],
        r_multiple=1.5,
        starting_balance=2000,
        risk_percentage=5,
    )

    assert [r.result for r in records] == [WIN, LOSS, WIN]
    assert [r.static_pnl for r in records] == [150, -100, 150]
    assert [r.static_balance for r in records] == [2150, 2050, 2200]
    assert [r.compound_pnl for r in records] == [150.00, -107.50, 153.19]
    assert [r.compound_balance for r in records] == [2150.00, 2042.50, 2195.69]


def test_build_equity_curve_static_values_are_not_rounded():
    """Test that static PnL keeps full precision while compound PnL is rounded."""
    # 1234.567 * 1% = 12.34567 risk; r = 1
    records = build_equity_curve(
        [WIN, WIN],
        r_multiple=1,
        starting_balance=1234.567,
        risk_percentage=1,
    )

    assert np.isclose(records[0].static_pnl, 12.34567, rtol=0, atol=1e-12)
    assert np.isclose(records[0].static_balance, 1246.91267, rtol=0, atol=1e-9)
    assert records[0].compound_pnl == 12.35
    assert records[0].compound_balance == 1246.91


def test_build_equity_curve_compound_uses_previous_rounded_balance():
    """Test that trade 2's risk is a percentage of trade 1's stored (rounded) balance."""
    records = build_equity_curve(
        [WIN, WIN],
        r_multiple=1,
        starting_balance=1234.567,
        risk_percentage=1,
    )

    # Trade 1 stored balance 1246.91 -> trade 2 risk 12.4691 -> PnL 12.47
    # Balance 1246.91 + 12.4691 = 1259.3791 -> 1259.38
    assert records[1].compound_pnl == 12.47
    assert records[1].compound_balance == 1259.38


def test_build_equity_curve_static_risk_is_path_independent():
    """Test that the static risk amount is the same for every trade regardless of history."""
    outcomes = [LOSS, LOSS, WIN, LOSS, WIN, WIN, LOSS]
    records = build_equity_curve(
        outcomes,
        r_multiple=3,
        starting_balance=5000,
        risk_percentage=2,
    )

    static_risks = {
        -r.static_pnl if r.result == LOSS else r.static_pnl / 3 for r in records
    }
    assert static_risks == {100.0}


def test_build_equity_curve_static_balance_is_running_sum():
    """Test static_balance == starting_balance + cumulative static_pnl for every trade."""
    outcomes = [WIN, LOSS, LOSS, WIN, LOSS, WIN, WIN, WIN, LOSS]
    records = build_equity_curve(
        outcomes,
        r_multiple=2.5,
        starting_balance=777.77,
        risk_percentage=3.3,
    )

    running = 0.0
    for record in records:
        running += record.static_pnl
        assert np.isclose(record.static_balance, 777.77 + running)


def test_build_equity_curve_is_deterministic_apart_from_ids():
    """Test that identical inputs give identical numeric fields on repeated calls."""
    outcomes = [WIN, LOSS, WIN, WIN, LOSS]
    kwargs = dict(r_multiple=2, starting_balance=1000, risk_percentage=7.5)

    first = build_equity_curve(outcomes, **kwargs)
    second = build_equity_curve(outcomes, **kwargs)

    def numeric(records):
        return [
            (r.static_pnl, r.static_balance, r.compound_pnl, r.compound_balance)
            for r in records
        ]

    assert numeric(first) == numeric(second)
    # Ids are fresh on every call
    assert {r.item_id for r in first}.isdisjoint({r.item_id for r in second})


def test_build_equity_curve_empty_outcomes():
    """Test that no outcomes produce no records."""
    assert build_equity_curve([], r_multiple=2, starting_balance=1000, risk_percentage=1) == []


def test_build_equity_curve_stamps_sequence_and_ids():
    """Test that the sequence number and injected ids are stamped on each record."""
    records = build_equity_curve(
        [WIN, LOSS, WIN],
        r_multiple=2,
        starting_balance=1000,
        risk_percentage=1,
        sequence=4,
        id_generator=SequentialIdGenerator(prefix="id-"),
    )

    assert [r.sequence for r in records] == [4, 4, 4]
    assert [r.item_id for r in records] == ["id-1", "id-2", "id-3"]


def test_build_equity_curve_accepts_generator_input():
    """Test that any iterable of outcomes works (not only lists)."""
    records = build_equity_curve(
        (o for o in [WIN, LOSS]),
        r_multiple=1,
        starting_balance=100,
        risk_percentage=50,
    )

    assert [r.static_balance for r in records] == [150, 100]


def test_build_equity_curve_zero_risk_keeps_balance_flat():
    """Test that 0% risk yields zero PnL and a flat curve."""
    records = build_equity_curve(
        [WIN, LOSS, WIN],
        r_multiple=2,
        starting_balance=1000,
        risk_percentage=0,
    )

    assert all(r.static_pnl == 0 and r.compound_pnl == 0 for r in records)
    assert all(r.static_balance == 1000 and r.compound_balance == 1000 for r in records)


def test_build_equity_curve_propagates_nan_without_validation():
    """Test that the builder does not validate: NaN inputs flow into the records."""
    records = build_equity_curve(
        [WIN, LOSS],
        r_multiple=2,
        starting_balance=1000,
        risk_percentage=float("nan"),
    )

    assert len(records) == 2
    assert all(math.isnan(r.static_pnl) for r in records)
    assert all(math.isnan(r.compound_balance) for r in records)


def test_trade_record_is_immutable():
    """Test that records cannot be mutated after creation."""
    record = build_equity_curve([WIN], r_multiple=2, starting_balance=1000, risk_percentage=1)[0]

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.static_balance = 0


def test_trade_record_to_row():
    """Test the external row format (camelCase keys, string result)."""
    record = TradeRecord(
        item_id="abc",
        sequence=1,
        trade=2,
        result=LOSS,
        static_pnl=-10.0,
        static_balance=990.0,
        compound_pnl=-10.0,
        compound_balance=990.0,
    )

    assert record.to_row() == {
        "itemId": "abc",
        "sequence": 1,
        "trade": 2,
        "result": "Loss",
        "staticPnl": -10.0,
        "staticBalance": 990.0,
        "compoundPnl": -10.0,
        "compoundBalance": 990.0,
    }
