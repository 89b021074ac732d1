"""
Equity curve construction under static and compounding risk models.

**Conceptual**: Given a sequence of trade outcomes, this module replays them
against an account and records, for every trade, the profit/loss and the
running balance under two position-sizing policies:

  - **Static risk**: every trade risks the same dollar amount, fixed at the
    outset as a percentage of the starting balance. Wins and losses are
    linear; the curve is a random walk with constant step sizes.
  - **Compound risk**: every trade risks a percentage of the *current*
    balance. Winning streaks grow position size, losing streaks shrink it,
    so the curve is multiplicative and can never reach zero while the risk
    percentage is below 100.

Comparing the two columns side by side is the whole point of the simulation:
it shows how sizing alone changes the shape of the same trade sequence.

**Rounding** (deliberate asymmetry):
  - Static PnL and static balance are kept at full float precision.
  - Compound PnL and compound balance are rounded to cents as they are
    computed, and the rounded balance seeds the next trade.
Keep the two policies distinct; making them consistent is a product decision,
not a bug fix.

**Teaching note**: The builder does no validation. It is a pure arithmetic
stage: feed it NaN and you get NaN rows. Validation belongs to the caller
(see simulation.orchestrator and simulation.params).
"""

from dataclasses import dataclass
from typing import Iterable, List

from equity_curves.simulation.outcomes import TradeOutcome
from equity_curves.utils.ids import IdGenerator, get_default_id_generator
from equity_curves.utils.math import round_to_cents


@dataclass(frozen=True)
class TradeRecord:
    """
    One simulated trade with its PnL and balance under both risk models.

    **Conceptual**: A TradeRecord is a point-in-time ledger entry. Once
    created by the builder it is never mutated (frozen dataclass), so a list
    of records can be handed to the caller without copying.

    Attributes:
        item_id: Globally unique opaque id (row identity for consumers).
        sequence: 1-based number of the sequence this trade belongs to.
        trade: 1-based index of the trade within its sequence.
        result: TradeOutcome.WIN or TradeOutcome.LOSS.
        static_pnl: PnL under static risk (unrounded).
        static_balance: Starting balance plus the running sum of static PnL (unrounded).
        compound_pnl: PnL under compound risk, rounded to cents.
        compound_balance: Balance under compound risk, rounded to cents.
    """
    item_id: str
    sequence: int
    trade: int
    result: TradeOutcome
    static_pnl: float
    static_balance: float
    compound_pnl: float
    compound_balance: float

    def to_row(self) -> dict:
        """
        Convert to the external row format.

        Keys are the camelCase field names consumers expect and `result` is
        rendered as the plain string "Win" or "Loss".
        """
        return {
            "itemId": self.item_id,
            "sequence": self.sequence,
            "trade": self.trade,
            "result": self.result.value,
            "staticPnl": self.static_pnl,
            "staticBalance": self.static_balance,
            "compoundPnl": self.compound_pnl,
            "compoundBalance": self.compound_balance,
        }


def build_equity_curve(
    outcomes: Iterable[TradeOutcome],
    r_multiple: float,
    starting_balance: float,
    risk_percentage: float,
    sequence: int = 1,
    id_generator: IdGenerator | None = None,
) -> List[TradeRecord]:
    """
    Convert an outcome sequence into trade records for both risk models.

    **Mathematical**: For trade i (1-based), with f = risk_percentage / 100:

        static_risk        = starting_balance * f                   (constant)
        static_pnl[i]      = -static_risk            on a loss
                             static_risk * r_multiple on a win
        static_balance[i]  = starting_balance + sum(static_pnl[1..i])

        compound_risk[i]   = static_risk                  if i == 1
                             compound_balance[i-1] * f    otherwise
        compound_pnl[i]    = -compound_risk[i]            on a loss
                             compound_risk[i] * r_multiple on a win
        compound_balance[i]= starting_balance + compound_pnl[i]      if i == 1
                             compound_balance[i-1] + compound_pnl[i]  otherwise

    compound_pnl and compound_balance are rounded to cents when stored. The
    balance is computed from the previous *stored* (rounded) balance plus the
    *unrounded* PnL of the current trade, then rounded.

    **Functionally**:
    - Output has the same length and order as `outcomes`.
    - `sequence` is stamped into every record; `trade` counts from 1.
    - Static balance uses a running accumulator; nothing is re-summed.
    - Apart from item_id, the output is a pure function of the inputs.

    **Example** (all wins, r=2, balance=1000, risk=10%):
        trade 1: static 200 / 1200, compound 200.00 / 1200.00
        trade 2: static 200 / 1400, compound 240.00 / 1440.00
        trade 3: static 200 / 1600, compound 288.00 / 1728.00

    Args:
        outcomes: Ordered trade outcomes.
        r_multiple: Payoff multiplier applied to the risk amount on a win.
        starting_balance: Account balance before the first trade.
        risk_percentage: Percent of balance risked per trade.
        sequence: Sequence number to stamp into each record (default 1).
        id_generator: Optional injected IdGenerator (default: UUID-based).

    Returns:
        List of TradeRecord, one per outcome.
    """
    if id_generator is None:
        id_generator = get_default_id_generator()

    risk_fraction = risk_percentage / 100
    static_risk = starting_balance * risk_fraction

    records: List[TradeRecord] = []
    cumulative_static_pnl = 0.0
    previous_compound_balance = starting_balance

    for index, outcome in enumerate(outcomes):
        is_loss = outcome == TradeOutcome.LOSS

        # Static model: fixed dollar risk
        static_pnl = -static_risk if is_loss else static_risk * r_multiple
        cumulative_static_pnl += static_pnl
        static_balance = cumulative_static_pnl + starting_balance

        # Compound model: risk scales with the last stored balance
        if index == 0:
            compound_risk = static_risk
        else:
            compound_risk = previous_compound_balance * risk_fraction
        compound_pnl = -compound_risk if is_loss else compound_risk * r_multiple
        compound_balance = round_to_cents(previous_compound_balance + compound_pnl)

        records.append(
            TradeRecord(
                item_id=id_generator.new_id(),
                sequence=sequence,
                trade=index + 1,
                result=outcome,
                static_pnl=static_pnl,
                static_balance=static_balance,
                compound_pnl=round_to_cents(compound_pnl),
                compound_balance=compound_balance,
            )
        )
        previous_compound_balance = compound_balance

    return records
