"""
Numeric helpers for trade accounting.

Currently a single rounding helper used by the compounding risk model. Kept in
its own module so the rounding rule is defined (and tested) in exactly one
place.
"""

import math


def round_to_cents(value: float) -> float:
    """
    Round a currency amount to 2 decimal places, halves rounded upward.

    **Conceptual**: Compound PnL and compound balance are stored as cent
    amounts. Ties are resolved toward positive infinity (2.345 -> 2.35,
    -2.345 -> -2.34), matching how the simulated ledgers have always been
    rounded. Python's built-in round() uses banker's rounding (ties to even)
    and would disagree on exact halves, so it is not used here.

    **Mathematical**:
        round_to_cents(x) = floor(x * 100 + 0.5) / 100

    **Edge cases**:
    - NaN propagates as NaN (no validation at this layer).
    - +/-inf propagate unchanged.
    - The scaling by 100 is done in binary floating point, so values such as
      1.005 (stored as 1.00499999...) round down. This is the expected
      floating-point behaviour, not a bug.

    Args:
        value: Amount to round.

    Returns:
        The amount rounded to cents.
    """
    if math.isnan(value) or math.isinf(value):
        return value
    return math.floor(value * 100 + 0.5) / 100
