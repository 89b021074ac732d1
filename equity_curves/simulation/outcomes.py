"""
Random win/loss outcome generation.

**Conceptual**: The first stage of the simulation turns a win probability into
a concrete sequence of trade results. Each position is an independent
Bernoulli trial: one uniform draw per trade, compared against the win
probability. There is no streakiness or serial correlation; a losing run of
ten in a row is exactly as likely as the product of ten independent losses.

**Mathematical**: For position k with draw u_k ~ U[0, 1):
    outcome_k = Win   if u_k <= p / 100
                Loss  otherwise
where p is the win probability in percent.

Note the comparison is `<=`, so a draw of exactly 0.0 is a win even when
p = 0. With a continuous generator this has probability ~0 and is irrelevant;
with a FixedRandomSource([0.0]) it is observable and intentional.
"""

from enum import Enum
from typing import List

from equity_curves.simulation.params import validate_count, validate_percentage
from equity_curves.utils.random_source import RandomSource, get_default_random_source


class TradeOutcome(Enum):
    """
    Result of a single simulated trade.

    Values are the exact strings used in the external row format.
    """
    WIN = "Win"
    LOSS = "Loss"


def generate_outcomes(
    win_probability_percent: float,
    length: int,
    random_source: RandomSource | None = None,
) -> List[TradeOutcome]:
    """
    Generate a random sequence of wins and losses.

    **Functionally**:
    - Input:
        - win_probability_percent: Chance of any one trade being a win (0-100).
        - length: Number of trades in the sequence.
        - random_source: Where draws come from. None creates a fresh
          NumpyRandomSource for this call only.
    - Output: list of TradeOutcome, exactly `length` long.
    - One draw is consumed per position, always. p = 0 and p = 100 are not
      short-circuited, so the random stream advances identically regardless
      of the probability.

    **Edge cases**:
    - length = 0 -> empty list (not an error).
    - p = 100 -> every draw in [0, 1) is <= 1.0, so all wins.
    - p = 0 -> all losses, except for a draw of exactly 0.0.

    Args:
        win_probability_percent: Win probability in percent, within [0, 100].
        length: Sequence length (integer >= 0).
        random_source: Optional injected RandomSource.

    Returns:
        List of TradeOutcome values in generation order.

    Raises:
        InvalidParameterError: If length is negative or not whole, or if the
                               probability is outside [0, 100]. Raised before
                               any draw, so no partial sequence exists.
    """
    # Validate before touching the random stream
    length = validate_count("length", length, minimum=0)
    win_probability_percent = validate_percentage(
        "win_probability_percent", win_probability_percent
    )

    if random_source is None:
        random_source = get_default_random_source()

    threshold = win_probability_percent / 100

    outcomes = []
    for _ in range(length):
        u = random_source.random()
        outcomes.append(TradeOutcome.WIN if u <= threshold else TradeOutcome.LOSS)

    return outcomes
