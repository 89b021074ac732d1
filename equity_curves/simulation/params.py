"""
Simulation parameters and input validation.

**Conceptual**: A simulation is driven by exactly six numbers supplied by the
caller: how many sequences, how many trades per sequence, the win rate, the
payoff multiple, the starting balance, and the risk per trade. This module
declares those inputs (with their user-facing descriptions) and validates them
before any computation happens.

**Fail-fast policy**:
  - Every check runs before the first random draw, so an invalid call never
    produces partial output.
  - Values are never clamped into range. A win rate of 120 is an error, not
    a silent 100.
  - There are no retries; the computation has no transient failure modes.

**Teaching note**: The outcome generator and orchestrator validate their own
inputs, but the equity curve builder does not. The builder is a pure
arithmetic step and trusts its caller; if you call it directly with NaN or a
negative risk percentage, the nonsense propagates into the records.
"""

import math
from dataclasses import asdict, dataclass
from numbers import Real


class InvalidParameterError(ValueError):
    """
    Raised when a simulation input is outside its valid domain.

    **Conceptual**: The single domain error of the simulation engine. Covers
    negative or non-integral counts, percentages outside [0, 100], and
    non-finite amounts. Subclasses ValueError so generic callers that already
    catch ValueError keep working.

    Attributes:
        name: Name of the offending parameter (e.g., "win_rate").
        value: The rejected value.
    """

    def __init__(self, name: str, value: object, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid parameter '{name}': {reason}, got: {value!r}")


# User-facing descriptions of the six simulation inputs
PARAMETER_DESCRIPTIONS = {
    "num_sequences": "Number of sequences to generate",
    "num_trades": "Number of trades to generate per sequence",
    "win_rate": "Win rate percentage",
    "r_multiple": "R multiple for winning trades",
    "starting_balance": "The starting account balance",
    "risk_percentage": "Percentage of account balance risked per trade",
}


def _is_number(value: object) -> bool:
    # bool is a subclass of int; True/False are never meaningful counts or rates
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_count(name: str, value: object, minimum: int) -> int:
    """
    Validate an integral count and return it as a plain int.

    Integral floats such as 3.0 are accepted (callers feeding numbers from a
    spreadsheet or JSON frequently hand over floats); 2.5 is rejected.

    Args:
        name: Parameter name (used in the error message).
        value: Value to validate.
        minimum: Smallest allowed value (0 for lengths, 1 for sequence counts).

    Returns:
        The value as an int.

    Raises:
        InvalidParameterError: If value is not a number, not integral, or below minimum.
    """
    if not _is_number(value):
        raise InvalidParameterError(name, value, "must be a number")
    if not math.isfinite(value) or value != int(value):
        raise InvalidParameterError(name, value, "must be a whole number")
    if value < minimum:
        raise InvalidParameterError(name, value, f"must be >= {minimum}")
    return int(value)


def validate_percentage(name: str, value: object) -> float:
    """
    Validate a percentage in the closed interval [0, 100].

    NaN fails the range comparison and is rejected.

    Raises:
        InvalidParameterError: If value is not a number or outside [0, 100].
    """
    if not _is_number(value):
        raise InvalidParameterError(name, value, "must be a number")
    if not 0 <= value <= 100:
        raise InvalidParameterError(name, value, "must be between 0 and 100")
    return float(value)


def validate_finite(name: str, value: object) -> float:
    """
    Validate that value is a finite real number.

    Raises:
        InvalidParameterError: If value is not a number, NaN, or infinite.
    """
    if not _is_number(value):
        raise InvalidParameterError(name, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidParameterError(name, value, "must be finite")
    return float(value)


@dataclass(frozen=True)
class SimulationParams:
    """
    The six inputs of a simulation run.

    **Conceptual**: SimulationParams bundles everything needed to run the
    orchestrator, which makes it easy to:
      - Build params from configuration (see SimulationSettings.to_params()).
      - Rerun a simulation with identical inputs (reproducibility).
      - Pass params around without long argument lists.

    Construction does not validate; call validate() (the orchestrator does so
    before drawing anything).

    Attributes:
        num_sequences: Number of independent sequences to generate (>= 1).
        num_trades: Number of trades per sequence (>= 0).
        win_rate: Probability of a win, in percent [0, 100].
        r_multiple: Payoff multiplier applied to the risk amount on a win.
        starting_balance: Account balance each sequence starts from.
        risk_percentage: Percent of balance risked per trade [0, 100].
    """
    num_sequences: int
    num_trades: int
    win_rate: float
    r_multiple: float
    starting_balance: float
    risk_percentage: float

    def validate(self) -> "SimulationParams":
        """
        Validate every field and return a normalized copy.

        Counts are coerced to int and amounts to float.

        Returns:
            New SimulationParams with normalized types.

        Raises:
            InvalidParameterError: On the first invalid field, checked in
                                   declaration order.
        """
        return SimulationParams(
            num_sequences=validate_count("num_sequences", self.num_sequences, minimum=1),
            num_trades=validate_count("num_trades", self.num_trades, minimum=0),
            win_rate=validate_percentage("win_rate", self.win_rate),
            r_multiple=validate_finite("r_multiple", self.r_multiple),
            starting_balance=validate_finite("starting_balance", self.starting_balance),
            risk_percentage=validate_percentage("risk_percentage", self.risk_percentage),
        )

    def to_dict(self) -> dict:
        """Return the parameters as a plain dict keyed by field name."""
        return asdict(self)
