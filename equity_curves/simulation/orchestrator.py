"""
Multi-sequence simulation orchestrator.

**Conceptual**: The orchestrator is the entry point that brings the outcome
generator and the equity curve builder together. It runs N independent
sequences of T trades each and concatenates the records into one flat,
ordered list, the shape an external table or DataFrame consumes directly.

**Why separate orchestrator from generator and builder?**
  - Separation of concerns: the generator owns randomness, the builder owns
    arithmetic, the orchestrator owns validation and iteration.
  - Testability: the builder can be tested on hand-written outcome lists, the
    generator on a fixed random source, and the orchestrator end to end.
  - Reproducibility: one injected random source per call, nothing global.

**Teaching note**: Each sequence restarts from the starting balance. Nothing
carries over between sequences except the shared random stream, so sequence 2
is not "continuing" sequence 1; they are parallel universes with the same
parameters.
"""

from typing import List

from equity_curves.simulation.equity_curve import TradeRecord, build_equity_curve
from equity_curves.simulation.outcomes import generate_outcomes
from equity_curves.simulation.params import SimulationParams
from equity_curves.utils.ids import IdGenerator, get_default_id_generator
from equity_curves.utils.random_source import RandomSource, get_default_random_source


def run_simulation(
    num_sequences: int,
    num_trades: int,
    win_rate: float,
    r_multiple: float,
    starting_balance: float,
    risk_percentage: float,
    random_source: RandomSource | None = None,
    id_generator: IdGenerator | None = None,
) -> List[TradeRecord]:
    """
    Run a full equity curve simulation.

    **Conceptual**: For each sequence number 1..num_sequences:
      1. Draw num_trades outcomes at the given win rate.
      2. Build the static/compound equity curve for those outcomes, stamping
         the sequence number into every record.
      3. Append the records to the combined output.

    **Ordering**: sequence-major, trade-minor. Records for sequence 1 come
    first (trades 1..T), then sequence 2, and so on. The output always has
    exactly num_sequences * num_trades records.

    **Failure semantics**: All parameters are validated before the first
    draw. An InvalidParameterError aborts the call with no partial output.

    Args:
        num_sequences: Number of independent sequences (integer >= 1).
        num_trades: Trades per sequence (integer >= 0).
        win_rate: Win probability in percent [0, 100].
        r_multiple: Payoff multiplier on wins.
        starting_balance: Balance each sequence starts from.
        risk_percentage: Percent of balance risked per trade [0, 100].
        random_source: Optional injected RandomSource. None creates a fresh
                       NumpyRandomSource for this call.
        id_generator: Optional injected IdGenerator. None uses UUIDs.

    Returns:
        Flat list of TradeRecord in generation order.

    Raises:
        InvalidParameterError: If any parameter is outside its valid domain.
    """
    params = SimulationParams(
        num_sequences=num_sequences,
        num_trades=num_trades,
        win_rate=win_rate,
        r_multiple=r_multiple,
        starting_balance=starting_balance,
        risk_percentage=risk_percentage,
    )
    return run_simulation_from_params(
        params,
        random_source=random_source,
        id_generator=id_generator,
    )


def run_simulation_from_params(
    params: SimulationParams,
    random_source: RandomSource | None = None,
    id_generator: IdGenerator | None = None,
) -> List[TradeRecord]:
    """
    Run a simulation from a SimulationParams bundle.

    Same semantics as run_simulation(); useful when params come from
    configuration (SimulationSettings.to_params()).
    """
    params = params.validate()

    # One source and one id generator per call; never shared across calls
    if random_source is None:
        random_source = get_default_random_source()
    if id_generator is None:
        id_generator = get_default_id_generator()

    records: List[TradeRecord] = []
    for sequence in range(1, params.num_sequences + 1):
        outcomes = generate_outcomes(
            params.win_rate,
            params.num_trades,
            random_source=random_source,
        )
        records.extend(
            build_equity_curve(
                outcomes,
                r_multiple=params.r_multiple,
                starting_balance=params.starting_balance,
                risk_percentage=params.risk_percentage,
                sequence=sequence,
                id_generator=id_generator,
            )
        )

    return records
