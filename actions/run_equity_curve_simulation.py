#!/usr/bin/env python3
"""
Run an equity curve simulation and print the resulting trade table.

**Purpose**: This script demonstrates how to:
  1. Load default simulation parameters from settings (.env / environment).
  2. Override any of them on the command line.
  3. Run the multi-sequence orchestrator.
  4. Inspect the output as a pandas DataFrame.

**Usage**:
    From project root:
    ```bash
    python actions/run_equity_curve_simulation.py
    python actions/run_equity_curve_simulation.py --num-sequences 5 --num-trades 20 \\
        --win-rate 40 --r-multiple 3 --starting-balance 10000 --risk-percentage 2 --seed 7
    ```

**Outputs**: Terminal only. Nothing is written to disk.
  - The parameters used.
  - The first rows of the trade table (--show controls how many).
  - The final static and compound balance of each sequence.
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from equity_curves.config.settings import get_settings
from equity_curves.data.schemas import records_to_dataframe, validate_equity_curve_frame
from equity_curves.simulation.orchestrator import run_simulation_from_params
from equity_curves.simulation.params import (
    PARAMETER_DESCRIPTIONS,
    InvalidParameterError,
    SimulationParams,
)
from equity_curves.utils.random_source import get_default_random_source


def build_parser(defaults) -> argparse.ArgumentParser:
    """
    Build the argument parser with defaults taken from SimulationSettings.

    Args:
        defaults: SimulationSettings supplying default values.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        description="Generate win/loss sequences and their cumulative PnL.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--num-sequences",
        type=float,
        default=defaults.num_sequences,
        help=f"{PARAMETER_DESCRIPTIONS['num_sequences']}. Default: {defaults.num_sequences}",
    )
    parser.add_argument(
        "--num-trades",
        type=float,
        default=defaults.num_trades,
        help=f"{PARAMETER_DESCRIPTIONS['num_trades']}. Default: {defaults.num_trades}",
    )
    parser.add_argument(
        "--win-rate",
        type=float,
        default=defaults.win_rate,
        help=f"{PARAMETER_DESCRIPTIONS['win_rate']}. Default: {defaults.win_rate}",
    )
    parser.add_argument(
        "--r-multiple",
        type=float,
        default=defaults.r_multiple,
        help=f"{PARAMETER_DESCRIPTIONS['r_multiple']}. Default: {defaults.r_multiple}",
    )
    parser.add_argument(
        "--starting-balance",
        type=float,
        default=defaults.starting_balance,
        help=f"{PARAMETER_DESCRIPTIONS['starting_balance']}. Default: {defaults.starting_balance}",
    )
    parser.add_argument(
        "--risk-percentage",
        type=float,
        default=defaults.risk_percentage,
        help=f"{PARAMETER_DESCRIPTIONS['risk_percentage']}. Default: {defaults.risk_percentage}",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help="Random seed for a reproducible run. Default: fresh entropy each run.",
    )
    parser.add_argument(
        "--show",
        type=int,
        default=20,
        help="Number of trade rows to print. Default: 20",
    )
    return parser


def main(argv=None) -> int:
    """
    Main entrypoint for the equity curve simulation.

    Steps:
      1. Load settings and parse arguments.
      2. Run the simulation.
      3. Print the trade table and per-sequence final balances.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).

    Returns:
        Process exit code (0 on success).
    """
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(2)

    args = build_parser(settings.simulation).parse_args(argv)

    params = SimulationParams(
        num_sequences=args.num_sequences,
        num_trades=args.num_trades,
        win_rate=args.win_rate,
        r_multiple=args.r_multiple,
        starting_balance=args.starting_balance,
        risk_percentage=args.risk_percentage,
    )

    print("=" * 80)
    print("Equity Curve Simulation")
    print("=" * 80)
    print()

    # ========================================================================
    # Step 1: Run simulation
    # ========================================================================
    print("Step 1: Running simulation...")
    try:
        records = run_simulation_from_params(
            params,
            random_source=get_default_random_source(args.seed),
        )
    except InvalidParameterError as e:
        print(f"ERROR: {e}")
        sys.exit(2)

    params = params.validate()
    for name, value in params.to_dict().items():
        print(f"  {PARAMETER_DESCRIPTIONS[name]:50s}: {value}")
    if args.seed is not None:
        print(f"  {'Random seed':50s}: {args.seed}")
    print(f"  ✓ Generated {len(records)} trades across {params.num_sequences} sequences")
    print()

    trades = records_to_dataframe(records)
    validate_equity_curve_frame(trades, context="simulation output")

    # ========================================================================
    # Step 2: Trade table
    # ========================================================================
    print(f"Step 2: First {min(args.show, len(trades))} trades:")
    print("-" * 80)
    if trades.empty:
        print("  (no trades)")
    else:
        print(trades.drop(columns=["itemId"]).head(args.show).to_string(index=False))
    print("-" * 80)
    print()

    # ========================================================================
    # Step 3: Final balance per sequence
    # ========================================================================
    if not trades.empty:
        print("Step 3: Final balance per sequence:")
        final_rows = trades.groupby("sequence", sort=True).tail(1)
        for _, row in final_rows.iterrows():
            print(
                f"  Sequence {int(row['sequence']):4d}: "
                f"static ${row['staticBalance']:>14,.2f}   "
                f"compound ${row['compoundBalance']:>14,.2f}"
            )
        print()

    print("=" * 80)
    print("Simulation complete!")
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
