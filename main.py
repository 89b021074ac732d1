"""
equity_curves – Main entry point.

Runs a small default simulation to verify the project structure is in place.
"""

from equity_curves.config.settings import get_settings
from equity_curves.simulation.orchestrator import run_simulation_from_params


def main() -> None:
    """Run the configured default simulation and print a bootstrap confirmation."""
    simulation = get_settings().simulation
    records = run_simulation_from_params(simulation.to_params())
    print(f"equity_curves bootstrap complete ({len(records)} trades simulated)")


if __name__ == "__main__":
    main()
