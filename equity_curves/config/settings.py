"""
Configuration settings for the equity curve simulator.

**Conceptual**: This module provides strongly-typed configuration objects that
load simulation defaults from environment variables (via .env files). All
settings are validated at load time, ensuring fail-fast behavior if a value
is malformed.

**Why centralized config?**
  - Single source of truth for default simulation parameters.
  - Easy to test (inject fake settings instead of reading from environment).
  - Fail-fast validation (EQUITY_CURVES_WIN_RATE=abc -> clear error at startup).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from equity_curves.simulation.params import SimulationParams

# Load .env from project root (dev/local environments)
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw}")


@dataclass(frozen=True)
class SimulationSettings:
    """
    Default parameters for simulation runs.

    **Conceptual**: Runners (see actions/) fall back to these values when a
    parameter is not given on the command line. Settings only hold defaults;
    range checks happen when the values are turned into SimulationParams and
    validated by the orchestrator.

    Attributes:
        num_sequences: Default number of sequences (default 10).
        num_trades: Default trades per sequence (default 100).
        win_rate: Default win rate in percent (default 50).
        r_multiple: Default payoff multiple (default 2).
        starting_balance: Default starting balance (default 10000).
        risk_percentage: Default risk per trade in percent (default 1).
        seed: Optional random seed for reproducible runs (default None).
    """
    num_sequences: int = 10
    num_trades: int = 100
    win_rate: float = 50.0
    r_multiple: float = 2.0
    starting_balance: float = 10_000.0
    risk_percentage: float = 1.0
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "SimulationSettings":
        """
        Load simulation settings from environment variables.

        **Environment variables** (all optional):
          - EQUITY_CURVES_NUM_SEQUENCES: default 10
          - EQUITY_CURVES_NUM_TRADES: default 100
          - EQUITY_CURVES_WIN_RATE: default 50
          - EQUITY_CURVES_R_MULTIPLE: default 2
          - EQUITY_CURVES_STARTING_BALANCE: default 10000
          - EQUITY_CURVES_RISK_PERCENTAGE: default 1
          - EQUITY_CURVES_SEED: unset or empty for a random seed

        Returns:
            SimulationSettings with values loaded from environment.

        Raises:
            ValueError: If a variable is set but cannot be parsed.
        """
        seed_str = os.getenv("EQUITY_CURVES_SEED", "")
        seed = None
        if seed_str:
            try:
                seed = int(seed_str)
            except ValueError:
                raise ValueError(
                    f"EQUITY_CURVES_SEED must be an integer, got: {seed_str}"
                )

        return cls(
            num_sequences=_read_int("EQUITY_CURVES_NUM_SEQUENCES", "10"),
            num_trades=_read_int("EQUITY_CURVES_NUM_TRADES", "100"),
            win_rate=_read_float("EQUITY_CURVES_WIN_RATE", "50"),
            r_multiple=_read_float("EQUITY_CURVES_R_MULTIPLE", "2"),
            starting_balance=_read_float("EQUITY_CURVES_STARTING_BALANCE", "10000"),
            risk_percentage=_read_float("EQUITY_CURVES_RISK_PERCENTAGE", "1"),
            seed=seed,
        )

    def to_params(self) -> SimulationParams:
        """Return the default parameters as an (unvalidated) SimulationParams."""
        return SimulationParams(
            num_sequences=self.num_sequences,
            num_trades=self.num_trades,
            win_rate=self.win_rate,
            r_multiple=self.r_multiple,
            starting_balance=self.starting_balance,
            risk_percentage=self.risk_percentage,
        )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the simulator.

    **Usage pattern**:
      ```python
      from equity_curves.config.settings import get_settings

      settings = get_settings()
      params = settings.simulation.to_params()
      ```

    Attributes:
        simulation: Default simulation parameters.
    """
    simulation: SimulationSettings = field(default_factory=SimulationSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load global settings from environment variables."""
        return cls(simulation=SimulationSettings.from_env())


_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for
    reuse. Tests can bypass this by constructing Settings directly, or call
    reset_settings() after changing the environment.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If an environment variable cannot be parsed.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("EQUITY_CURVES_NUM_TRADES", "5")
          reset_settings()
          assert get_settings().simulation.num_trades == 5
      ```
    """
    global _default_settings
    _default_settings = None
