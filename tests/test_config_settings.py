"""
Tests for equity_curves/config/settings.py

These tests use monkeypatch to control environment variables and reset the
settings singleton around each test.
"""

import pytest

from equity_curves.config.settings import (
    Settings,
    SimulationSettings,
    get_settings,
    reset_settings,
)
from equity_curves.simulation.params import SimulationParams

ENV_VARS = [
    "EQUITY_CURVES_NUM_SEQUENCES",
    "EQUITY_CURVES_NUM_TRADES",
    "EQUITY_CURVES_WIN_RATE",
    "EQUITY_CURVES_R_MULTIPLE",
    "EQUITY_CURVES_STARTING_BALANCE",
    "EQUITY_CURVES_RISK_PERCENTAGE",
    "EQUITY_CURVES_SEED",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear simulator environment variables and the settings singleton."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_simulation_settings_defaults():
    """Test default values when no environment variables are set."""
    settings = SimulationSettings.from_env()

    assert settings == SimulationSettings(
        num_sequences=10,
        num_trades=100,
        win_rate=50.0,
        r_multiple=2.0,
        starting_balance=10_000.0,
        risk_percentage=1.0,
        seed=None,
    )


def test_simulation_settings_from_env(monkeypatch):
    """Test that every variable is read from the environment."""
    monkeypatch.setenv("EQUITY_CURVES_NUM_SEQUENCES", "3")
    monkeypatch.setenv("EQUITY_CURVES_NUM_TRADES", "25")
    monkeypatch.setenv("EQUITY_CURVES_WIN_RATE", "42.5")
    monkeypatch.setenv("EQUITY_CURVES_R_MULTIPLE", "1.5")
    monkeypatch.setenv("EQUITY_CURVES_STARTING_BALANCE", "2500")
    monkeypatch.setenv("EQUITY_CURVES_RISK_PERCENTAGE", "0.5")
    monkeypatch.setenv("EQUITY_CURVES_SEED", "99")

    settings = SimulationSettings.from_env()

    assert settings.num_sequences == 3
    assert settings.num_trades == 25
    assert settings.win_rate == 42.5
    assert settings.r_multiple == 1.5
    assert settings.starting_balance == 2500.0
    assert settings.risk_percentage == 0.5
    assert settings.seed == 99


@pytest.mark.parametrize(
    "name, value",
    [
        ("EQUITY_CURVES_NUM_TRADES", "ten"),
        ("EQUITY_CURVES_WIN_RATE", "fifty"),
        ("EQUITY_CURVES_SEED", "1.5"),
    ],
)
def test_simulation_settings_unparseable_values(monkeypatch, name, value):
    """Test that malformed values raise ValueError naming the variable."""
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        SimulationSettings.from_env()


def test_simulation_settings_to_params():
    """Test conversion to SimulationParams."""
    params = SimulationSettings(num_sequences=2, num_trades=5).to_params()

    assert isinstance(params, SimulationParams)
    assert params.num_sequences == 2
    assert params.num_trades == 5
    assert params.win_rate == 50.0


def test_settings_default_construction():
    """Test that Settings() carries default simulation settings."""
    assert Settings().simulation == SimulationSettings()


def test_get_settings_is_cached(monkeypatch):
    """Test that get_settings returns the same object until reset."""
    first = get_settings()
    monkeypatch.setenv("EQUITY_CURVES_NUM_TRADES", "7")

    assert get_settings() is first
    assert get_settings().simulation.num_trades == 100

    reset_settings()
    assert get_settings().simulation.num_trades == 7
