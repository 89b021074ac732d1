"""
Simulation engine: outcome generation, equity curve construction, and
multi-sequence orchestration.
"""
