"""
equity_curves – Monte Carlo simulation of trading equity curves.

Generates randomized win/loss trade sequences and converts them into per-trade
PnL and account balance under static and compounding risk models.
"""
