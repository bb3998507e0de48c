"""
Portfolio Analytics Engine

Turns a weighted basket of monthly asset prices into value series and metrics:
- Value series (buy-and-hold and yield-adjusted)
- Growth (CAGR) and volatility (annualized)
- Maximum drawdown
- Sharpe and Sortino ratios
- Diversification score from pairwise correlation
"""

__version__ = "0.1.0"
