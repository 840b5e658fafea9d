"""
Stock Rebalancer - Suggests buy/sell/maintain actions to move stock holdings to a target allocation.

Exports:
    Stock: Dataclass representing a stock holding and its price history
    RebalanceAction: Dataclass representing a buy/sell/maintain suggestion
    Portfolio: Holds stocks and a target allocation, calculates rebalance actions
    build_allocation: Validates that target fractions add up to 1
    InvalidAllocation: Raised for target fractions that do not add up to 1
    ZeroValuePortfolio: Raised when rebalancing a portfolio worth nothing
    InvalidPrice: Raised when rebalancing a stock whose current price is not positive
"""

from .allocation import (
    allocation_total,
    build_allocation,
    float_total,
    remaining_allocation,
)
from .config import DEFAULT_CONFIG, RebalancerConfig
from .errors import (
    InvalidAllocation,
    InvalidPrice,
    RebalancerError,
    ZeroValuePortfolio,
)
from .models import RebalanceAction, Stock, random_price_history
from .portfolio import Portfolio, round_half_up

__all__ = [
    "Stock",
    "RebalanceAction",
    "Portfolio",
    "build_allocation",
    "allocation_total",
    "remaining_allocation",
    "float_total",
    "random_price_history",
    "round_half_up",
    "RebalancerConfig",
    "DEFAULT_CONFIG",
    "RebalancerError",
    "InvalidAllocation",
    "ZeroValuePortfolio",
    "InvalidPrice",
]
