"""Configuration constants for the stock rebalancer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RebalancerConfig:
    """Configuration for allocation validation and generated price histories."""

    ALLOCATION_SUM_TOLERANCE: float = 1e-4
    ALLOCATION_DISPLAY_DECIMALS: int = 4
    RANDOM_PRICE_MIN: int = 1
    RANDOM_PRICE_MAX: int = 20
    RANDOM_HISTORY_LENGTH: int = 2


DEFAULT_CONFIG = RebalancerConfig()
