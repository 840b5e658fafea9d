"""Errors raised by the rebalancing core."""


class RebalancerError(ValueError):
    """Base class for allocation and rebalance failures."""


class InvalidAllocation(RebalancerError):
    """Raised when target fractions do not add up to 1."""

    def __init__(self, total: float) -> None:
        self.total = total
        super().__init__(f"Allocations must add 1 (100%), got {total}")


class ZeroValuePortfolio(RebalancerError):
    """Raised when the portfolio is worth nothing, so no target can be derived."""

    def __init__(self) -> None:
        super().__init__("Portfolio total value is zero, nothing to rebalance")


class InvalidPrice(RebalancerError):
    """Raised when a stock's current price is not positive."""

    def __init__(self, name: str, price: float) -> None:
        self.name = name
        self.price = price
        super().__init__(f"Current price of {name} must be positive, got {price}")
