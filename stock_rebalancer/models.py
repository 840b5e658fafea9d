"""Data models for the stock rebalancer."""

import logging
import random
from dataclasses import dataclass
from typing import Literal, Optional

from .config import DEFAULT_CONFIG, RebalancerConfig

logger = logging.getLogger(__name__)

StockAction = Literal["buy", "sell", "maintain"]


def random_price_history(
    rng: Optional[random.Random] = None,
    config: RebalancerConfig = DEFAULT_CONFIG,
) -> list[float]:
    """Generate a short history of whole-number prices for a stock with none."""
    rng = rng or random.Random()
    return [
        float(rng.randint(config.RANDOM_PRICE_MIN, config.RANDOM_PRICE_MAX))
        for _ in range(config.RANDOM_HISTORY_LENGTH)
    ]


@dataclass
class Stock:
    """A stock owned by the user, with its price history.

    The last entry of ``price_history`` is the current price. When no history
    is given a random one is generated.
    """

    name: str
    quantity: float
    price_history: Optional[list[float]] = None

    def __post_init__(self) -> None:
        if self.price_history is None:
            self.price_history = random_price_history()
            logger.warning(
                "No price history for %s, using random prices %s",
                self.name,
                self.price_history,
            )
        elif not self.price_history:
            raise ValueError(f"Price history for {self.name} cannot be empty")

    @property
    def current_price(self) -> float:
        return self.price_history[-1]

    @property
    def market_value(self) -> float:
        return self.current_price * self.quantity

    def add_price(self, price: float) -> None:
        self.price_history.append(price)


@dataclass(frozen=True)
class RebalanceAction:
    """What to do with one stock to reach its target allocation."""

    stock: str
    action: StockAction
    quantity: int

    def __str__(self) -> str:
        if self.quantity == 0:
            return f"{self.action} the stocks of {self.stock}"
        return f"{self.action} {self.quantity} stocks of {self.stock}"
