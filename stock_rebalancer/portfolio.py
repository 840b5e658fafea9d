import logging
import math
from collections.abc import Iterable

from .allocation import float_total
from .errors import InvalidPrice, ZeroValuePortfolio
from .models import RebalanceAction, Stock, StockAction

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going toward +infinity.

    ``round()`` rounds halves to even, which would turn a 2.5 share delta
    into 2 instead of 3. ``floor(value + 0.5)`` is not used either: the
    addition itself rounds 0.49999999999999994 up to 1.0.
    """
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


class Portfolio:
    """The user's stocks plus a target allocation, with rebalancing advice."""

    def __init__(self, stocks: Iterable[Stock], allocation: dict[str, float]) -> None:
        self.stocks: list[Stock] = list(stocks)
        self.allocation = allocation

    def total_value(self) -> float:
        return float_total(stock.market_value for stock in self.stocks)

    def current_allocation(self) -> dict[str, float]:
        total = self.total_value()
        if total == 0:
            return {}

        return {stock.name: stock.market_value / total for stock in self.stocks}

    def target_values(self) -> dict[str, float]:
        total = self.total_value()
        return {
            stock.name: total * self._target_fraction(stock) for stock in self.stocks
        }

    def rebalance(self) -> list[RebalanceAction]:
        """Calculate what to buy or sell to move each stock to its target.

        Quantities are whole shares, rounded half up. The result has one
        entry per stock, in the same order as ``stocks``.

        Returns:
            List of RebalanceAction objects.

        Raises:
            ZeroValuePortfolio: If the portfolio's total value is zero.
            InvalidPrice: If any stock has a current price of zero or less.
        """
        total = self.total_value()
        if total == 0:
            raise ZeroValuePortfolio()
        for stock in self.stocks:
            if stock.current_price <= 0:
                raise InvalidPrice(stock.name, stock.current_price)

        logger.debug("Rebalancing %d stocks, total value %s", len(self.stocks), total)

        actions: list[RebalanceAction] = []
        for stock in self.stocks:
            delta = self._quantity_delta(stock, total)
            actions.append(
                RebalanceAction(
                    stock=stock.name,
                    action=self._action_for(delta),
                    quantity=round_half_up(abs(delta)),
                )
            )

        return actions

    def _target_fraction(self, stock: Stock) -> float:
        if stock.name not in self.allocation:
            logger.warning("%s has no target allocation, treating it as 0", stock.name)
            return 0.0
        return self.allocation[stock.name]

    def _quantity_delta(self, stock: Stock, total: float) -> float:
        """Shares to buy (positive) or sell (negative) to reach the target value."""
        price = stock.current_price
        stock_value = price * stock.quantity
        target = self._target_fraction(stock)

        if stock_value == 0:
            target_value = total * target
        else:
            # Same float path as stock_value * target / (stock_value / total).
            allocation_now = stock_value / total
            target_value = stock_value * target / allocation_now

        delta = (target_value - stock_value) / price
        logger.debug(
            "%s: value %s, target %s, delta %s shares",
            stock.name,
            stock_value,
            target_value,
            delta,
        )
        return delta

    @staticmethod
    def _action_for(delta: float) -> StockAction:
        rounded = round_half_up(delta)
        if rounded > 0:
            return "buy"
        if rounded < 0:
            return "sell"
        return "maintain"

    def __repr__(self) -> str:
        return (
            f"Portfolio(stocks={[stock.name for stock in self.stocks]}, "
            f"total_value={self.total_value()}, "
            f"allocation={self.allocation})"
        )
