import pytest

from stock_rebalancer.allocation import (
    allocation_total,
    build_allocation,
    float_total,
    remaining_allocation,
)
from stock_rebalancer.config import DEFAULT_CONFIG, RebalancerConfig
from stock_rebalancer.errors import InvalidAllocation


class TestBuildAllocation:
    def test_valid_allocation_returned_unchanged(self):
        allocation = {"AAPL": 0.6, "META": 0.4}
        assert build_allocation(allocation) is allocation
        assert allocation == {"AAPL": 0.6, "META": 0.4}

    def test_single_stock(self):
        assert build_allocation({"AAPL": 1.0}) == {"AAPL": 1.0}

    def test_zero_fraction_allowed(self):
        assert build_allocation({"AAPL": 1.0, "META": 0.0}) == {"AAPL": 1.0, "META": 0.0}

    def test_must_add_one(self):
        with pytest.raises(InvalidAllocation, match="must add 1"):
            build_allocation({"AAPL": 0.5, "META": 0.4})

    def test_over_one_rejected(self):
        with pytest.raises(InvalidAllocation) as excinfo:
            build_allocation({"AAPL": 0.7, "META": 0.4})
        assert excinfo.value.total == pytest.approx(1.1)

    def test_empty_allocation_rejected(self):
        with pytest.raises(InvalidAllocation):
            build_allocation({})

    def test_float_error_rejected_by_default(self):
        # ten times 0.1 adds up to 0.9999999999999999
        allocation = {f"S{i}": 0.1 for i in range(10)}
        with pytest.raises(InvalidAllocation):
            build_allocation(allocation)

    def test_float_error_accepted_with_tolerance(self):
        allocation = {f"S{i}": 0.1 for i in range(10)}
        result = build_allocation(
            allocation, tolerance=DEFAULT_CONFIG.ALLOCATION_SUM_TOLERANCE
        )
        assert result is allocation

    def test_tolerance_still_rejects_real_gaps(self):
        with pytest.raises(InvalidAllocation):
            build_allocation(
                {"AAPL": 0.5, "META": 0.499},
                tolerance=DEFAULT_CONFIG.ALLOCATION_SUM_TOLERANCE,
            )

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            build_allocation({"AAPL": 0.2})


class TestAllocationTotals:
    def test_float_total_matches_plain_addition(self):
        assert float_total([0.1] * 10) == 0.9999999999999999
        assert float_total([]) == 0.0

    def test_total_rounded_to_four_places(self):
        assert allocation_total({f"S{i}": 0.1 for i in range(10)}) == 1

    def test_total_of_short_allocation(self):
        assert allocation_total({"AAPL": 0.5, "META": 0.4}) == 0.9

    def test_remaining_nothing_entered(self):
        assert remaining_allocation([]) == 1

    def test_remaining_after_entries(self):
        assert remaining_allocation([0.1, 0.2]) == 0.7

    def test_remaining_can_be_negative(self):
        assert remaining_allocation([0.8, 0.5]) == -0.3


class TestRebalancerConfig:
    def test_default_values(self):
        config = RebalancerConfig()
        assert config.ALLOCATION_SUM_TOLERANCE == 1e-4
        assert config.ALLOCATION_DISPLAY_DECIMALS == 4
        assert config.RANDOM_PRICE_MIN == 1
        assert config.RANDOM_PRICE_MAX == 20
        assert config.RANDOM_HISTORY_LENGTH == 2

    def test_frozen(self):
        config = RebalancerConfig()
        with pytest.raises(Exception):
            config.ALLOCATION_SUM_TOLERANCE = 0.1
