"""Replenishment policies for planning and revising order quantities."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import math
from typing import Protocol

from .exceptions import InvalidConfigurationError

POLICY_BATCH_SIZE = "batch_size"
POLICY_ORDER_FREQUENCY = "order_frequency"


class ReplenishmentPolicy(Protocol):
    name: str

    def plan_order(
        self, *, order: float, stock: float, demand: float, next_demand: float
    ) -> float:
        ...

    def revise_order(
        self,
        *,
        order: float,
        current_stock: float,
        historical_demand: float,
        observed_sales: float,
    ) -> float:
        ...

    def clamp_planned(self, order: float) -> float:
        ...

    def clamp_revised(self, order: float) -> float:
        ...


@dataclass(frozen=True)
class PolicyConfig:
    """Settings shared by the static planner and the dynamic adjuster.

    ``adjust_batch_size`` selects the Batch-Size policy (vary the quantity of
    each order) when true and the Order-Frequency policy (place whole orders of
    ``order_size``) when false.
    """

    order_size: float
    min_order_size: float
    max_stock_held: float
    buffer_stock: float
    max_error: float
    adjust_batch_size: bool = True

    def __post_init__(self) -> None:
        if not self.order_size > 0:
            raise InvalidConfigurationError("Order size must be positive.")
        if self.min_order_size < 0:
            raise InvalidConfigurationError("Minimum order size cannot be negative.")
        if self.max_stock_held < 0:
            raise InvalidConfigurationError("Maximum stock held cannot be negative.")
        if self.min_order_size > self.max_stock_held:
            raise InvalidConfigurationError(
                "Minimum order size cannot exceed maximum stock held."
            )
        if self.buffer_stock < 0:
            raise InvalidConfigurationError("Buffer stock cannot be negative.")
        if self.max_error < 0:
            raise InvalidConfigurationError("Maximum error cannot be negative.")
        if not self.adjust_batch_size:
            smallest_orders = math.ceil(self.min_order_size / self.order_size)
            if smallest_orders * self.order_size > self.max_stock_held:
                raise InvalidConfigurationError(
                    "No multiple of the order size fits between the minimum "
                    "order size and the maximum stock held."
                )

    @property
    def policy(self) -> ReplenishmentPolicy:
        if self.adjust_batch_size:
            return BatchSizePolicy(self)
        return OrderFrequencyPolicy(self)

    @property
    def policy_name(self) -> str:
        return POLICY_BATCH_SIZE if self.adjust_batch_size else POLICY_ORDER_FREQUENCY

    def with_policy(self, adjust_batch_size: bool) -> "PolicyConfig":
        return replace(self, adjust_batch_size=adjust_batch_size)


@dataclass(frozen=True)
class BatchSizePolicy:
    """Keep one order per period and vary its quantity."""

    config: PolicyConfig
    name: str = field(default=POLICY_BATCH_SIZE, init=False)

    def plan_order(
        self, *, order: float, stock: float, demand: float, next_demand: float
    ) -> float:
        expected_stock = stock + order - demand
        if expected_stock < next_demand:
            shortage = (next_demand - stock) + self.config.buffer_stock
            return min(order + shortage, self.config.max_stock_held)
        target = next_demand + self.config.buffer_stock
        if expected_stock > target:
            excess = expected_stock - target
            return max(order - excess, self.config.min_order_size)
        return order

    def revise_order(
        self,
        *,
        order: float,
        current_stock: float,
        historical_demand: float,
        observed_sales: float,
    ) -> float:
        deviation = abs(observed_sales - historical_demand)
        if observed_sales > historical_demand:
            return order + deviation
        return order - deviation

    def clamp_planned(self, order: float) -> float:
        return max(min(order, self.config.max_stock_held), self.config.min_order_size)

    def clamp_revised(self, order: float) -> float:
        return self.clamp_planned(order)


@dataclass(frozen=True)
class OrderFrequencyPolicy:
    """Place whole orders of ``order_size`` and vary how many are placed.

    A planned quantity of zero means the period's order is skipped.
    """

    config: PolicyConfig
    name: str = field(default=POLICY_ORDER_FREQUENCY, init=False)

    def plan_order(
        self, *, order: float, stock: float, demand: float, next_demand: float
    ) -> float:
        order_size = self.config.order_size
        expected_stock = stock + order - demand
        if expected_stock < next_demand:
            extra = math.ceil((next_demand - expected_stock) / order_size) * order_size
            order += extra
            expected_stock += extra
        target = next_demand + self.config.buffer_stock
        if expected_stock > target:
            excess_orders = math.floor((expected_stock - target) / order_size)
            order = max(order - excess_orders * order_size, 0)
        return order

    def revise_order(
        self,
        *,
        order: float,
        current_stock: float,
        historical_demand: float,
        observed_sales: float,
    ) -> float:
        order_size = self.config.order_size
        expected_stock = current_stock + order - observed_sales
        if observed_sales > historical_demand:
            if expected_stock < historical_demand:
                order += (
                    math.ceil((historical_demand - expected_stock) / order_size)
                    * order_size
                )
        elif expected_stock > historical_demand:
            order -= (
                math.ceil((expected_stock - historical_demand) / order_size)
                * order_size
            )
        return max(order, 0)

    def clamp_planned(self, order: float) -> float:
        if order <= 0:
            return 0
        order_size = self.config.order_size
        smallest = math.ceil(self.config.min_order_size / order_size) * order_size
        largest = math.floor(self.config.max_stock_held / order_size) * order_size
        return min(max(order, smallest), largest)

    def clamp_revised(self, order: float) -> float:
        # round() ties to even
        order_size = self.config.order_size
        return order_size * round(order / order_size)
