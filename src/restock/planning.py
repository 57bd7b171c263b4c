"""Static order planning from historical demand."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .exceptions import PeriodOutOfRangeError
from .policies import PolicyConfig


@dataclass(frozen=True)
class PlanResult:
    orders: list[float]
    stock: list[float]


def _demand_values(demand: Iterable[float]) -> list[float]:
    values = list(demand)
    if any(value < 0 for value in values):
        raise ValueError("Demand values must be non-negative.")
    return values


def stock_trajectory(
    orders: Sequence[float],
    demand: Sequence[float],
    initial_stock: float,
) -> list[float]:
    """Stock on hand at the start of each period, floored at zero.

    The trajectory has one entry per demand period; the last period's order
    and demand only affect stock beyond the horizon.
    """
    if initial_stock < 0:
        raise ValueError("Initial stock cannot be negative.")
    if len(orders) != len(demand):
        raise ValueError("Orders and demand must cover the same periods.")
    if not demand:
        return []
    stock = [initial_stock]
    for index in range(len(demand) - 1):
        stock.append(max(0, stock[index] + orders[index] - demand[index]))
    return stock


def plan_orders_with_stock(
    demand: Iterable[float],
    initial_stock: float,
    config: PolicyConfig,
) -> PlanResult:
    """Plan one order per period by looking ahead at the next period's demand."""
    values = _demand_values(demand)
    if len(values) < 2:
        raise PeriodOutOfRangeError(
            "Planning needs at least two demand periods to look ahead."
        )
    if initial_stock < 0:
        raise ValueError("Initial stock cannot be negative.")

    policy = config.policy
    orders: list[float] = [config.order_size for _ in values]
    stock = initial_stock
    for index in range(len(values) - 1):
        orders[index] = policy.plan_order(
            order=orders[index],
            stock=stock,
            demand=values[index],
            next_demand=values[index + 1],
        )
        stock = max(0, stock + orders[index] - values[index])

    orders = [policy.clamp_planned(order) for order in orders]
    return PlanResult(
        orders=orders,
        stock=stock_trajectory(orders, values, initial_stock),
    )


def plan_orders(
    demand: Iterable[float],
    initial_stock: float,
    config: PolicyConfig,
) -> list[float]:
    return plan_orders_with_stock(demand, initial_stock, config).orders
