"""Revise a single period of an order plan from observed sales."""

from __future__ import annotations

from collections.abc import Sequence

from .exceptions import PeriodOutOfRangeError
from .policies import PolicyConfig


def _validate_period(period: int, demand_periods: int, plan_periods: int) -> None:
    if period < 1 or period > demand_periods:
        raise PeriodOutOfRangeError(
            f"Period {period} is outside the demand horizon 1..{demand_periods}."
        )
    if period > plan_periods:
        raise PeriodOutOfRangeError(
            f"Period {period} is outside the order plan 1..{plan_periods}."
        )


def adjust_order(
    demand: Sequence[float],
    observed_sales: float,
    previous_plan: Sequence[float],
    current_stock: float,
    config: PolicyConfig,
    period: int,
) -> list[float]:
    """Return a copy of ``previous_plan`` with ``period`` revised.

    Periods are numbered from 1. The order is only moved when observed sales
    deviate from the historical demand by at least ``config.max_error``; the
    policy's clamp is applied either way. ``current_stock`` must be the stock on
    hand at the start of ``period``.
    """
    plan = list(previous_plan)
    _validate_period(period, len(demand), len(plan))
    if observed_sales < 0:
        raise ValueError("Observed sales cannot be negative.")
    if current_stock < 0:
        raise ValueError("Current stock cannot be negative.")

    policy = config.policy
    index = period - 1
    historical_demand = demand[index]
    order = plan[index]
    if abs(observed_sales - historical_demand) >= config.max_error:
        order = policy.revise_order(
            order=order,
            current_stock=current_stock,
            historical_demand=historical_demand,
            observed_sales=observed_sales,
        )
    plan[index] = policy.clamp_revised(order)
    return plan
