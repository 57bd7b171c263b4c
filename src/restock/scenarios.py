"""Example data for demonstrating the planner and adjuster."""

from __future__ import annotations

from dataclasses import dataclass

from .policies import PolicyConfig


@dataclass(frozen=True)
class Scenario:
    historical_demand: list[float]
    observed_sales: list[float]
    initial_stock: float
    config: PolicyConfig


def default_scenario(*, adjust_batch_size: bool = True) -> Scenario:
    """Twelve monthly periods with a demand spike in month eight."""
    return Scenario(
        historical_demand=[10 * value for value in (1, 1, 2, 1, 2, 1, 1, 6, 3, 2, 3, 1)],
        observed_sales=[10 * value for value in (1, 2, 2, 2, 2, 1, 2, 5, 4, 2, 2, 1)],
        initial_stock=20,
        config=PolicyConfig(
            order_size=20,
            min_order_size=5,
            max_stock_held=70,
            buffer_stock=5,
            max_error=5,
            adjust_batch_size=adjust_batch_size,
        ),
    )
