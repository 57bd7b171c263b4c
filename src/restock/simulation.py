"""Period-by-period simulation of dynamic order revision."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import warnings

from .adjustment import adjust_order
from .exceptions import PeriodOutOfRangeError
from .planning import plan_orders
from .policies import POLICY_BATCH_SIZE, POLICY_ORDER_FREQUENCY, PolicyConfig


@dataclass(frozen=True)
class SimulationState:
    """Order plan and stock known before revising ``period`` (1-based)."""

    period: int
    plan: tuple[float, ...]
    stock: tuple[float, ...]

    @property
    def finished(self) -> bool:
        return self.period > len(self.plan)

    @property
    def current_stock(self) -> float:
        return self.stock[self.period - 1]


@dataclass(frozen=True)
class SimulationSnapshot:
    period: int
    historical_demand: float
    observed_sales: float
    starting_stock: float
    baseline_order: float
    order: float
    ending_stock: float
    shortage: float


@dataclass(frozen=True)
class SimulationSummary:
    total_demand: float
    total_fulfilled: float
    total_shortage: float
    fill_rate: float
    average_stock: float
    total_ordered: float
    baseline_total_ordered: float


@dataclass(frozen=True)
class SimulationResult:
    policy: str
    baseline: Sequence[float]
    plan: Sequence[float]
    stock: Sequence[float]
    snapshots: Sequence[SimulationSnapshot]
    summary: SimulationSummary


def start_simulation(
    demand: Sequence[float],
    initial_stock: float,
    config: PolicyConfig,
    baseline: Iterable[float] | None = None,
) -> SimulationState:
    if initial_stock < 0:
        raise ValueError("Initial stock cannot be negative.")
    if baseline is None:
        plan = plan_orders(demand, initial_stock, config)
    else:
        plan = list(baseline)
        if len(plan) != len(demand):
            raise ValueError("Baseline plan must cover every demand period.")
    return SimulationState(period=1, plan=tuple(plan), stock=(initial_stock,))


def advance(
    state: SimulationState,
    demand: Sequence[float],
    observed_sales: float,
    config: PolicyConfig,
) -> SimulationState:
    """Revise the state's current period and roll stock forward with sales."""
    if state.finished:
        raise PeriodOutOfRangeError("Every period of the plan has been revised.")
    current_stock = state.current_stock
    plan = adjust_order(
        demand,
        observed_sales,
        state.plan,
        current_stock,
        config,
        state.period,
    )
    stock = list(state.stock)
    if state.period < len(plan):
        stock.append(max(0, current_stock + plan[state.period - 1] - observed_sales))
    return SimulationState(
        period=state.period + 1,
        plan=tuple(plan),
        stock=tuple(stock),
    )


def met_demand(stock: Sequence[float], demand: Sequence[float]) -> list[float]:
    """Stock minus demand per period; negative values mark unmet demand."""
    if len(stock) != len(demand):
        raise ValueError("Stock and demand must cover the same periods.")
    return [level - quantity for level, quantity in zip(stock, demand)]


def simulate_dynamic_replenishment(
    *,
    demand: Iterable[float],
    observed_sales: Iterable[float],
    initial_stock: float,
    config: PolicyConfig,
    baseline: Iterable[float] | None = None,
) -> SimulationResult:
    """Plan from history, then revise each period as observed sales arrive.

    Only periods with an observed sales value are revised; any later periods
    keep their baseline order.
    """
    demand_list = list(demand)
    sales_list = list(observed_sales)
    if not sales_list:
        raise ValueError("Observed sales must contain at least one period.")
    if len(sales_list) > len(demand_list):
        warnings.warn(
            f"Observed sales cover {len(sales_list)} periods but demand covers "
            f"{len(demand_list)}; extra sales are ignored.",
            stacklevel=2,
        )
        sales_list = sales_list[: len(demand_list)]
    if any(value < 0 for value in sales_list):
        raise ValueError("Observed sales cannot be negative.")

    state = start_simulation(demand_list, initial_stock, config, baseline)
    baseline_plan = state.plan
    snapshots: list[SimulationSnapshot] = []
    total_demand = 0.0
    total_shortage = 0.0

    for sales in sales_list:
        period = state.period
        starting_stock = state.current_stock
        state = advance(state, demand_list, sales, config)
        order = state.plan[period - 1]
        available = starting_stock + order
        shortage = max(0, sales - available)
        total_demand += sales
        total_shortage += shortage
        snapshots.append(
            SimulationSnapshot(
                period=period,
                historical_demand=demand_list[period - 1],
                observed_sales=sales,
                starting_stock=starting_stock,
                baseline_order=baseline_plan[period - 1],
                order=order,
                ending_stock=max(0, available - sales),
                shortage=shortage,
            )
        )

    total_fulfilled = total_demand - total_shortage
    fill_rate = total_fulfilled / total_demand if total_demand else 1.0
    summary = SimulationSummary(
        total_demand=total_demand,
        total_fulfilled=total_fulfilled,
        total_shortage=total_shortage,
        fill_rate=fill_rate,
        average_stock=sum(state.stock) / len(state.stock),
        total_ordered=sum(state.plan),
        baseline_total_ordered=sum(baseline_plan),
    )
    return SimulationResult(
        policy=config.policy_name,
        baseline=list(baseline_plan),
        plan=list(state.plan),
        stock=list(state.stock),
        snapshots=snapshots,
        summary=summary,
    )


def simulate_policies(
    *,
    demand: Iterable[float],
    observed_sales: Iterable[float],
    initial_stock: float,
    config: PolicyConfig,
) -> Mapping[str, SimulationResult]:
    """Run the same data through both replenishment policies."""
    demand_list = list(demand)
    sales_list = list(observed_sales)
    results: dict[str, SimulationResult] = {}
    for name, adjust_batch_size in (
        (POLICY_BATCH_SIZE, True),
        (POLICY_ORDER_FREQUENCY, False),
    ):
        results[name] = simulate_dynamic_replenishment(
            demand=demand_list,
            observed_sales=sales_list,
            initial_stock=initial_stock,
            config=config.with_policy(adjust_batch_size),
        )
    return results
