"""Periodic replenishment planning with dynamic order revision."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    from ._version import version as __version__
except ModuleNotFoundError:
    try:
        __version__ = _dist_version("restock")
    except PackageNotFoundError:
        __version__ = "0.0.0"

from .adjustment import adjust_order
from .exceptions import InvalidConfigurationError, PeriodOutOfRangeError
from .io import (
    DemandObservationRow,
    demand_rows_from_dataframe,
    iter_demand_rows_from_csv,
    simulation_result_to_dataframe,
    simulation_snapshots_to_dicts,
    split_demand_rows,
)
from .planning import PlanResult, plan_orders, plan_orders_with_stock, stock_trajectory
from .policies import (
    POLICY_BATCH_SIZE,
    POLICY_ORDER_FREQUENCY,
    BatchSizePolicy,
    OrderFrequencyPolicy,
    PolicyConfig,
    ReplenishmentPolicy,
)
from .scenarios import Scenario, default_scenario
from .simulation import (
    SimulationResult,
    SimulationSnapshot,
    SimulationState,
    SimulationSummary,
    advance,
    met_demand,
    simulate_dynamic_replenishment,
    simulate_policies,
    start_simulation,
)
try:
    from .plotting import (
        plot_demand_comparison,
        plot_met_demand,
        plot_order_plans,
        plot_simulation_result,
        plot_stock_levels,
    )
    _HAS_PLOTTING = True
except ModuleNotFoundError:
    plot_demand_comparison = None
    plot_met_demand = None
    plot_order_plans = None
    plot_simulation_result = None
    plot_stock_levels = None
    _HAS_PLOTTING = False

__all__ = [
    "__version__",
    "InvalidConfigurationError",
    "PeriodOutOfRangeError",
    "POLICY_BATCH_SIZE",
    "POLICY_ORDER_FREQUENCY",
    "PolicyConfig",
    "ReplenishmentPolicy",
    "BatchSizePolicy",
    "OrderFrequencyPolicy",
    "PlanResult",
    "plan_orders",
    "plan_orders_with_stock",
    "stock_trajectory",
    "adjust_order",
    "SimulationState",
    "SimulationSnapshot",
    "SimulationSummary",
    "SimulationResult",
    "start_simulation",
    "advance",
    "met_demand",
    "simulate_dynamic_replenishment",
    "simulate_policies",
    "DemandObservationRow",
    "iter_demand_rows_from_csv",
    "demand_rows_from_dataframe",
    "split_demand_rows",
    "simulation_snapshots_to_dicts",
    "simulation_result_to_dataframe",
    "Scenario",
    "default_scenario",
]

if _HAS_PLOTTING:
    __all__.extend(
        [
            "plot_order_plans",
            "plot_demand_comparison",
            "plot_stock_levels",
            "plot_met_demand",
            "plot_simulation_result",
        ]
    )
