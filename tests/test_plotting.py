import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from restock import default_scenario, simulate_dynamic_replenishment
from restock.plotting import (
    plot_demand_comparison,
    plot_met_demand,
    plot_order_plans,
    plot_simulation_result,
    plot_stock_levels,
)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def _scenario_result():
    scenario = default_scenario()
    return scenario, simulate_dynamic_replenishment(
        demand=scenario.historical_demand,
        observed_sales=scenario.observed_sales,
        initial_stock=scenario.initial_stock,
        config=scenario.config,
    )


def test_plot_order_plans_draws_both_plans():
    ax = plot_order_plans([20, 20, 20], [20, 40, 10])

    assert len(ax.lines) == 2
    assert list(ax.lines[1].get_ydata()) == [20, 40, 10]
    assert ax.get_title() == "Previous and Updated Order Reports"


def test_plot_demand_comparison_uses_given_axes():
    _, ax = plt.subplots()
    returned = plot_demand_comparison([10, 20], [12, 18], ax=ax, title="Demand")

    assert returned is ax
    assert ax.get_title() == "Demand"


def test_plot_stock_levels_limits_to_max_stock_held():
    ax = plot_stock_levels([10, 10, 20], [5, 20, 10], [20, 15, 25], max_stock_held=70)

    assert len(ax.lines) == 3
    assert ax.get_ylim() == (0, 80)


def test_plot_met_demand_draws_reference_line():
    ax = plot_met_demand([20, 15], [10, 30])

    assert list(ax.lines[0].get_ydata()) == [10, -15]
    assert len(ax.lines) == 2


def test_plot_simulation_result_builds_four_panels():
    scenario, result = _scenario_result()

    fig = plot_simulation_result(result, max_stock_held=scenario.config.max_stock_held)

    assert len(fig.axes) == 4
    assert fig.get_suptitle() == "Adjust Batch Size"
