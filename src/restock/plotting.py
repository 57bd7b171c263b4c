"""Plotting helpers for order plans and stock simulations."""

from __future__ import annotations

from collections.abc import Sequence

import matplotlib.pyplot as plt
import pandas as pd

from .simulation import SimulationResult, met_demand


def _period_frame(**series: Sequence[float]) -> pd.DataFrame:
    lengths = {len(values) for values in series.values()}
    if len(lengths) > 1:
        # Stock may stop short of the horizon when sales are partial.
        length = max(lengths)
        series = {
            name: list(values) + [float("nan")] * (length - len(values))
            for name, values in series.items()
        }
    else:
        length = lengths.pop() if lengths else 0
    frame = pd.DataFrame(series)
    frame.insert(0, "period", range(1, length + 1))
    return frame


def _finish_axes(ax: plt.Axes, title: str, ylabel: str) -> plt.Axes:
    ax.set_title(title)
    ax.set_xlabel("Order Period")
    ax.set_ylabel(ylabel)
    ax.grid(True)
    ax.legend()
    return ax


def plot_order_plans(
    previous: Sequence[float],
    updated: Sequence[float],
    *,
    ax: plt.Axes | None = None,
    title: str | None = None,
) -> plt.Axes:
    """Plot a baseline order plan against its revised version."""
    data = _period_frame(previous=previous, updated=updated)
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(data["period"], data["previous"], "b-o", label="Previous Order Report")
    ax.plot(data["period"], data["updated"], "r-o", label="Updated Order Report")
    return _finish_axes(
        ax, title or "Previous and Updated Order Reports", "Quantity of Products Ordered"
    )


def plot_demand_comparison(
    historical: Sequence[float],
    observed: Sequence[float],
    *,
    ax: plt.Axes | None = None,
    title: str | None = None,
) -> plt.Axes:
    data = _period_frame(historical=historical, observed=observed)
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(data["period"], data["historical"], "c-s", label="Historical Data")
    ax.plot(data["period"], data["observed"], "m-s", label="Current Data")
    return _finish_axes(
        ax, title or "Historical and Current Data", "Quantity of Products Ordered"
    )


def plot_stock_levels(
    demand: Sequence[float],
    orders: Sequence[float],
    stock: Sequence[float],
    *,
    max_stock_held: float | None = None,
    ax: plt.Axes | None = None,
    title: str | None = None,
) -> plt.Axes:
    """Plot demand, orders placed, and the resulting stock per period."""
    data = _period_frame(demand=demand, orders=orders, stock=stock)
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(data["period"], data["demand"], "b-o", label="Demand")
    ax.plot(data["period"], data["orders"], "r-s", label="Order Report")
    ax.plot(data["period"], data["stock"], "g-^", label="Stock Report")
    if max_stock_held is not None and len(data):
        ax.set_xlim(1, max(len(data), 2))
        ax.set_ylim(0, max_stock_held + 10)
    return _finish_axes(
        ax, title or "Demand, Orders, and Stock Levels", "Quantity of Products"
    )


def plot_met_demand(
    stock: Sequence[float],
    demand: Sequence[float],
    *,
    ax: plt.Axes | None = None,
    title: str | None = None,
) -> plt.Axes:
    """Plot stock minus demand with a reference line where stock meets demand."""
    data = _period_frame(met_demand=met_demand(stock, demand))
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(data["period"], data["met_demand"], "k-*", label="Demand Fulfillment")
    ax.axhline(0, color="r", linestyle="--", label="Stock == Demand")
    return _finish_axes(
        ax, title or "Met Demand Analysis", "Stock - Demand Difference"
    )


def plot_simulation_result(
    result: SimulationResult,
    *,
    max_stock_held: float | None = None,
    title: str | None = None,
) -> plt.Figure:
    """Plot plan revision, demand comparison, stock levels and met demand."""
    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    periods = len(result.snapshots)
    historical = [snapshot.historical_demand for snapshot in result.snapshots]
    observed = [snapshot.observed_sales for snapshot in result.snapshots]
    starting_stock = [snapshot.starting_stock for snapshot in result.snapshots]
    plot_order_plans(result.baseline, result.plan, ax=axes[0][0])
    plot_demand_comparison(historical, observed, ax=axes[0][1])
    plot_stock_levels(
        observed,
        list(result.plan)[:periods],
        starting_stock,
        max_stock_held=max_stock_held,
        ax=axes[1][0],
    )
    plot_met_demand(starting_stock, observed, ax=axes[1][1])
    policy_label = result.policy.replace("_", " ").title()
    fig.suptitle(title or f"Adjust {policy_label}")
    fig.tight_layout()
    return fig
