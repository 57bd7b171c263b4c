"""Helpers for loading demand inputs and tabulating simulation results."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import csv
from dataclasses import dataclass
import math
import warnings

from .simulation import SimulationResult


@dataclass(frozen=True)
class DemandObservationRow:
    period: int
    historical_demand: float
    observed_sales: float | None = None


def iter_demand_rows_from_csv(
    path: str,
    *,
    period_field: str = "period",
    historical_demand_field: str = "historical_demand",
    observed_sales_field: str = "observed_sales",
) -> Iterator[DemandObservationRow]:
    """Read one row per period; the observed sales column is optional."""
    with open(path, newline="") as handle:
        reader = csv.DictReader(handle)
        _validate_required_columns(
            reader.fieldnames,
            required_fields=[period_field, historical_demand_field],
            context="demand CSV",
        )
        for row in reader:
            yield DemandObservationRow(
                period=int(row[period_field]),
                historical_demand=_parse_number(row[historical_demand_field]),
                observed_sales=_parse_optional_number(row.get(observed_sales_field)),
            )


def demand_rows_from_dataframe(
    df,
    *,
    period_field: str = "period",
    historical_demand_field: str = "historical_demand",
    observed_sales_field: str = "observed_sales",
) -> list[DemandObservationRow]:
    """Convert a pandas or polars DataFrame into demand rows."""
    records = _rows_from_dataframe(df)
    fieldnames = list(records[0].keys()) if records else list(df.columns)
    _validate_required_columns(
        fieldnames,
        required_fields=[period_field, historical_demand_field],
        context="demand DataFrame",
    )
    rows: list[DemandObservationRow] = []
    for record in records:
        observed = record.get(observed_sales_field)
        rows.append(
            DemandObservationRow(
                period=int(record[period_field]),
                historical_demand=float(record[historical_demand_field]),
                observed_sales=None if _is_missing(observed) else float(observed),
            )
        )
    return rows


def split_demand_rows(
    rows: Iterable[DemandObservationRow],
) -> tuple[list[float], list[float]]:
    """Return the historical demand series and the observed sales received so far.

    Periods must run contiguously from 1. Observed sales stop at the first
    period without a value.
    """
    by_period: dict[int, DemandObservationRow] = {}
    for row in rows:
        if row.period in by_period:
            raise ValueError(f"Duplicate period {row.period}.")
        by_period[row.period] = row
    periods = _validate_periods(by_period)
    ordered = [by_period[period] for period in range(1, periods + 1)]
    demand = [row.historical_demand for row in ordered]
    observed: list[float] = []
    for row in ordered:
        if row.observed_sales is None:
            break
        observed.append(row.observed_sales)
    return demand, observed


def simulation_snapshots_to_dicts(
    result: SimulationResult,
) -> list[dict[str, str | int | float]]:
    return [
        {
            "policy": result.policy,
            "period": snapshot.period,
            "historical_demand": snapshot.historical_demand,
            "observed_sales": snapshot.observed_sales,
            "starting_stock": snapshot.starting_stock,
            "baseline_order": snapshot.baseline_order,
            "order": snapshot.order,
            "ending_stock": snapshot.ending_stock,
            "shortage": snapshot.shortage,
            "met_demand": snapshot.starting_stock - snapshot.observed_sales,
        }
        for snapshot in result.snapshots
    ]


def simulation_result_to_dataframe(
    result: SimulationResult | Mapping[str, SimulationResult],
    *,
    library: str = "pandas",
):
    """Convert one result, or a mapping of results per policy, into a DataFrame."""
    if isinstance(result, SimulationResult):
        data = simulation_snapshots_to_dicts(result)
    else:
        data = [
            entry
            for policy_result in result.values()
            for entry in simulation_snapshots_to_dicts(policy_result)
        ]
    if library == "pandas":
        try:
            import pandas as pd  # type: ignore
        except ModuleNotFoundError as exc:
            raise ModuleNotFoundError(
                "pandas is required for simulation_result_to_dataframe(library='pandas')."
            ) from exc
        return pd.DataFrame(data)
    if library == "polars":
        try:
            import polars as pl  # type: ignore
        except ModuleNotFoundError as exc:
            raise ModuleNotFoundError(
                "polars is required for simulation_result_to_dataframe(library='polars')."
            ) from exc
        return pl.DataFrame(data)
    raise ValueError("library must be 'pandas' or 'polars'.")


def _validate_periods(period_rows: Mapping[int, object]) -> int:
    if not period_rows:
        raise ValueError("No periods provided.")
    max_period = max(period_rows)
    expected = set(range(1, max_period + 1))
    unexpected = set(period_rows).difference(expected)
    if unexpected:
        unexpected_display = ", ".join(str(period) for period in sorted(unexpected))
        raise ValueError(f"Periods must start at 1: {unexpected_display}.")
    missing = expected.difference(period_rows.keys())
    if missing:
        missing_display = ", ".join(str(period) for period in sorted(missing))
        raise ValueError(f"Missing periods: {missing_display}.")
    return max_period


def _validate_required_columns(
    fieldnames: list[str] | None,
    *,
    required_fields: Iterable[str],
    context: str,
) -> None:
    if not fieldnames:
        warnings.warn(f"Missing header row for {context}.", stacklevel=2)
        raise ValueError(f"{context} is missing a header row.")
    field_set = set(fieldnames)
    missing_required = [field for field in required_fields if field not in field_set]
    if missing_required:
        missing_display = ", ".join(missing_required)
        warnings.warn(
            f"Missing required columns for {context}: {missing_display}.",
            stacklevel=2,
        )
        raise ValueError(
            f"{context} is missing required columns: {missing_display}."
        )


def _parse_number(value: str) -> float:
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


def _parse_optional_number(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return _parse_number(value)


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _rows_from_dataframe(df) -> list[dict[str, object]]:
    if hasattr(df, "to_dicts"):
        return df.to_dicts()  # type: ignore[no-any-return]
    if hasattr(df, "to_dict"):
        return df.to_dict(orient="records")  # type: ignore[no-any-return]
    raise TypeError("df must be a pandas or polars DataFrame.")
