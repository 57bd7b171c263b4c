import csv

import pandas as pd
import pytest

from restock import (
    DemandObservationRow,
    PolicyConfig,
    demand_rows_from_dataframe,
    iter_demand_rows_from_csv,
    simulate_dynamic_replenishment,
    simulate_policies,
    simulation_result_to_dataframe,
    simulation_snapshots_to_dicts,
    split_demand_rows,
)


def _write_csv(path, header, rows):
    with open(path, "w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        writer.writerows(rows)


def _config():
    return PolicyConfig(
        order_size=20,
        min_order_size=5,
        max_stock_held=70,
        buffer_stock=5,
        max_error=5,
    )


def test_iter_demand_rows_from_csv(tmp_path):
    path = tmp_path / "demand.csv"
    _write_csv(
        path,
        ["period", "historical_demand", "observed_sales"],
        [
            [1, 10, 10],
            [2, 10, 30],
            [3, 20, ""],
            [4, 10, ""],
        ],
    )

    rows = list(iter_demand_rows_from_csv(str(path)))

    assert rows[0] == DemandObservationRow(period=1, historical_demand=10, observed_sales=10)
    assert rows[2].observed_sales is None
    demand, observed = split_demand_rows(rows)
    assert demand == [10, 10, 20, 10]
    assert observed == [10, 30]


def test_iter_demand_rows_without_observed_column(tmp_path):
    path = tmp_path / "history.csv"
    _write_csv(path, ["period", "historical_demand"], [[1, 10.5], [2, 12]])

    rows = list(iter_demand_rows_from_csv(str(path)))

    assert [row.historical_demand for row in rows] == [10.5, 12]
    assert all(row.observed_sales is None for row in rows)


def test_iter_demand_rows_warns_on_missing_columns(tmp_path):
    path = tmp_path / "missing.csv"
    _write_csv(path, ["period", "observed_sales"], [[1, 10]])

    with pytest.warns(UserWarning, match="Missing required columns"):
        with pytest.raises(ValueError, match="historical_demand"):
            list(iter_demand_rows_from_csv(str(path)))


def test_split_demand_rows_orders_by_period():
    rows = [
        DemandObservationRow(period=2, historical_demand=20, observed_sales=25),
        DemandObservationRow(period=1, historical_demand=10, observed_sales=12),
    ]

    assert split_demand_rows(rows) == ([10, 20], [12, 25])


def test_split_demand_rows_requires_contiguous_periods():
    rows = [
        DemandObservationRow(period=1, historical_demand=10),
        DemandObservationRow(period=3, historical_demand=10),
    ]

    with pytest.raises(ValueError, match="Missing periods: 2"):
        split_demand_rows(rows)


def test_split_demand_rows_rejects_duplicates_and_zero_period():
    with pytest.raises(ValueError, match="Duplicate period"):
        split_demand_rows(
            [
                DemandObservationRow(period=1, historical_demand=10),
                DemandObservationRow(period=1, historical_demand=12),
            ]
        )
    with pytest.raises(ValueError, match="start at 1"):
        split_demand_rows(
            [
                DemandObservationRow(period=0, historical_demand=10),
                DemandObservationRow(period=1, historical_demand=12),
            ]
        )


def test_demand_rows_from_pandas_dataframe():
    df = pd.DataFrame(
        {
            "period": [1, 2, 3],
            "historical_demand": [10, 20, 10],
            "observed_sales": [12, float("nan"), 9],
        }
    )

    rows = demand_rows_from_dataframe(df)

    assert [row.period for row in rows] == [1, 2, 3]
    assert rows[1].observed_sales is None
    assert split_demand_rows(rows) == ([10, 20, 10], [12])


def test_demand_rows_from_polars_dataframe():
    pl = pytest.importorskip("polars")
    df = pl.DataFrame(
        {
            "period": [1, 2],
            "historical_demand": [10, 20],
            "observed_sales": [15, None],
        }
    )

    rows = demand_rows_from_dataframe(df)

    assert split_demand_rows(rows) == ([10, 20], [15])


def test_demand_rows_from_dataframe_warns_on_missing_columns():
    df = pd.DataFrame({"period": [1, 2], "sales": [10, 20]})

    with pytest.warns(UserWarning, match="Missing required columns"):
        with pytest.raises(ValueError):
            demand_rows_from_dataframe(df)


def test_simulation_result_to_dataframe():
    result = simulate_dynamic_replenishment(
        demand=[10, 10, 20, 10],
        observed_sales=[10, 30, 20, 10],
        initial_stock=20,
        config=_config(),
    )

    rows = simulation_snapshots_to_dicts(result)
    df = simulation_result_to_dataframe(result)

    assert rows[1]["order"] == 40
    assert rows[1]["met_demand"] == -15
    assert list(df["period"]) == [1, 2, 3, 4]
    assert list(df["order"]) == [5, 40, 10, 20]
    assert set(df["policy"]) == {"batch_size"}


def test_simulation_result_mapping_to_dataframe():
    results = simulate_policies(
        demand=[10, 10, 20, 10],
        observed_sales=[10, 30, 20, 10],
        initial_stock=20,
        config=_config(),
    )

    df = simulation_result_to_dataframe(results)

    assert len(df) == 8
    assert set(df["policy"]) == {"batch_size", "order_frequency"}


def test_simulation_result_to_dataframe_rejects_unknown_library():
    result = simulate_dynamic_replenishment(
        demand=[10, 10],
        observed_sales=[10, 10],
        initial_stock=20,
        config=_config(),
    )

    with pytest.raises(ValueError, match="pandas"):
        simulation_result_to_dataframe(result, library="arrow")
