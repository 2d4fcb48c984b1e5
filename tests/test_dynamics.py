import numpy as np
import pandas as pd
import pytest

import cr_dynamics as crd


@pytest.fixture
def sweep(cr_parameters):
    return pd.DataFrame([
        dict(cr_parameters),
        dict(cr_parameters, m=-1.0),          # unbounded consumer growth
        dict(cr_parameters, a=0.2, m=0.1),
        dict(cr_parameters, m=1.0),           # consumer cannot persist
    ])


def test_one_row_per_input(sweep, cr_state):
    results = crd.run_dynamics(sweep, [cr_state] * len(sweep), "MacArthur_1C_1R")
    assert len(results) == 4
    assert [r.steady for r in results] == [True, False, True, False]

    for result in results:
        if result.steady:
            assert np.isfinite(result.max_real_eigenvalue)
            assert result.max_real_eigenvalue < 0
        else:
            assert np.isnan(result.max_real_eigenvalue)
            assert np.isnan(result.max_imag_eigenvalue)
            assert result.message


def test_record_layout(sweep, cr_state):
    results = crd.run_dynamics(sweep, cr_state, "MacArthur_1C_1R")
    record = results[0].as_record()
    assert list(record) == ["r", "K", "a", "e", "m", "R", "C", "max_real_eigenvalue", "max_imag_eigenvalue"]
    # equilibrium replaces the initial guess
    assert record["R"] == pytest.approx(1.0, rel=1e-3)
    assert record["C"] == pytest.approx(9.0, rel=1e-3)
    assert results[0].initial_state == cr_state


def test_row_order_is_preserved(sweep, cr_state):
    forward = crd.run_dynamics(sweep, cr_state, "MacArthur_1C_1R")
    order = [2, 0, 3, 1]
    shuffled = crd.run_dynamics(sweep.iloc[order], cr_state, "MacArthur_1C_1R")
    for position, index in enumerate(order):
        expected = pd.Series(forward[index].as_record())
        actual = pd.Series(shuffled[position].as_record())
        pd.testing.assert_series_equal(actual, expected)


def test_dynamics_frame(sweep, cr_state):
    frame = crd.dynamics_frame(sweep, cr_state, "MacArthur_1C_1R", tolerance=1e-6)
    assert frame.shape == (4, 9)
    assert frame["max_real_eigenvalue"].isna().tolist() == [False, True, False, True]
    assert frame.loc[1, ["R", "C"]].isna().all()
    # a = 0.2, m = 0.1: R* = 1, C* = 4.5
    assert frame.loc[2, "C"] == pytest.approx(4.5, rel=1e-3)


def test_extra_columns_pass_through(cr_parameters, cr_state):
    rows = [dict(cr_parameters, temperature_C=15.0)]
    frame = crd.dynamics_frame(rows, cr_state, "MacArthur_1C_1R")
    assert frame.loc[0, "temperature_C"] == 15.0


def test_mismatched_rows(sweep, cr_state):
    with pytest.raises(ValueError):
        crd.run_dynamics(sweep, [cr_state] * 3, "MacArthur_1C_1R")


def test_bad_row_fails_before_solving(sweep, cr_state):
    rows = sweep.to_dict(orient="records")
    del rows[2]["e"]
    with pytest.raises(crd.ModelSpecificationError, match="Row 2"):
        crd.run_dynamics(rows, cr_state, "MacArthur_1C_1R")


def test_multi_species_sweep(mccann_parameters):
    state = {"R1": 5.0, "R2": 5.0, "C1": 1.0, "C2": 1.0}
    rows = [mccann_parameters, dict(mccann_parameters, m1=-1.0)]
    results = crd.run_dynamics(rows, state, "McCann_2C_2R")
    assert len(results) == 2
    assert not results[1].steady
    assert set(results[0].equilibrium.state) == set(state)
