import warnings

import numpy as np
import pytest

import cr_dynamics as crd
from cr_dynamics import models


def _unit_inputs(variant):
    state = {name: 1.0 + 0.5 * i for i, name in enumerate(variant.state_names)}
    parameters = {name: 0.5 for name in variant.parameter_names}
    return state, parameters


@pytest.mark.parametrize("name", sorted(crd.MODELS))
def test_output_keys_match_state(name):
    variant = crd.get_model(name)
    state, parameters = _unit_inputs(variant)
    rates = variant(0.0, state, parameters)
    assert set(rates) == set(variant.state_names)
    assert all(np.isfinite(value) for value in rates.values())


@pytest.mark.parametrize("name", sorted(crd.MODELS))
def test_models_are_pure(name):
    variant = crd.get_model(name)
    state, parameters = _unit_inputs(variant)
    state_copy, parameters_copy = dict(state), dict(parameters)
    first = variant(0.0, state, parameters)
    second = variant(5.0, state, parameters)
    assert state == state_copy
    assert parameters == parameters_copy
    assert first == second


@pytest.mark.parametrize("name", sorted(crd.MODELS))
def test_zero_and_negative_abundance_do_not_raise(name):
    variant = crd.get_model(name)
    _, parameters = _unit_inputs(variant)
    variant(0.0, {n: 0.0 for n in variant.state_names}, parameters)
    variant(0.0, {n: -1.0 for n in variant.state_names}, parameters)


def test_macarthur_1c_1r_rates(cr_parameters, cr_state):
    rates = models.MacArthur_1C_1R(0.0, cr_state, cr_parameters)
    # dR = 1 * 5 * (1 - 5/10) - 1 * 0.1 * 5, dC = 1 * (0.5 * 0.1 * 5 - 0.05)
    assert rates["R"] == pytest.approx(2.0)
    assert rates["C"] == pytest.approx(0.2)


def test_rosenzweig_macarthur_without_handling_time_is_type_one(cr_parameters, cr_state):
    type_one = models.MacArthur_1C_1R(0.0, cr_state, cr_parameters)
    type_two = models.RosenzweigMacArthur_1C_1R(0.0, cr_state, dict(cr_parameters, h=0.0))
    assert type_two == pytest.approx(type_one)

    saturated = models.RosenzweigMacArthur_1C_1R(0.0, cr_state, dict(cr_parameters, h=2.0))
    assert saturated["C"] < type_one["C"]


def test_lawlor_smith_with_full_preference_is_macarthur(two_resource_parameters):
    state = {"R1": 3.0, "R2": 4.0, "C1": 2.0}
    parameters = dict(two_resource_parameters, w11=1.0, w12=1.0)
    assert models.LawlorSmith_1C_2R(0.0, state, parameters) == pytest.approx(
        models.MacArthur_1C_2R(0.0, state, parameters)
    )


def test_mccann_preference_share(two_resource_parameters):
    # Equal weights on equally abundant resources split effort in half, which
    # without handling time matches a fixed preference of 0.5.
    state = {"R1": 2.0, "R2": 2.0, "C1": 1.5}
    mccann = dict(two_resource_parameters, w11=1.0, w12=1.0, h11=0.0, h12=0.0)
    lawlor = dict(two_resource_parameters, w11=0.5, w12=0.5)
    assert models.McCann_1C_2R(0.0, state, mccann) == pytest.approx(
        models.LawlorSmith_1C_2R(0.0, state, lawlor)
    )


def test_mccann_type_two_response(mccann_parameters):
    state = {"R1": 2.0, "R2": 1.0, "C1": 1.0, "C2": 0.0}
    p = mccann_parameters
    W11 = p["w11"] * 2.0 / (p["w11"] * 2.0 + p["w12"] * 1.0)
    W12 = 1 - W11
    denominator = 1 + W11 * p["a11"] * p["h11"] * 2.0 + W12 * p["a12"] * p["h12"] * 1.0
    C1R1 = W11 * p["a11"] * 2.0 / denominator
    C1R2 = W12 * p["a12"] * 1.0 / denominator
    rates = models.McCann_2C_2R(0.0, state, p)
    assert rates["R1"] == pytest.approx(p["r1"] * 2.0 * (1 - 2.0 / p["K1"]) - C1R1)
    assert rates["C1"] == pytest.approx(p["e11"] * C1R1 + p["e12"] * C1R2 - p["m1"])
    assert rates["C2"] == 0.0


def test_mccann_without_resources_gives_nan(mccann_parameters):
    rates = models.McCann_2C_2R(0.0, {"R1": 0.0, "R2": 0.0, "C1": 1.0, "C2": 1.0}, mccann_parameters)
    assert np.isnan(rates["C1"])


def test_validate_reports_missing_parameters(cr_parameters, cr_state):
    variant = crd.get_model("MacArthur_1C_1R")
    del cr_parameters["m"]
    with pytest.raises(crd.ModelSpecificationError, match="missing parameters: m"):
        variant.validate(cr_parameters, cr_state)


def test_validate_rejects_foreign_state(cr_parameters):
    variant = crd.get_model("MacArthur_1C_1R")
    with pytest.raises(crd.ModelSpecificationError):
        variant.validate(cr_parameters, {"R1": 1.0, "C1": 1.0})


def test_validate_allows_extra_parameters(cr_parameters, cr_state):
    crd.get_model("MacArthur_1C_1R").validate(dict(cr_parameters, temperature_C=15.0), cr_state)


def test_unknown_model():
    with pytest.raises(crd.ModelSpecificationError):
        crd.get_model("Holling_3C_1R")


def test_array_field_follows_state_names(cr_parameters, cr_state):
    variant = crd.get_model("MacArthur_1C_1R")
    system_derivative = variant.array_field(cr_parameters)
    dydt = system_derivative(0.0, variant.state_vector(cr_state))
    assert np.allclose(dydt, [2.0, 0.2])


@pytest.mark.parametrize("name", ["logistic_1R", "MacArthur_1C_1R", "MacArthur_1C_2R", "MacArthur_2C_2R",
                                  "LawlorSmith_1C_2R", "LawlorSmith_2C_2R"])
def test_zero_carrying_capacity_is_silent(name):
    variant = crd.get_model(name)
    state, parameters = _unit_inputs(variant)
    for capacity in ("K", "K1", "K2"):
        if capacity in parameters:
            parameters[capacity] = 0.0
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        rates = variant(0.0, state, parameters)
    resource = variant.state_names[0]
    assert np.isinf(rates[resource])
