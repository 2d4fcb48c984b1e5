"""
Consumer-resource vector fields.

Every model has the signature ``model(time, state, parameters) -> dict`` and
returns rates of change keyed like ``state``. Time is accepted for use with
integrators but the models are autonomous. Values are promoted to numpy
float64 so that zero or negative abundances give inf/nan instead of raising.

Resources grow logistically, r * R * (1 - R / K), minus consumption.
Consumers grow as C * (sum(e * consumption) - m).
"""
import numpy as np
from typing import Dict, Mapping

from .core import ModelVariant, ModelSpecificationError


def _values(mapping: Mapping[str, float], *names: str):
    return tuple(np.float64(mapping[name]) for name in names)


def _logistic(r, K, R):
    with np.errstate(divide="ignore", invalid="ignore"):
        return r * R * (1 - R / K)


def _preference(w1, R1, w2, R2):
    # share of foraging effort on each resource, McCann 2005
    total = w1 * R1 + w2 * R2
    return (w1 * R1) / total, (w2 * R2) / total


def _type2_pair(W1, a1, h1, R1, W2, a2, h2, R2):
    # multi-resource type-II functional response
    denominator = 1 + W1 * a1 * h1 * R1 + W2 * a2 * h2 * R2
    return (W1 * a1 * R1) / denominator, (W2 * a2 * R2) / denominator


#### Single resource ####

def logistic_1R(time, state, parameters) -> Dict[str, float]:
    """Logistic resource growth without consumers."""
    R, = _values(state, "R")
    r, K = _values(parameters, "r", "K")
    return {"R": _logistic(r, K, R)}


def MacArthur_1C_1R(time, state, parameters) -> Dict[str, float]:
    """One consumer on one logistic resource, linear (type-I) functional response."""
    R, C = _values(state, "R", "C")
    r, K, a, e, m = _values(parameters, "r", "K", "a", "e", "m")

    CRfxn = a * R

    return {
        "R": _logistic(r, K, R) - C * CRfxn,
        "C": C * (e * CRfxn - m),
    }


def RosenzweigMacArthur_1C_1R(time, state, parameters) -> Dict[str, float]:
    """One consumer on one logistic resource with handling time h (type-II)."""
    R, C = _values(state, "R", "C")
    r, K, a, h, e, m = _values(parameters, "r", "K", "a", "h", "e", "m")

    with np.errstate(divide="ignore", invalid="ignore"):
        CRfxn = a * R / (1 + a * h * R)

    return {
        "R": _logistic(r, K, R) - C * CRfxn,
        "C": C * (e * CRfxn - m),
    }


#### MacArthur 1972, Geographical Ecology ####

def MacArthur_1C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1 = _values(state, "R1", "R2", "C1")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, e11, e12, m1 = _values(parameters, "a11", "a12", "e11", "e12", "m1")

    C1R1fxn = a11 * R1
    C1R2fxn = a12 * R2

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
    }


def MacArthur_2C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1, C2 = _values(state, "R1", "R2", "C1", "C2")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, a21, a22 = _values(parameters, "a11", "a12", "a21", "a22")
    e11, e12, e21, e22 = _values(parameters, "e11", "e12", "e21", "e22")
    m1, m2 = _values(parameters, "m1", "m2")

    C1R1fxn = a11 * R1
    C1R2fxn = a12 * R2
    C2R1fxn = a21 * R1
    C2R2fxn = a22 * R2

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn - C2 * C2R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn - C2 * C2R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
        "C2": C2 * (e21 * C2R1fxn + e22 * C2R2fxn - m2),
    }


#### Lawlor and Smith 1976, Am Nat ####

# MacArthur model with habitat preference: resources occupy distinct habitats
# and consumer i spends a fixed proportion w_ij of its time foraging in
# habitat j. Usually w_ij = 1 - w_ii, but the weights are left general.

def LawlorSmith_1C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1 = _values(state, "R1", "R2", "C1")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, e11, e12, m1 = _values(parameters, "a11", "a12", "e11", "e12", "m1")
    w11, w12 = _values(parameters, "w11", "w12")

    C1R1fxn = w11 * a11 * R1
    C1R2fxn = w12 * a12 * R2

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
    }


def LawlorSmith_2C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1, C2 = _values(state, "R1", "R2", "C1", "C2")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, a21, a22 = _values(parameters, "a11", "a12", "a21", "a22")
    e11, e12, e21, e22 = _values(parameters, "e11", "e12", "e21", "e22")
    w11, w12, w21, w22 = _values(parameters, "w11", "w12", "w21", "w22")
    m1, m2 = _values(parameters, "m1", "m2")

    C1R1fxn = w11 * a11 * R1
    C1R2fxn = w12 * a12 * R2
    C2R1fxn = w21 * a21 * R1
    C2R2fxn = w22 * a22 * R2

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn - C2 * C2R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn - C2 * C2R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
        "C2": C2 * (e21 * C2R1fxn + e22 * C2R2fxn - m2),
    }


#### McCann 2005 ####

# Preference for each resource follows its weighted share of abundance,
# W_ij = w_ij * R_j / sum_k(w_ik * R_k), feeding a multi-resource type-II
# functional response.

def McCann_1C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1 = _values(state, "R1", "R2", "C1")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, e11, e12, m1 = _values(parameters, "a11", "a12", "e11", "e12", "m1")
    w11, w12, h11, h12 = _values(parameters, "w11", "w12", "h11", "h12")

    with np.errstate(divide="ignore", invalid="ignore"):
        W11, W12 = _preference(w11, R1, w12, R2)
        C1R1fxn, C1R2fxn = _type2_pair(W11, a11, h11, R1, W12, a12, h12, R2)

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
    }


def McCann_2C_2R(time, state, parameters) -> Dict[str, float]:
    R1, R2, C1, C2 = _values(state, "R1", "R2", "C1", "C2")
    r1, r2, K1, K2 = _values(parameters, "r1", "r2", "K1", "K2")
    a11, a12, a21, a22 = _values(parameters, "a11", "a12", "a21", "a22")
    e11, e12, e21, e22 = _values(parameters, "e11", "e12", "e21", "e22")
    w11, w12, w21, w22 = _values(parameters, "w11", "w12", "w21", "w22")
    h11, h12, h21, h22 = _values(parameters, "h11", "h12", "h21", "h22")
    m1, m2 = _values(parameters, "m1", "m2")

    with np.errstate(divide="ignore", invalid="ignore"):
        W11, W12 = _preference(w11, R1, w12, R2)
        W21, W22 = _preference(w21, R1, w22, R2)
        C1R1fxn, C1R2fxn = _type2_pair(W11, a11, h11, R1, W12, a12, h12, R2)
        C2R1fxn, C2R2fxn = _type2_pair(W21, a21, h21, R1, W22, a22, h22, R2)

    return {
        "R1": _logistic(r1, K1, R1) - C1 * C1R1fxn - C2 * C2R1fxn,
        "R2": _logistic(r2, K2, R2) - C1 * C1R2fxn - C2 * C2R2fxn,
        "C1": C1 * (e11 * C1R1fxn + e12 * C1R2fxn - m1),
        "C2": C2 * (e21 * C2R1fxn + e22 * C2R2fxn - m2),
    }


# --- Registry ---

_ONE_C_TWO_R = ("r1", "r2", "K1", "K2", "a11", "a12", "e11", "e12", "m1")
_TWO_C_TWO_R = ("r1", "r2", "K1", "K2", "a11", "a12", "a21", "a22",
                "e11", "e12", "e21", "e22", "m1", "m2")

MODELS: Dict[str, ModelVariant] = {
    variant.name: variant for variant in (
        ModelVariant("logistic_1R", ("R",), ("r", "K"), logistic_1R,
                     "logistic resource growth"),
        ModelVariant("MacArthur_1C_1R", ("R", "C"), ("r", "K", "a", "e", "m"), MacArthur_1C_1R,
                     "1 consumer x 1 resource, type-I"),
        ModelVariant("RosenzweigMacArthur_1C_1R", ("R", "C"), ("r", "K", "a", "h", "e", "m"),
                     RosenzweigMacArthur_1C_1R, "1 consumer x 1 resource, type-II"),
        ModelVariant("MacArthur_1C_2R", ("R1", "R2", "C1"), _ONE_C_TWO_R, MacArthur_1C_2R,
                     "1 consumer x 2 resources, type-I"),
        ModelVariant("MacArthur_2C_2R", ("R1", "R2", "C1", "C2"), _TWO_C_TWO_R, MacArthur_2C_2R,
                     "2 consumers x 2 resources, type-I"),
        ModelVariant("LawlorSmith_1C_2R", ("R1", "R2", "C1"), _ONE_C_TWO_R + ("w11", "w12"),
                     LawlorSmith_1C_2R, "1 consumer x 2 resources, fixed habitat preference"),
        ModelVariant("LawlorSmith_2C_2R", ("R1", "R2", "C1", "C2"),
                     _TWO_C_TWO_R + ("w11", "w12", "w21", "w22"),
                     LawlorSmith_2C_2R, "2 consumers x 2 resources, fixed habitat preference"),
        ModelVariant("McCann_1C_2R", ("R1", "R2", "C1"),
                     _ONE_C_TWO_R + ("w11", "w12", "h11", "h12"),
                     McCann_1C_2R, "1 consumer x 2 resources, type-II with adaptive preference"),
        ModelVariant("McCann_2C_2R", ("R1", "R2", "C1", "C2"),
                     _TWO_C_TWO_R + ("w11", "w12", "w21", "w22", "h11", "h12", "h21", "h22"),
                     McCann_2C_2R, "2 consumers x 2 resources, type-II with adaptive preference"),
    )
}


def get_model(model) -> ModelVariant:
    """
    Resolves a model variant from its name. A ModelVariant is returned as is.
    """
    if isinstance(model, ModelVariant):
        return model
    try:
        return MODELS[model]
    except KeyError:
        raise ModelSpecificationError(
            f"Unknown model {model!r}, expected one of: {', '.join(MODELS)}"
        ) from None
