import pytest


@pytest.fixture
def cr_parameters():
    # Interior equilibrium at R* = m / (e * a) = 1, C* = r * (1 - R*/K) / a = 9
    return {"r": 1.0, "K": 10.0, "a": 0.1, "e": 0.5, "m": 0.05}


@pytest.fixture
def cr_state():
    return {"R": 5.0, "C": 1.0}


@pytest.fixture
def two_resource_parameters():
    # Symmetric resources, equilibrium at R1 = R2 = 1, C1 = 9
    return {
        "r1": 1.0, "r2": 1.0, "K1": 10.0, "K2": 10.0,
        "a11": 0.1, "a12": 0.1, "e11": 0.5, "e12": 0.5, "m1": 0.1,
    }


@pytest.fixture
def mccann_parameters():
    return {
        "r1": 1.0, "r2": 1.2, "K1": 10.0, "K2": 8.0,
        "a11": 0.8, "a12": 0.5, "a21": 0.4, "a22": 0.9,
        "e11": 0.5, "e12": 0.5, "e21": 0.5, "e22": 0.5,
        "w11": 0.6, "w12": 0.4, "w21": 0.3, "w22": 0.7,
        "h11": 0.5, "h12": 0.5, "h21": 0.5, "h22": 0.5,
        "m1": 0.1, "m2": 0.1,
    }
