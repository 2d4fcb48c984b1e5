import numpy as np

from .constants import BOLTZMANN, ZERO_CELSIUS


def celsius_to_kelvin(celsius):
    return np.add(celsius, ZERO_CELSIUS)


def kelvin_to_celsius(kelvin):
    return np.subtract(kelvin, ZERO_CELSIUS)


def arrhenius(activation_energy, temperature):
    """
    Boltzmann-Arrhenius factor exp(-E_a / (k * T)).

    Parameters
    ----------
    activation_energy : float or np.ndarray
        Activation energy in eV.
    temperature : float or np.ndarray
        Temperature in Kelvin. Zero or negative values are not trapped.
    """
    return np.exp(-np.divide(activation_energy, BOLTZMANN * np.asarray(temperature, dtype=float)))


def scale(baseline, activation_energy, temperature):
    """
    Temperature adjusted rate from a temperature independent baseline.
    rate = baseline * exp(-E_a / (k * T))
    """
    return baseline * arrhenius(activation_energy, temperature)


def unscale(observed, activation_energy, reference_temperature):
    """
    Recovers the temperature independent baseline from a rate observed at
    the reference temperature. Inverse of scale().
    """
    return observed / arrhenius(activation_energy, reference_temperature)


# --- Intrinsic growth rate, r ---

def r0(r_base, E_B, T):
    """Baseline r from the r observed at temperature T (E_B: metabolic activation energy)."""
    return unscale(r_base, E_B, T)


def r_scaling(r0, E_B, T):
    return scale(r0, E_B, T)


# --- Carrying capacity, K ---
# K scales with the difference between the activation energies of resource
# supply (E_S) and metabolism (E_B).

def K0(K_base, E_B, E_S, T):
    return unscale(K_base, E_S - E_B, T)


def K_scaling(K0, E_B, E_S, T):
    return scale(K0, E_S - E_B, T)


# --- Mortality rate, m ---

def m0(m_base, E_m, T):
    return unscale(m_base, E_m, T)


def m_scaling(m0, E_m, T):
    return scale(m0, E_m, T)


# --- Attack rate, a ---

def _relative_velocity(v0_C, v0_R, E_vC, E_vR, T_C, T_R):
    # sqrt(v_C^2 + v_R^2) with each body velocity scaled at its own body temperature
    return np.sqrt(
        v0_C ** 2 * arrhenius(2 * E_vC, T_C) + v0_R ** 2 * arrhenius(2 * E_vR, T_R)
    )


def a0(a_base, v0_C, v0_R, E_vC, E_vR, T_C, T_R):
    """
    Baseline attack rate from the attack rate observed at the given consumer
    and resource body temperatures.

    Parameters
    ----------
    a_base : float
        Observed attack rate.
    v0_C, v0_R : float
        Baseline body velocities of consumer and resource.
    E_vC, E_vR : float
        Activation energies of consumer and resource body velocity (eV).
    T_C, T_R : float
        Consumer and resource body temperatures in Kelvin.
    """
    return a_base / _relative_velocity(v0_C, v0_R, E_vC, E_vR, T_C, T_R)


def a_scaling(a0, v0_C, v0_R, E_vC, E_vR, T_C, T_R):
    # Osmond et al. 2017 use v0 = 1 and E_v = 0.46 for both consumer and
    # resource, i.e. both are active foragers.
    return a0 * _relative_velocity(v0_C, v0_R, E_vC, E_vR, T_C, T_R)
