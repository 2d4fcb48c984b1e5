import numpy as np
import pandas as pd
from typing import Mapping, NamedTuple, Union

from .constants import JACOBIAN_STEP
from .logger import logger
from .models import get_model
from .steady_state import EquilibriumResult


class EigenSummary(NamedTuple):
    max_real: float
    max_imag: float


UNDEFINED = EigenSummary(np.nan, np.nan)


def jacobian(
    state: Mapping[str, float],
    model,
    parameters: Mapping[str, float],
    step: float = JACOBIAN_STEP
) -> pd.DataFrame:
    """
    Finite difference Jacobian of the model at state.
    J[i, j] = d(dy_i/dt) / dy_j, by central differences with a perturbation
    of step * max(1, |y_j|).

    Returns
    -------
    pd.DataFrame
        Square matrix indexed by state name; rows are rates of change,
        columns are state variables.
    """
    variant = get_model(model)
    variant.validate(parameters, state)

    system_derivative = variant.array_field(parameters)
    y = variant.state_vector(state)
    n = len(y)

    J = np.zeros((n, n))
    with np.errstate(all="ignore"):
        for j in range(n):
            h = step * max(1.0, abs(y[j]))
            y_up = y.copy()
            y_down = y.copy()
            y_up[j] += h
            y_down[j] -= h
            J[:, j] = (system_derivative(0.0, y_up) - system_derivative(0.0, y_down)) / (2 * h)

    names = list(variant.state_names)
    return pd.DataFrame(J, index=names, columns=names)


def eigenvalues(matrix: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
    return np.linalg.eigvals(np.asarray(matrix, dtype=float))


def eigen_summary(matrix: Union[pd.DataFrame, np.ndarray]) -> EigenSummary:
    """
    Largest real part and largest imaginary part of the eigenvalues, taken
    independently of each other.

    For dy/dt = f(y) a negative max_real means the equilibrium is locally
    stable, a positive one unstable. A nonzero max_imag means the approach
    to (or departure from) the equilibrium oscillates.
    """
    values = eigenvalues(matrix)
    return EigenSummary(float(np.max(values.real)), float(np.max(values.imag)))


def stability_of(
    result: EquilibriumResult,
    model,
    parameters: Mapping[str, float],
    step: float = JACOBIAN_STEP
) -> EigenSummary:
    """
    Eigen summary at a solver result. Failed results are not analysed and
    give NaN for both fields.
    """
    if not result.steady:
        return UNDEFINED

    J = jacobian(result.state, model, parameters, step=step)
    if not np.all(np.isfinite(J.values)):
        logger.debug('Non-finite Jacobian at %s', result.state)
        return UNDEFINED
    return eigen_summary(J)


def classify(summary: EigenSummary, zero_tolerance: float = 1e-9) -> str:
    """Label an eigen summary as stable, unstable, neutral or undefined."""
    if np.isnan(summary.max_real):
        return "undefined"
    if summary.max_real < -zero_tolerance:
        return "stable"
    if summary.max_real > zero_tolerance:
        return "unstable"
    return "neutral"


def is_oscillatory(summary: EigenSummary, zero_tolerance: float = 1e-9) -> bool:
    return bool(summary.max_imag > zero_tolerance)
