import warnings
import numpy as np
from dataclasses import dataclass, replace
from scipy.integrate import solve_ivp
from scipy.optimize import root
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .constants import (
    ABUNDANCE_THRESHOLD,
    DEFAULT_HORIZON,
    DEFAULT_METHOD,
    DEFAULT_TOLERANCE,
)
from .core import ModelVariant
from .logger import logger
from .models import get_model

# Largest move, relative to the state magnitude, accepted when polishing a
# relaxed state with a root finder.
POLISH_RADIUS = 0.1

# Relaxation stops once max |dy/dt| falls to this fraction of the tolerance,
# so the stopping point is strictly inside it.
EVENT_FRACTION = 0.99


class EquilibriumStatus:
    STEADY = "steady"
    FAILED = "failed"


@dataclass(frozen=True)
class SolverSettings:
    """
    Configuration of the steady state search.

    horizon : float
        Time units to relax for before giving up.
    tolerance : float
        Steady state is reached once max |dy/dt| falls below this value.
    abundance_threshold : float or None
        Equilibria with any abundance below this value are reported as
        failed (infeasible). None keeps boundary and negative equilibria.
    method : str
        Integration method passed to scipy.integrate.solve_ivp.
    rtol, atol : float
        Integrator tolerances.
    polish : bool
        Refine the relaxed state with scipy.optimize.root.
    """
    horizon: float = DEFAULT_HORIZON
    tolerance: float = DEFAULT_TOLERANCE
    abundance_threshold: Optional[float] = ABUNDANCE_THRESHOLD
    method: str = DEFAULT_METHOD
    rtol: float = 1e-8
    atol: float = 1e-10
    polish: bool = True


def resolve_settings(
    settings: Optional[SolverSettings] = None,
    horizon: Optional[float] = None,
    tolerance: Optional[float] = None
) -> SolverSettings:
    """Explicit horizon and tolerance take precedence over settings."""
    settings = settings or SolverSettings()
    if horizon is not None:
        settings = replace(settings, horizon=horizon)
    if tolerance is not None:
        settings = replace(settings, tolerance=tolerance)
    if settings.horizon <= 0:
        raise ValueError(f"horizon must be positive, got {settings.horizon}")
    if settings.tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {settings.tolerance}")
    return settings


@dataclass(frozen=True)
class EquilibriumResult:
    """
    Outcome of a steady state search: the equilibrium state tagged "steady",
    or a state of NaNs tagged "failed" with the reason in message.
    """
    state: Dict[str, float]
    status: str
    message: str = ""
    time: float = np.nan

    @property
    def steady(self) -> bool:
        return self.status == EquilibriumStatus.STEADY

    def as_array(self, names: Optional[Sequence[str]] = None) -> np.ndarray:
        names = list(self.state) if names is None else names
        return np.array([self.state[name] for name in names], dtype=float)

    @classmethod
    def converged(cls, state: Mapping[str, float], time: float, message: str = "") -> "EquilibriumResult":
        return cls(dict(state), EquilibriumStatus.STEADY, message, time)

    @classmethod
    def failed(cls, state_names: Sequence[str], message: str) -> "EquilibriumResult":
        return cls({name: np.nan for name in state_names}, EquilibriumStatus.FAILED, message)


def simulate(
    model,
    parameters: Mapping[str, float],
    initial_state: Mapping[str, float],
    t_span: Tuple[float, float],
    t_eval: Optional[np.ndarray] = None,
    method: str = DEFAULT_METHOD,
    **kwargs: Any
):
    """
    Integrates a consumer-resource model over time.

    Parameters
    ----------
    model : str or ModelVariant
        Model name from cr_dynamics.models.MODELS or a ModelVariant.
    parameters : mapping
        Parameter set for the model.
    initial_state : mapping
        Initial abundance of every state variable.
    t_span : tuple
        (t_start, t_end) for the simulation.
    t_eval : np.ndarray, optional
        Times at which to store the computed solution.
    method : str, default "LSODA"
        Integration method to use.
    **kwargs
        Additional arguments passed to scipy.integrate.solve_ivp.

    Returns
    -------
    scipy.integrate._ivp.ivp.OdeResult
        The result object from solve_ivp. Rows of ``y`` follow
        ``model.state_names``.
    """
    variant = get_model(model)
    variant.validate(parameters, initial_state)

    system_derivative = variant.array_field(parameters)
    y0 = variant.state_vector(initial_state)

    return solve_ivp(
        system_derivative,
        t_span,
        y0,
        t_eval=t_eval,
        method=method,
        **kwargs
    )


def find_steady_state(
    initial_state: Mapping[str, float],
    model,
    parameters: Mapping[str, float],
    horizon: Optional[float] = None,
    tolerance: Optional[float] = None,
    settings: Optional[SolverSettings] = None
) -> EquilibriumResult:
    """
    Relaxes the model from initial_state until max |dy/dt| < tolerance.

    Missing parameters or mismatched state names raise
    ModelSpecificationError. Every numerical problem (no convergence within
    the horizon, integrator failure, overflow, infeasible equilibrium) is
    returned as a failed EquilibriumResult instead.
    """
    variant = get_model(model)
    variant.validate(parameters, initial_state)
    settings = resolve_settings(settings, horizon, tolerance)

    try:
        with np.errstate(all="ignore"), warnings.catch_warnings():
            warnings.simplefilter("ignore")
            result = _relax(variant, parameters, initial_state, settings)
    except Exception as e:
        result = EquilibriumResult.failed(variant.state_names, f"exception: {e}")

    if not result.steady:
        logger.debug('No steady state for %s with %s: %s', variant.name, dict(parameters), result.message)
    return result


def _max_rate(system_derivative, y) -> float:
    return float(np.max(np.abs(system_derivative(0.0, y))))


def _relax(
    variant: ModelVariant,
    parameters: Mapping[str, float],
    initial_state: Mapping[str, float],
    settings: SolverSettings
) -> EquilibriumResult:
    system_derivative = variant.array_field(parameters)
    y0 = variant.state_vector(initial_state)
    tolerance = settings.tolerance

    if _max_rate(system_derivative, y0) < tolerance:
        y_steady, t_steady = y0, 0.0
    else:
        def steady_event(t, y):
            return _max_rate(system_derivative, y) - EVENT_FRACTION * tolerance
        steady_event.terminal = True
        steady_event.direction = -1

        sol = solve_ivp(
            system_derivative,
            (0.0, settings.horizon),
            y0,
            method=settings.method,
            events=steady_event,
            rtol=settings.rtol,
            atol=settings.atol
        )
        if sol.status == -1:
            return EquilibriumResult.failed(variant.state_names, f"integration failed: {sol.message}")
        if sol.status == 0 or len(sol.t_events[0]) == 0:
            return EquilibriumResult.failed(
                variant.state_names, f"no steady state within horizon {settings.horizon}"
            )
        y_steady, t_steady = sol.y_events[0][-1], float(sol.t_events[0][-1])

    if settings.polish:
        y_steady = _polish(system_derivative, y_steady)

    if not np.all(np.isfinite(y_steady)):
        return EquilibriumResult.failed(variant.state_names, "non-finite equilibrium")
    if _max_rate(system_derivative, y_steady) >= tolerance:
        return EquilibriumResult.failed(variant.state_names, "equilibrium outside tolerance")

    threshold = settings.abundance_threshold
    if threshold is not None and np.any(y_steady < threshold):
        return EquilibriumResult.failed(
            variant.state_names, f"infeasible equilibrium, abundance below {threshold}"
        )

    return EquilibriumResult.converged(variant.state_dict(y_steady), t_steady)


def _polish(system_derivative, y: np.ndarray) -> np.ndarray:
    """
    Newton-type refinement of a relaxed state. The refined point is kept
    only if it stays close to y and lowers the residual, so the search
    cannot jump to a different equilibrium.
    """
    sol = root(lambda x: system_derivative(0.0, x), y, method="hybr")
    if not sol.success or not np.all(np.isfinite(sol.x)):
        return y
    if np.max(np.abs(sol.x - y)) > POLISH_RADIUS * (1.0 + np.max(np.abs(y))):
        return y
    if _max_rate(system_derivative, sol.x) > _max_rate(system_derivative, y):
        return y
    return sol.x
