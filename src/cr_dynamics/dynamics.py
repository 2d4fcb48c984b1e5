import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .constants import MAX_IMAG_COLUMN, MAX_REAL_COLUMN
from .core import ModelSpecificationError, ModelVariant
from .logger import logger
from .models import get_model
from .stability import stability_of
from .steady_state import EquilibriumResult, SolverSettings, find_steady_state, resolve_settings

Rows = Union[pd.DataFrame, Sequence[Mapping[str, float]]]


@dataclass(frozen=True)
class DynamicsResult:
    """
    Outcome for one row of a sweep: the inputs, the equilibrium found from
    them and the eigen summary at that equilibrium (NaN when it failed).
    """
    parameters: Dict[str, float]
    initial_state: Dict[str, float]
    equilibrium: EquilibriumResult
    max_real_eigenvalue: float
    max_imag_eigenvalue: float

    @property
    def steady(self) -> bool:
        return self.equilibrium.steady

    @property
    def message(self) -> str:
        return self.equilibrium.message

    def as_record(self) -> Dict[str, float]:
        """
        Flat record: parameters, then the equilibrium values under the state
        names (replacing the initial guess), then the eigen summary.
        """
        record = dict(self.parameters)
        record.update(self.equilibrium.state)
        record[MAX_REAL_COLUMN] = self.max_real_eigenvalue
        record[MAX_IMAG_COLUMN] = self.max_imag_eigenvalue
        return record


def _as_records(rows: Rows) -> List[Dict[str, float]]:
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict(orient="records")
    return [dict(row) for row in rows]


def build_rows(
    parameter_rows: Rows,
    initial_state_rows: Union[Rows, Mapping[str, float]],
    model: ModelVariant
):
    """
    Pairs parameter rows with initial states and validates every pair
    against the model before anything is solved.
    A single mapping of initial states is used for every parameter row.
    """
    parameter_list = _as_records(parameter_rows)
    if isinstance(initial_state_rows, Mapping):
        state_list = [dict(initial_state_rows) for _ in parameter_list]
    else:
        state_list = _as_records(initial_state_rows)

    if len(parameter_list) != len(state_list):
        raise ValueError(
            f"Expected one initial state per parameter row, got {len(state_list)} "
            f"states for {len(parameter_list)} parameter rows"
        )

    for index, (parameters, state) in enumerate(zip(parameter_list, state_list)):
        try:
            model.validate(parameters, state)
        except ModelSpecificationError as e:
            raise ModelSpecificationError(f"Row {index}: {e}") from e

    return list(zip(parameter_list, state_list))


def solve_row(
    parameters: Mapping[str, float],
    initial_state: Mapping[str, float],
    model: ModelVariant,
    settings: SolverSettings
) -> DynamicsResult:
    equilibrium = find_steady_state(initial_state, model, parameters, settings=settings)
    summary = stability_of(equilibrium, model, parameters)
    return DynamicsResult(
        parameters=dict(parameters),
        initial_state=dict(initial_state),
        equilibrium=equilibrium,
        max_real_eigenvalue=summary.max_real,
        max_imag_eigenvalue=summary.max_imag
    )


def run_dynamics(
    parameter_rows: Rows,
    initial_state_rows: Union[Rows, Mapping[str, float]],
    model,
    horizon: Optional[float] = None,
    tolerance: Optional[float] = None,
    settings: Optional[SolverSettings] = None
) -> List[DynamicsResult]:
    """
    Finds the steady state and its local stability for every row of a sweep.

    Parameters
    ----------
    parameter_rows : pd.DataFrame or sequence of mappings
        One parameter set per simulation. Columns beyond the model's
        parameters are carried through to the output.
    initial_state_rows : pd.DataFrame, sequence of mappings or mapping
        Initial state per simulation, or one state used for all of them.
    model : str or ModelVariant
        Consumer-resource model to solve.
    horizon, tolerance : float, optional
        Override the solver settings.
    settings : SolverSettings, optional
        Full solver configuration.

    Returns
    -------
    list of DynamicsResult
        One result per input row, in input order. Rows that do not reach a
        feasible steady state carry NaN equilibrium and eigenvalues.
    """
    variant = get_model(model)
    rows = build_rows(parameter_rows, initial_state_rows, variant)
    settings = resolve_settings(settings, horizon, tolerance)

    logger.info('Started %d rows of model %s', len(rows), variant.name)
    results = [solve_row(parameters, state, variant, settings) for parameters, state in rows]
    n_failed = sum(1 for result in results if not result.steady)
    logger.info('Finished %d rows of model %s, %d without a feasible steady state',
                len(results), variant.name, n_failed)
    return results


def dynamics_frame(
    parameter_rows: Rows,
    initial_state_rows: Union[Rows, Mapping[str, float]],
    model,
    horizon: Optional[float] = None,
    tolerance: Optional[float] = None,
    settings: Optional[SolverSettings] = None
) -> pd.DataFrame:
    """
    run_dynamics() as a data frame of parameters, equilibrium states,
    max_real_eigenvalue and max_imag_eigenvalue.
    """
    results = run_dynamics(parameter_rows, initial_state_rows, model,
                           horizon=horizon, tolerance=tolerance, settings=settings)
    records = [result.as_record() for result in results]
    frame = pd.DataFrame.from_records(records)
    if frame.empty:
        variant = get_model(model)
        frame = pd.DataFrame(columns=list(variant.parameter_names) + list(variant.state_names)
                             + [MAX_REAL_COLUMN, MAX_IMAG_COLUMN])
    return frame.astype({MAX_REAL_COLUMN: np.float64, MAX_IMAG_COLUMN: np.float64})
