from .core import ModelVariant, ModelSpecificationError
from .models import MODELS, get_model
from .temperature import (
    arrhenius,
    scale,
    unscale,
    celsius_to_kelvin,
    kelvin_to_celsius,
    r0, r_scaling,
    K0, K_scaling,
    m0, m_scaling,
    a0, a_scaling
)
from .steady_state import (
    EquilibriumResult,
    EquilibriumStatus,
    SolverSettings,
    find_steady_state,
    simulate
)
from .stability import EigenSummary, jacobian, eigenvalues, eigen_summary, stability_of, classify, is_oscillatory
from .dynamics import DynamicsResult, run_dynamics, dynamics_frame
from .sweep import ThermalTraits, temperature_sweep
from .logger import log_to_file
