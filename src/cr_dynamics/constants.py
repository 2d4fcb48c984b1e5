# Boltzmann constant, units = eV/K
BOLTZMANN = 8.6173303e-5

# Offset between degrees Celsius and Kelvin.
ZERO_CELSIUS = 273.15

# Relaxation runs for 1000 time units with a steady state tolerance of 1e-4.
DEFAULT_HORIZON = 1000.0
DEFAULT_TOLERANCE = 1e-4

# Abundance below which an equilibrium is not considered feasible.
ABUNDANCE_THRESHOLD = 1e-4

# Integration method passed to scipy.integrate.solve_ivp.
DEFAULT_METHOD = "LSODA"

# Relative perturbation for finite difference Jacobians.
JACOBIAN_STEP = 1e-6

# Column names for the eigenvalue summary in dynamics output.
MAX_REAL_COLUMN = "max_real_eigenvalue"
MAX_IMAG_COLUMN = "max_imag_eigenvalue"
