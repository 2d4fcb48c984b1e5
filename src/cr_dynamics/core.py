import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple


class ModelSpecificationError(ValueError):
    """Raised when a parameter set or state does not match a model variant."""


@dataclass(frozen=True)
class ModelVariant:
    """
    A named consumer-resource vector field together with the state and
    parameter names it reads.

    The wrapped function has the signature ``func(time, state, parameters)``
    where ``state`` and ``parameters`` are mappings, and returns a dict of
    rates of change with the same keys as ``state``.
    """
    name: str
    state_names: Tuple[str, ...]
    parameter_names: Tuple[str, ...]
    func: Callable[[float, Mapping[str, float], Mapping[str, float]], Dict[str, float]]
    description: str = ""

    def __call__(self, time, state, parameters):
        return self.func(time, state, parameters)

    def missing_parameters(self, parameters: Mapping[str, float]) -> List[str]:
        return [name for name in self.parameter_names if name not in parameters]

    def validate(
        self,
        parameters: Mapping[str, float],
        state: Optional[Mapping[str, float]] = None
    ) -> None:
        """
        Checks that every required parameter is present and, when given, that
        the state carries exactly this model's state variables.
        Extra parameter names are allowed.
        """
        missing = self.missing_parameters(parameters)
        if missing:
            raise ModelSpecificationError(
                f"Model {self.name} is missing parameters: {', '.join(missing)}"
            )
        if state is not None and set(state) != set(self.state_names):
            raise ModelSpecificationError(
                f"Model {self.name} expects state variables {list(self.state_names)}, "
                f"got {list(state)}"
            )

    def state_vector(self, state: Mapping[str, float]) -> np.ndarray:
        """State mapping -> array ordered as state_names."""
        return np.array([state[name] for name in self.state_names], dtype=float)

    def state_dict(self, y: np.ndarray) -> Dict[str, float]:
        return {name: float(value) for name, value in zip(self.state_names, y)}

    def array_field(self, parameters: Mapping[str, float]) -> Callable[[float, np.ndarray], np.ndarray]:
        """
        Wraps the vector field as f(t, y) -> dy/dt on arrays, the form
        expected by scipy.integrate.solve_ivp and scipy.optimize.root.
        """
        names = self.state_names
        func = self.func

        def system_derivative(t, y):
            rates = func(t, dict(zip(names, y)), parameters)
            return np.array([rates[name] for name in names], dtype=float)

        return system_derivative
