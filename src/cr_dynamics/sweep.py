import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .temperature import (
    K0, K_scaling,
    a0, a_scaling,
    celsius_to_kelvin,
    m0, m_scaling,
    r0, r_scaling,
)


@dataclass(frozen=True)
class ThermalTraits:
    """
    Temperature independent coefficients of the 1 consumer x 1 resource
    models and the activation energies (eV) that scale them.

    Conversion efficiency e is temperature independent (Peters 1983).
    """
    r0: float
    K0: float
    a0: float
    m0: float
    e: float
    E_B: float = 0.32     # metabolism
    E_S: float = 0.0      # resource supply
    E_m: float = 0.65     # mortality
    E_vC: float = 0.46    # consumer body velocity
    E_vR: float = 0.46    # resource body velocity
    v0_C: float = 1.0
    v0_R: float = 1.0

    @classmethod
    def from_reference(
        cls,
        r: float,
        K: float,
        a: float,
        e: float,
        m: float,
        reference_celsius: float,
        **energies: float
    ) -> "ThermalTraits":
        """
        Recovers baselines from rates observed at reference_celsius.
        Activation energies and body velocities are passed by keyword.
        """
        traits = cls(r0=np.nan, K0=np.nan, a0=np.nan, m0=np.nan, e=e, **energies)
        T = float(celsius_to_kelvin(reference_celsius))
        return cls(
            r0=float(r0(r, traits.E_B, T)),
            K0=float(K0(K, traits.E_B, traits.E_S, T)),
            a0=float(a0(a, traits.v0_C, traits.v0_R, traits.E_vC, traits.E_vR, T, T)),
            m0=float(m0(m, traits.E_m, T)),
            e=e,
            **energies
        )

    def at(
        self,
        temperature: float,
        consumer_temperature: Optional[float] = None,
        resource_temperature: Optional[float] = None
    ) -> Dict[str, float]:
        """
        Parameter set {r, K, a, e, m} at a temperature in Kelvin. Consumer and
        resource body temperatures default to the environment temperature.
        """
        T_C = temperature if consumer_temperature is None else consumer_temperature
        T_R = temperature if resource_temperature is None else resource_temperature
        return {
            "r": float(r_scaling(self.r0, self.E_B, temperature)),
            "K": float(K_scaling(self.K0, self.E_B, self.E_S, temperature)),
            "a": float(a_scaling(self.a0, self.v0_C, self.v0_R, self.E_vC, self.E_vR, T_C, T_R)),
            "e": float(self.e),
            "m": float(m_scaling(self.m0, self.E_m, temperature)),
        }


def temperature_sweep(traits: ThermalTraits, temperatures_celsius: Iterable[float]) -> pd.DataFrame:
    """
    One parameter set per temperature, ready for dynamics.run_dynamics().

    Returns
    -------
    pd.DataFrame
        Columns temperature_C, temperature_K, r, K, a, e, m.
    """
    rows = []
    for celsius in temperatures_celsius:
        kelvin = float(celsius_to_kelvin(celsius))
        row = {"temperature_C": float(celsius), "temperature_K": kelvin}
        row.update(traits.at(kelvin))
        rows.append(row)
    return pd.DataFrame(rows, columns=["temperature_C", "temperature_K", "r", "K", "a", "e", "m"])
