"""
Martensite Quench Model
=======================
急冷マルテンサイト変態（非平衡補正）

  Ms  = 539 - 423 × C                    (Andrews-type, plain carbon)
  f_m = 1 - exp(-α × (Ms - T)),  T < Ms  (Koistinen-Marburger)
  α   = 0.011 /K

Gate: the override only applies when the cooling rate is at least
QUENCH_RATE_MIN and the alloy is a steel (C < QUENCH_CARBON_MAX).
"""

from __future__ import annotations

import math
from typing import Optional

MS_INTERCEPT: float = 539.0      # °C
MS_SLOPE: float = 423.0          # °C per wt% C
KM_ALPHA: float = 0.011          # 1/K

QUENCH_RATE_MIN: float = 50.0
QUENCH_CARBON_MAX: float = 2.0


def ms_temperature(carbon: float) -> float:
    """Martensite start temperature [°C] for a plain-carbon steel."""
    return MS_INTERCEPT - MS_SLOPE * carbon


def km_fraction(ms: float, temperature: float, alpha: float = KM_ALPHA) -> float:
    """
    Koistinen-Marburger martensite fraction (0-1).

    Parameters
    ----------
    ms : float
        Martensite start temperature [°C].
    temperature : float
        Current temperature [°C].
    alpha : float
        Rate parameter [1/K].
    """
    if temperature >= ms:
        return 0.0
    f = 1.0 - math.exp(-alpha * (ms - temperature))
    return min(max(f, 0.0), 1.0)


def temperature_at_fraction(ms: float, fraction: float,
                            alpha: float = KM_ALPHA) -> Optional[float]:
    """
    Temperature at which a martensite fraction is reached.

        T = Ms - ln(1 / (1 - f)) / α

    Returns None for fractions outside (0, 1).
    """
    if fraction <= 0 or fraction >= 1:
        return None
    return ms - math.log(1.0 / (1.0 - fraction)) / alpha


def is_quench(carbon: float, temperature: float, cooling_rate: float) -> bool:
    """True when the martensitic override applies."""
    return (
        cooling_rate >= QUENCH_RATE_MIN
        and carbon < QUENCH_CARBON_MAX
        and temperature < ms_temperature(carbon)
    )
