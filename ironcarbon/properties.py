"""
Empirical Property Prediction
=============================
相構成 → 組織・機械的性質（教科書レベル近似）

Regimes:
  T > 1495 °C           uniform liquid, zero strength, elongation 100 %
  quenched              martensite: σ_y = 1000 + 2000C, HV = 300 + 500C
                        UTS = 1.1 σ_y + 0.4 HV, elong = max(1, 15 - 15C)
  727 °C < T            nominal hot austenite (50 / 120 MPa, 40 HV, 45 %)
  T ≤ 727 °C            rule of mixtures over ferrite / cementite fractions
                        UTS = 1.35 σ_y + 0.5 HV, elong = max(1, 40fα + 2fFe₃C)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Sequence

from .boundaries import C_EUTECTIC, C_EUTECTOID, C_GAMMA_MAX, T_EUTECTOID, T_PERITECTIC
from .phases import MechanicalProperties, PhaseFraction

# ==============================================================================
# Coefficients
# ==============================================================================
# per-phase (yield [MPa], hardness [HV]) for the rule of mixtures
PHASE_COEFFS: Dict[str, Dict[str, float]] = {
    "Ferrite": {"yield": 150.0, "hardness": 80.0, "elong": 40.0},
    "Cementite": {"yield": 1200.0, "hardness": 800.0, "elong": 2.0},
}

HOT_PROPERTIES: Dict[str, float] = {"yield": 50, "hardness": 40, "uts": 120, "elong": 45}

LATH_PLATE_CARBON: float = 0.6

EUTECTOID_TOL: float = 0.02
EUTECTIC_TOL: float = 0.05
PURE_FERRITE_MAX: float = 0.02


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _phase_fraction(fractions: Sequence[PhaseFraction], key: str) -> float:
    """First fraction whose name contains `key`, as 0-1."""
    for f in fractions:
        if key in f.name:
            return f.frac / 100.0
    return 0.0


def microstructure_name(carbon: float) -> str:
    """Room-temperature equilibrium microstructure for a slowly cooled alloy."""
    if carbon < PURE_FERRITE_MAX:
        return "Equiaxed Ferrite"
    if abs(carbon - C_EUTECTOID) < EUTECTOID_TOL:
        return "100% Pearlite (Lamellar)"
    if carbon < C_EUTECTOID:
        return "Proeutectoid Ferrite + Pearlite"
    if carbon <= C_GAMMA_MAX:
        return "Proeutectoid Cementite Network + Pearlite"
    if abs(carbon - C_EUTECTIC) < EUTECTIC_TOL:
        return "Ledeburite (Eutectic)"
    return "Primary Cementite + Transformed Ledeburite"


def predict_properties(
    carbon: float,
    temperature: float,
    fractions: Sequence[PhaseFraction],
    quenched: bool,
) -> MechanicalProperties:
    """
    Predict microstructure and mechanical properties.

    Parameters
    ----------
    carbon : float
        Bulk carbon [wt%] (already clamped).
    temperature : float
        Temperature [°C] (already clamped).
    fractions : sequence of PhaseFraction
        Phase constitution returned by the solver.
    quenched : bool
        Martensitic override flag.

    Returns
    -------
    MechanicalProperties with integer strength / hardness / elongation.
    """
    if temperature > T_PERITECTIC:
        return MechanicalProperties(
            micro="Uniform Liquid", crystal="Amorphous",
            yield_strength=0, uts=0, hardness=0, elong=100,
        )

    if quenched:
        micro = "Lath Martensite" if carbon < LATH_PLATE_CARBON else "Plate Martensite"
        crystal = "Body-Centered Tetragonal (BCT)"
        yield_str = 1000.0 + 2000.0 * carbon
        hardness = 300.0 + 500.0 * carbon
        uts = yield_str * 1.1 + hardness * 0.4
        elong = max(1.0, 15.0 - carbon * 15.0)
    elif temperature > T_EUTECTOID:
        micro = "Austenitic / High Temp phases"
        crystal = "FCC Dominant"
        yield_str = HOT_PROPERTIES["yield"]
        hardness = HOT_PROPERTIES["hardness"]
        uts = HOT_PROPERTIES["uts"]
        elong = HOT_PROPERTIES["elong"]
    else:
        f_alpha = _phase_fraction(fractions, "Ferrite")
        f_fe3c = _phase_fraction(fractions, "Cementite")
        ferrite, cementite = PHASE_COEFFS["Ferrite"], PHASE_COEFFS["Cementite"]

        crystal = "BCC + Orthorhombic"
        yield_str = f_alpha * ferrite["yield"] + f_fe3c * cementite["yield"]
        hardness = f_alpha * ferrite["hardness"] + f_fe3c * cementite["hardness"]
        uts = yield_str * 1.35 + hardness * 0.5
        elong = max(1.0, f_alpha * ferrite["elong"] + f_fe3c * cementite["elong"])
        micro = microstructure_name(carbon)

    return MechanicalProperties(
        micro=micro,
        crystal=crystal,
        yield_strength=_round_half_up(yield_str),
        uts=_round_half_up(uts),
        hardness=_round_half_up(hardness),
        elong=_round_half_up(elong),
    )


# ==============================================================================
# Weldability
# ==============================================================================
@dataclass(frozen=True)
class Weldability:
    rating: str
    note: str


# (upper carbon bound, rating, note)
WELDABILITY_BANDS = (
    (0.25, "Excellent", "No pre-heat needed"),
    (0.50, "Fair", "Pre-heat required"),
    (C_GAMMA_MAX, "Poor", "Special techniques"),
)


def weldability(carbon: float) -> Weldability:
    """Carbon-only weldability rating."""
    for upper, rating, note in WELDABILITY_BANDS:
        if carbon <= upper:
            return Weldability(rating, note)
    return Weldability("Unweldable", "Cast Iron territory")
