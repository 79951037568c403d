"""
Fe-C State Solver
=================
(C, T, 冷却速度) → 相領域・相分率・組織/機械的性質

Pipeline:
  1. clamp            C ∈ [0, 6.67],  T ∈ [0, ∞)
  2. band lookup      temperature bands, top-down
  3. leaf lookup      carbon vs boundary curves, left → right
  4. lever rule       w₂ = (C - c₁)/(c₂ - c₁) × 100, w₁ = 100 - w₂
  5. renormalize      Σ frac = 100
  6. quench override  rate ≥ 50, C < 2.0, T < Ms  → martensite (K-M)
  7. label + properties

Bands (same boundaries as the diagram):
  T ≥ 1538            L
  1495 ≤ T < 1538     δ / δ+L / L
  1394 ≤ T < 1495     δ / δ+γ / γ / γ+L / L / L+Fe₃C
  1147 < T < 1394     γ / γ+L / L / L+Fe₃C
   727 < T ≤ 1147     α / α+γ / γ / γ+Fe₃C
          T ≤ 727     α / α+Fe₃C

The solver is a pure function: no state is kept between calls.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional, Tuple

from .boundaries import (
    C_CEMENTITE,
    C_EUTECTOID,
    C_GAMMA_MAX,
    C_PERITECTIC,
    EPS,
    T_DELTA_ONSET,
    T_EUTECTIC,
    T_EUTECTOID,
    T_MELT_FE,
    T_PERITECTIC,
    c_a3,
    c_acm,
    c_alpha,
    c_delta_liquidus,
    c_delta_solidus,
    c_l_fe3c,
    c_liquidus,
    c_solidus,
)
from .martensite import QUENCH_CARBON_MAX, is_quench, km_fraction, ms_temperature
from .phases import (
    AUSTENITE,
    CEMENTITE,
    DELTA_FERRITE,
    FERRITE,
    LIQUID,
    MARTENSITE,
    RETAINED_AUSTENITE,
    PhaseFraction,
    RegionResult,
    ThermodynamicState,
)
from .properties import predict_properties

logger = logging.getLogger(__name__)

EUTECTOID_LABEL_TOL: float = 0.02


# ==============================================================================
# Leaf constructors
# ==============================================================================
def single(region_id: str, name: str, carbon: float) -> RegionResult:
    """Single-phase leaf: the whole alloy is `name` at the bulk composition."""
    return RegionResult(region_id, (PhaseFraction(name, 100.0, carbon),))


def lever(region_id: str, name1: str, name2: str,
          c1: float, c2: float, carbon: float) -> RegionResult:
    """
    Two-phase leaf via the lever rule on the tie line c1 < C < c2.

    A span narrower than EPS collapses to 100 % `name1` at c1.
    """
    span = c2 - c1
    if span < EPS:
        logger.debug("degenerate tie line in %s (span=%.3g), using %s", region_id, span, name1)
        return RegionResult(region_id, (PhaseFraction(name1, 100.0, c1),))
    w2 = (carbon - c1) / span * 100.0
    w1 = 100.0 - w2
    return RegionResult(region_id, (
        PhaseFraction(name1, max(0.0, min(100.0, w1)), c1),
        PhaseFraction(name2, max(0.0, min(100.0, w2)), c2),
    ))


def normalize(result: RegionResult) -> RegionResult:
    """Rescale fractions so that they sum to 100."""
    total = result.total
    if abs(total - 100.0) <= EPS:
        return result
    return RegionResult(result.region_id, tuple(
        PhaseFraction(f.name, f.frac / total * 100.0, f.pos) for f in result.fractions
    ))


# ==============================================================================
# Bands
# ==============================================================================
def _liquid_band(c: float, T: float) -> RegionResult:
    return single("L", LIQUID, c)


def _delta_liquid_band(c: float, T: float) -> RegionResult:
    cd_s = c_delta_solidus(T)
    cd_l = c_delta_liquidus(T)
    if c <= cd_s:
        return single("delta", DELTA_FERRITE, c)
    if cd_s < c < cd_l:
        return lever("delta_L", DELTA_FERRITE, LIQUID, cd_s, cd_l, c)
    return single("L", LIQUID, c)


def _peritectic_band(c: float, T: float) -> RegionResult:
    cd_s = c_delta_solidus(T)
    # γ side of the δ+γ field, kept as a straight line from (0, 1394) to (0.17, 1495)
    c_perit_gamma = C_PERITECTIC * ((T - T_DELTA_ONSET) / (T_PERITECTIC - T_DELTA_ONSET))
    c_sol = c_solidus(T)
    c_liq = c_liquidus(T)
    c_lf = c_l_fe3c(T)

    if c <= cd_s:
        return single("delta", DELTA_FERRITE, c)
    if cd_s < c < c_perit_gamma:
        return lever("delta_gamma", DELTA_FERRITE, AUSTENITE, cd_s, c_perit_gamma, c)
    if c_perit_gamma <= c <= c_sol:
        return single("gamma", AUSTENITE, c)
    if c_sol < c < c_liq:
        return lever("gamma_L", AUSTENITE, LIQUID, c_sol, c_liq, c)
    if c_liq <= c <= c_lf:
        return single("L", LIQUID, c)
    return lever("L_Fe3C", LIQUID, CEMENTITE, c_lf, C_CEMENTITE, c)


def _solidification_band(c: float, T: float) -> RegionResult:
    c_sol = c_solidus(T)
    c_liq = c_liquidus(T)
    c_lf = c_l_fe3c(T)

    if c <= c_sol:
        return single("gamma", AUSTENITE, c)
    if c_sol < c < c_liq:
        return lever("gamma_L", AUSTENITE, LIQUID, c_sol, c_liq, c)
    if c_liq <= c <= c_lf:
        return single("L", LIQUID, c)
    return lever("L_Fe3C", LIQUID, CEMENTITE, c_lf, C_CEMENTITE, c)


def _intercritical_band(c: float, T: float) -> RegionResult:
    # above 912 °C c_alpha and c_a3 hold their end values (0, 0.76)
    c_al = c_alpha(T)
    c_a3_val = c_a3(T)
    c_acm_val = c_acm(T)

    if c <= c_al:
        return single("alpha", FERRITE, c)
    if c_al < c <= c_a3_val:
        return lever("alpha_gamma", FERRITE, AUSTENITE, c_al, c_a3_val, c)
    if c_a3_val < c <= c_acm_val:
        return single("gamma", AUSTENITE, c)
    return lever("gamma_Fe3C", AUSTENITE, CEMENTITE, c_acm_val, C_CEMENTITE, c)


def _eutectoid_band(c: float, T: float) -> RegionResult:
    c_al = c_alpha(T)
    if c <= c_al:
        return single("alpha", FERRITE, c)
    return lever("alpha_Fe3C", FERRITE, CEMENTITE, c_al, C_CEMENTITE, c)


class Band(NamedTuple):
    name: str
    t_min: float
    inclusive: bool
    classify: Callable[[float, float], RegionResult]

    def contains(self, T: float) -> bool:
        return T >= self.t_min if self.inclusive else T > self.t_min


# evaluated top-down; the last band catches everything down to 0 °C
BANDS: Tuple[Band, ...] = (
    Band("liquid", T_MELT_FE, True, _liquid_band),
    Band("delta_liquid", T_PERITECTIC, True, _delta_liquid_band),
    Band("peritectic", T_DELTA_ONSET, True, _peritectic_band),
    Band("solidification", T_EUTECTIC, False, _solidification_band),
    Band("intercritical", T_EUTECTOID, False, _intercritical_band),
    Band("eutectoid", float("-inf"), True, _eutectoid_band),
)


def find_band(temperature: float) -> Band:
    for band in BANDS:
        if band.contains(temperature):
            return band
    return BANDS[-1]


# ==============================================================================
# Public API
# ==============================================================================
def clamp_inputs(carbon: float, temperature: float) -> Tuple[float, float]:
    """Saturate inputs onto the diagram domain."""
    safe_c = max(0.0, min(C_CEMENTITE, carbon))
    safe_t = max(0.0, temperature)
    return safe_c, safe_t


def classify_region(carbon: float, temperature: float) -> RegionResult:
    """Equilibrium region and normalized phase fractions (no quench)."""
    c, T = clamp_inputs(carbon, temperature)
    return normalize(find_band(T).classify(c, T))


REGION_LABELS = {
    "L": "Liquid Melt",
    "gamma": "Austenite Field (γ)",
    "alpha": "Ferrite Field (α)",
    "delta": "Delta Ferrite (δ)",
    "gamma_L": "Mushy Zone (L + γ)",
    "delta_L": "Mushy Zone (L + δ)",
    "delta_gamma": "Two-Phase (δ + γ)",
    "alpha_gamma": "Intercritical (α + γ)",
    "L_Fe3C": "Liquid + Cementite",
    "martensite": "Martensitic (Quenched)",
}


def region_label(region_id: str, carbon: float, quenched: bool = False) -> str:
    """Display label for a region id."""
    if quenched:
        return "Martensitic (Quenched)"
    if region_id == "gamma_Fe3C":
        return "Austenite + Cementite" if carbon < C_GAMMA_MAX else "Austenite + Ledeburite"
    if region_id == "alpha_Fe3C":
        if carbon < C_EUTECTOID:
            return "Hypoeutectoid (α + P)"
        if abs(carbon - C_EUTECTOID) < EUTECTOID_LABEL_TOL:
            return "Eutectoid (Pearlite)"
        if carbon <= C_GAMMA_MAX:
            return "Hypereutectoid (P + Fe₃C)"
        return "Cast Iron (White)"
    return REGION_LABELS.get(region_id, "Unknown Region")


def quench_override(carbon: float, temperature: float) -> RegionResult:
    """Martensite + retained austenite split from Koistinen-Marburger."""
    fm = km_fraction(ms_temperature(carbon), temperature)
    return RegionResult("martensite", (
        PhaseFraction(MARTENSITE, fm * 100.0, carbon),
        PhaseFraction(RETAINED_AUSTENITE, (1.0 - fm) * 100.0, carbon),
    ))


def get_state(carbon: float, temperature: float,
              cooling_rate: float = 0.0) -> ThermodynamicState:
    """
    Solve the phase constitution of Fe-C at (carbon, temperature).

    Parameters
    ----------
    carbon : float
        Bulk carbon [wt%]. Clamped to [0, 6.67].
    temperature : float
        Temperature [°C]. Clamped to ≥ 0.
    cooling_rate : float
        Cooling rate; ≥ 50 enables the martensitic override.

    Returns
    -------
    ThermodynamicState
        Never raises; out-of-range inputs saturate.
    """
    c, T = clamp_inputs(carbon, temperature)
    result = normalize(find_band(T).classify(c, T))

    quenched = is_quench(c, T, cooling_rate)
    if quenched:
        result = quench_override(c, T)
        logger.debug("quench override at C=%.3f T=%.1f (rate=%g)", c, T, cooling_rate)

    ms: Optional[float] = ms_temperature(c) if c < QUENCH_CARBON_MAX else None
    props = predict_properties(c, T, result.fractions, quenched)

    return ThermodynamicState(
        carbon=c,
        temperature=T,
        cooling_rate=cooling_rate,
        region_id=result.region_id,
        region_label=region_label(result.region_id, c, quenched),
        fractions=result.fractions,
        is_quenched=quenched,
        ms_temp=ms,
        micro=props.micro,
        crystal=props.crystal,
        yield_strength=props.yield_strength,
        uts=props.uts,
        hardness=props.hardness,
        elong=props.elong,
    )
