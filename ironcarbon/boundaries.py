"""
Fe-C Boundary Curve Library
===========================
解析的相境界曲線 c = f(T)

Eight closed-form boundary lines of the iron-carbon diagram, each mapping
a temperature [°C] to the carbon content [wt%] of the boundary at that
temperature. Outside its active band every curve returns a fixed constant.

Within a band the shape is either linear or a power law

    c = c_lo + (c_hi - c_lo) × ((T - T_lo) / (T_hi - T_lo))^p

with p ∈ {3, 1.2, 1.4, 0.85} chosen per curve to follow the literature
curvature of the line. These exponents set the diagram overlay shape and
must not be retuned.

Anchors:
    727 °C  eutectoid (A1)          0.022 wt%  max C in α
    912 °C  α/γ allotropic (A3)      0.76 wt%  eutectoid
   1147 °C  eutectic                 2.11 wt%  max C in γ
   1394 °C  δ onset                   4.3 wt%  eutectic
   1495 °C  peritectic               6.67 wt%  Fe₃C
   1538 °C  Fe melting point
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

# ==============================================================================
# Anchors
# ==============================================================================
T_EUTECTOID: float = 727.0
T_CURIE: float = 768.0            # A2, overlay only
T_A3_PURE: float = 912.0
T_EUTECTIC: float = 1147.0
T_LFE3C_TOP: float = 1250.0       # L/Fe₃C line meets 6.67
T_DELTA_ONSET: float = 1394.0
T_PERITECTIC: float = 1495.0
T_MELT_FE: float = 1538.0

C_ALPHA_MAX: float = 0.022
C_EUTECTOID: float = 0.76
C_GAMMA_MAX: float = 2.11
C_EUTECTIC: float = 4.3
C_CEMENTITE: float = 6.67

# Peritectic corner
C_DELTA_MAX: float = 0.09
C_PERITECTIC: float = 0.17
C_LIQUID_PERITECTIC: float = 0.53

EPS: float = 1e-5

BoundaryCurve = Callable[[float], float]


# ==============================================================================
# Solid-state lines
# ==============================================================================
def c_alpha(T: float) -> float:
    """α solvus (ferrite solubility). Cubic below A1, linear A1→A3."""
    if T > T_A3_PURE:
        return 0.0
    if T >= T_EUTECTOID:
        return C_ALPHA_MAX * ((T_A3_PURE - T) / (T_A3_PURE - T_EUTECTOID))
    return C_ALPHA_MAX * (max(0.0, T) / T_EUTECTOID) ** 3


def c_a3(T: float) -> float:
    """A3 line: γ/(α+γ) boundary, 912 °C → 727 °C."""
    if T > T_A3_PURE or T < T_EUTECTOID:
        return C_EUTECTOID
    return C_EUTECTOID * ((T_A3_PURE - T) / (T_A3_PURE - T_EUTECTOID)) ** 1.2


def c_acm(T: float) -> float:
    """Acm line: γ/(γ+Fe₃C) boundary, 727 °C → 1147 °C."""
    if T < T_EUTECTOID:
        return C_EUTECTOID
    if T > T_EUTECTIC:
        return C_GAMMA_MAX
    frac = (T - T_EUTECTOID) / (T_EUTECTIC - T_EUTECTOID)
    return C_EUTECTOID + (C_GAMMA_MAX - C_EUTECTOID) * frac ** 1.4


# ==============================================================================
# Solidification lines
# ==============================================================================
def c_solidus(T: float) -> float:
    """γ solidus, 1147 °C (2.11) → 1495 °C (0.17)."""
    if T < T_EUTECTIC:
        return C_GAMMA_MAX
    if T > T_PERITECTIC:
        return C_PERITECTIC
    frac = (T_PERITECTIC - T) / (T_PERITECTIC - T_EUTECTIC)
    return C_PERITECTIC + (C_GAMMA_MAX - C_PERITECTIC) * frac ** 0.85


def c_liquidus(T: float) -> float:
    """γ liquidus, 1147 °C (4.3) → 1495 °C (0.53)."""
    if T < T_EUTECTIC:
        return C_EUTECTIC
    if T > T_PERITECTIC:
        return C_LIQUID_PERITECTIC
    frac = (T_PERITECTIC - T) / (T_PERITECTIC - T_EUTECTIC)
    return C_LIQUID_PERITECTIC + (C_EUTECTIC - C_LIQUID_PERITECTIC) * frac ** 0.85


def c_l_fe3c(T: float) -> float:
    """Hypereutectic liquidus (L / L+Fe₃C), linear 1147 °C → 1250 °C."""
    if T < T_EUTECTIC:
        return C_EUTECTIC
    if T > T_LFE3C_TOP:
        return C_CEMENTITE
    return C_EUTECTIC + (C_CEMENTITE - C_EUTECTIC) * ((T - T_EUTECTIC) / (T_LFE3C_TOP - T_EUTECTIC))


def c_delta_solidus(T: float) -> float:
    """δ solidus / δ solvus. Peaks at 0.09 wt% on the peritectic line."""
    if T < T_DELTA_ONSET or T > T_MELT_FE:
        return 0.0
    if T >= T_PERITECTIC:
        return C_DELTA_MAX * ((T_MELT_FE - T) / (T_MELT_FE - T_PERITECTIC))
    return C_DELTA_MAX * ((T - T_DELTA_ONSET) / (T_PERITECTIC - T_DELTA_ONSET))


def c_delta_liquidus(T: float) -> float:
    """δ liquidus, 1538 °C (0) → 1495 °C (0.53)."""
    if T < T_PERITECTIC or T > T_MELT_FE:
        return 0.0
    return C_LIQUID_PERITECTIC * ((T_MELT_FE - T) / (T_MELT_FE - T_PERITECTIC))


# ==============================================================================
# Registry
# ==============================================================================
BOUNDARY_CURVES: Dict[str, BoundaryCurve] = {
    "alpha": c_alpha,
    "a3": c_a3,
    "acm": c_acm,
    "solidus": c_solidus,
    "liquidus": c_liquidus,
    "l_fe3c": c_l_fe3c,
    "delta_solidus": c_delta_solidus,
    "delta_liquidus": c_delta_liquidus,
}


def get_curve(name: str) -> BoundaryCurve:
    """Look up a boundary curve by registry name."""
    key = name.lower().replace("-", "_").replace(" ", "_")
    if key.startswith("c_"):
        key = key[2:]
    if key in BOUNDARY_CURVES:
        return BOUNDARY_CURVES[key]
    raise KeyError(
        f"Unknown boundary curve '{name}'. "
        f"Known: {', '.join(BOUNDARY_CURVES.keys())}"
    )


def list_curves() -> List[str]:
    return list(BOUNDARY_CURVES.keys())


# ==============================================================================
# Continuity
# ==============================================================================
# (curve_a, curve_b, T_anchor): the two lines must meet at T_anchor
CONTINUITY_PAIRS: List[Tuple[str, str, float]] = [
    ("a3", "alpha", T_A3_PURE),
    ("a3", "acm", T_EUTECTOID),
    ("acm", "solidus", T_EUTECTIC),
    ("liquidus", "l_fe3c", T_EUTECTIC),
    ("liquidus", "delta_liquidus", T_PERITECTIC),
    ("delta_solidus", "delta_liquidus", T_MELT_FE),
]


def check_continuity(tol: float = EPS) -> List[Dict]:
    """
    Evaluate every pair in CONTINUITY_PAIRS.

    Returns
    -------
    list of dict with keys:
        pair  — (curve_a, curve_b)
        T     — anchor temperature [°C]
        c_a   — curve_a(T)
        c_b   — curve_b(T)
        gap   — |c_a - c_b|
        ok    — gap <= tol
    """
    report = []
    for name_a, name_b, T in CONTINUITY_PAIRS:
        c_a = BOUNDARY_CURVES[name_a](T)
        c_b = BOUNDARY_CURVES[name_b](T)
        gap = abs(c_a - c_b)
        report.append({
            "pair": (name_a, name_b),
            "T": T,
            "c_a": c_a,
            "c_b": c_b,
            "gap": gap,
            "ok": gap <= tol,
        })
    return report
