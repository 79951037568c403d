"""
Diagram overlay sampling + static plot

The boundary curves are sampled over the segments drawn on the textbook
Fe-Fe₃C diagram. `plot_diagram` writes a static PNG (matplotlib, Agg);
interactive rendering belongs to the presentation layer.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .boundaries import (
    C_ALPHA_MAX,
    C_CEMENTITE,
    C_DELTA_MAX,
    C_EUTECTOID,
    C_GAMMA_MAX,
    C_LIQUID_PERITECTIC,
    C_PERITECTIC,
    T_A3_PURE,
    T_CURIE,
    T_DELTA_ONSET,
    T_EUTECTIC,
    T_EUTECTOID,
    T_LFE3C_TOP,
    T_MELT_FE,
    T_PERITECTIC,
    BoundaryCurve,
    get_curve,
)

T_AXIS_MAX: float = 1600.0


class OverlaySegment(NamedTuple):
    curve: str
    t_start: float
    t_end: float
    steps: int


class InvariantLine(NamedTuple):
    name: str
    T: float
    c_start: float
    c_end: float


OVERLAY_SEGMENTS: Tuple[OverlaySegment, ...] = (
    OverlaySegment("liquidus", T_PERITECTIC, T_EUTECTIC, 30),
    OverlaySegment("l_fe3c", T_EUTECTIC, T_LFE3C_TOP, 20),
    OverlaySegment("solidus", T_PERITECTIC, T_EUTECTIC, 30),
    OverlaySegment("a3", T_A3_PURE, T_EUTECTOID, 30),
    OverlaySegment("acm", T_EUTECTIC, T_EUTECTOID, 30),
    OverlaySegment("alpha", T_EUTECTOID, 0.0, 20),
)

# straight skeleton lines ((c0, T0), (c1, T1)) around the δ corner and the α corner
STRAIGHT_SEGMENTS: Tuple[Tuple[Tuple[float, float], Tuple[float, float]], ...] = (
    ((0.0, T_MELT_FE), (C_LIQUID_PERITECTIC, T_PERITECTIC)),
    ((0.0, T_MELT_FE), (C_DELTA_MAX, T_PERITECTIC)),
    ((0.0, T_DELTA_ONSET), (C_DELTA_MAX, T_PERITECTIC)),
    ((0.0, T_DELTA_ONSET), (C_PERITECTIC, T_PERITECTIC)),
    ((0.0, T_A3_PURE), (C_ALPHA_MAX, T_EUTECTOID)),
    ((C_CEMENTITE, 0.0), (C_CEMENTITE, T_LFE3C_TOP)),
)

INVARIANT_LINES: Tuple[InvariantLine, ...] = (
    InvariantLine("Peritectic", T_PERITECTIC, C_DELTA_MAX, C_LIQUID_PERITECTIC),
    InvariantLine("Eutectic", T_EUTECTIC, C_GAMMA_MAX, C_CEMENTITE),
    InvariantLine("Eutectoid (A1)", T_EUTECTOID, C_ALPHA_MAX, C_CEMENTITE),
    InvariantLine("Curie (A2)", T_CURIE, 0.0, C_EUTECTOID),
)


def sample_curve(
    curve: Union[str, BoundaryCurve],
    t_start: float,
    t_end: float,
    steps: int = 20,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample a boundary curve between two temperatures.

    Returns
    -------
    carbon : ndarray
        Boundary carbon content [wt%], steps + 1 points.
    temperature : ndarray
        Sample temperatures [°C], t_start and t_end included.
    """
    if steps < 1:
        raise ValueError(f"steps must be ≥ 1, got {steps}")
    fn = get_curve(curve) if isinstance(curve, str) else curve
    temperature = np.linspace(t_start, t_end, steps + 1)
    carbon = np.array([fn(float(T)) for T in temperature])
    return carbon, temperature


def overlay_paths() -> Dict[str, Tuple[np.ndarray, np.ndarray]]:
    """All sampled curve segments keyed by curve name."""
    return {
        seg.curve: sample_curve(seg.curve, seg.t_start, seg.t_end, seg.steps)
        for seg in OVERLAY_SEGMENTS
    }


def plot_diagram(
    out: str,
    point: Optional[Tuple[float, float]] = None,
    max_carbon: float = C_CEMENTITE,
    trail: Optional[List[Tuple[float, float]]] = None,
) -> str:
    """
    Write the Fe-Fe₃C skeleton to a PNG.

    Parameters
    ----------
    out : str
        Output path.
    point : (carbon, T), optional
        Crosshair position.
    max_carbon : float
        Right edge of the carbon axis (2.5 zooms on steels).
    trail : list of (carbon, T), optional
        Cooling trail to draw.
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 7.5))

    for c, T in overlay_paths().values():
        ax.plot(c, T, 'k-', linewidth=1.5)
    for (c0, T0), (c1, T1) in STRAIGHT_SEGMENTS:
        ax.plot([c0, c1], [T0, T1], 'k-', linewidth=1.5)
    for line in INVARIANT_LINES:
        style = 'r--' if line.name.startswith('Curie') else 'k-'
        ax.plot([line.c_start, line.c_end], [line.T, line.T], style, linewidth=1.2)
        ax.text(min(line.c_end, max_carbon) * 0.98, line.T + 12,
                f"{line.name} ({line.T:.0f}°C)", fontsize=8, ha='right')

    if trail:
        tc, tT = zip(*trail)
        ax.plot(tc, tT, 'o-', color='tab:orange', markersize=2, alpha=0.7)

    if point is not None:
        c, T = point
        ax.axvline(c, color='tab:blue', linestyle=':', alpha=0.6)
        ax.axhline(T, color='tab:blue', linestyle=':', alpha=0.6)
        ax.plot([c], [T], 'o', color='tab:red', markersize=7)

    ax.set_xlim(0, max_carbon)
    ax.set_ylim(0, T_AXIS_MAX)
    ax.set_xlabel('Carbon [wt%]', fontsize=12)
    ax.set_ylabel('Temperature [°C]', fontsize=12)
    ax.set_title('Fe-Fe₃C Phase Diagram (analytical model)', fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(out, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return out
