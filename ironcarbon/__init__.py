"""
ironcarbon — Fe-C Analytical Phase Engine
=========================================
Equilibrium and quenched phase constitution of iron-carbon alloys from a
closed-form model of the Fe-Fe₃C diagram, with textbook-level
microstructure and property estimates.

Modules:
    - boundaries: eight analytical boundary curves c = f(T) + anchors
    - phases: value types (PhaseFraction, ThermodynamicState, ...)
    - martensite: Ms (Andrews-type) + Koistinen-Marburger kinetics
    - solver: region classification, lever rule, quench override
    - properties: empirical microstructure / mechanical properties
    - heat_treatment: alloy presets, anneal / normalize / quench runs
    - diagram: overlay sampling + static matplotlib plot

3-layer architecture:
    boundaries.py / phases.py  → data layer (curves, value types)
    solver.py / properties.py  → calc layer (state + properties)
    heat_treatment / diagram   → app layer (cooling runs, plots)

Example:
    >>> from ironcarbon import get_state
    >>> s = get_state(0.45, 1600)
    >>> s.region_id, s.micro
    ('L', 'Uniform Liquid')

    >>> s = get_state(0.40, 100, cooling_rate=150)
    >>> s.is_quenched, s.micro
    (True, 'Lath Martensite')

    >>> from ironcarbon import c_a3, c_acm
    >>> round(c_acm(1147), 2)
    2.11

    >>> from ironcarbon import simulate_cooling
    >>> run = simulate_cooling(0.76, 900, 'anneal')
    >>> run.final_state.region_label
    'Eutectoid (Pearlite)'
"""

# ==============================================================================
# Boundary Curves (data layer)
# ==============================================================================
from .boundaries import (
    # Curves
    c_alpha,
    c_a3,
    c_acm,
    c_solidus,
    c_liquidus,
    c_l_fe3c,
    c_delta_solidus,
    c_delta_liquidus,

    # Registry
    BOUNDARY_CURVES,
    get_curve,
    list_curves,
    check_continuity,
    CONTINUITY_PAIRS,

    # Anchors
    EPS,
    T_EUTECTOID,
    T_A3_PURE,
    T_EUTECTIC,
    T_DELTA_ONSET,
    T_PERITECTIC,
    T_MELT_FE,
    C_ALPHA_MAX,
    C_EUTECTOID,
    C_GAMMA_MAX,
    C_EUTECTIC,
    C_CEMENTITE,
)

# ==============================================================================
# Value Types
# ==============================================================================
from .phases import (
    PhaseFraction,
    RegionResult,
    MechanicalProperties,
    ThermodynamicState,
    REGION_IDS,
)

# ==============================================================================
# Solver + Properties (calc layer)
# ==============================================================================
from .martensite import (
    ms_temperature,
    km_fraction,
    temperature_at_fraction,
    is_quench,
)
from .solver import (
    get_state,
    classify_region,
    region_label,
    lever,
    single,
)
from .properties import (
    predict_properties,
    weldability,
    Weldability,
)

# ==============================================================================
# Heat Treatment + Diagram (app layer)
# ==============================================================================
from .heat_treatment import (
    AlloyPreset,
    ALLOY_PRESETS,
    get_preset,
    TREATMENTS,
    cooling_path,
    simulate_cooling,
    CoolingRun,
)
from .diagram import (
    sample_curve,
    overlay_paths,
    plot_diagram,
    OVERLAY_SEGMENTS,
    INVARIANT_LINES,
)

# ==============================================================================
# Package Metadata
# ==============================================================================
__version__ = "1.2.0"

__all__ = [
    # === Boundary curves ===
    "c_alpha",
    "c_a3",
    "c_acm",
    "c_solidus",
    "c_liquidus",
    "c_l_fe3c",
    "c_delta_solidus",
    "c_delta_liquidus",
    "BOUNDARY_CURVES",
    "get_curve",
    "list_curves",
    "check_continuity",
    "CONTINUITY_PAIRS",
    "EPS",
    "T_EUTECTOID",
    "T_A3_PURE",
    "T_EUTECTIC",
    "T_DELTA_ONSET",
    "T_PERITECTIC",
    "T_MELT_FE",
    "C_ALPHA_MAX",
    "C_EUTECTOID",
    "C_GAMMA_MAX",
    "C_EUTECTIC",
    "C_CEMENTITE",

    # === Value types ===
    "PhaseFraction",
    "RegionResult",
    "MechanicalProperties",
    "ThermodynamicState",
    "REGION_IDS",

    # === Solver ===
    "ms_temperature",
    "km_fraction",
    "temperature_at_fraction",
    "is_quench",
    "get_state",
    "classify_region",
    "region_label",
    "lever",
    "single",
    "predict_properties",
    "weldability",
    "Weldability",

    # === Heat treatment ===
    "AlloyPreset",
    "ALLOY_PRESETS",
    "get_preset",
    "TREATMENTS",
    "cooling_path",
    "simulate_cooling",
    "CoolingRun",

    # === Diagram ===
    "sample_curve",
    "overlay_paths",
    "plot_diagram",
    "OVERLAY_SEGMENTS",
    "INVARIANT_LINES",

    # === Info ===
    "info",
]


def info():
    """Print library overview."""
    print(f"""
╔══════════════════════════════════════════════════════════════════════╗
║  ironcarbon v{__version__}                                                  ║
╠══════════════════════════════════════════════════════════════════════╣
║  BOUNDARY CURVES  c = f(T)                                           ║
║    alpha, a3, acm, solidus, liquidus, l_fe3c,                        ║
║    delta_solidus, delta_liquidus                                     ║
║    c = c_lo + (c_hi - c_lo) × ((T - T_lo)/(T_hi - T_lo))^p           ║
║                                                                      ║
║  LEVER RULE                                                          ║
║    w₂ = (C - c₁)/(c₂ - c₁) × 100,   w₁ = 100 - w₂                    ║
║                                                                      ║
║  QUENCH (rate ≥ 50, C < 2.0, T < Ms)                                 ║
║    Ms  = 539 - 423 C                                                 ║
║    f_m = 1 - exp(-0.011 (Ms - T))                                    ║
║                                                                      ║
║    >>> get_state(0.45, 800)                                          ║
║    >>> simulate_cooling(0.45, 1000, 'quench')                        ║
╚══════════════════════════════════════════════════════════════════════╝
    """)
