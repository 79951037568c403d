"""
Fe-C 相・状態データ層

Value types shared by the solver and the property predictor:

  PhaseFraction        — one constituent on a tie line {name, frac, pos}
  RegionResult         — region id + 1-2 PhaseFractions (pre-quench lookup)
  MechanicalProperties — empirical property record
  ThermodynamicState   — full solver output

All types are frozen dataclasses; a state is created per solver call and
never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# ==============================================================================
# Phase names
# ==============================================================================
LIQUID = "Liquid"
DELTA_FERRITE = "Delta Ferrite (δ)"
AUSTENITE = "Austenite (γ)"
FERRITE = "Ferrite (α)"
CEMENTITE = "Cementite (Fe₃C)"
MARTENSITE = "Martensite (BCT)"
RETAINED_AUSTENITE = "Retained Austenite"

# ==============================================================================
# Region identifiers
# ==============================================================================
REGION_IDS: Tuple[str, ...] = (
    "L",
    "delta",
    "delta_L",
    "delta_gamma",
    "gamma",
    "gamma_L",
    "L_Fe3C",
    "alpha",
    "alpha_gamma",
    "gamma_Fe3C",
    "alpha_Fe3C",
    "martensite",
)


@dataclass(frozen=True)
class PhaseFraction:
    """A phase at its tie-line endpoint."""
    name: str
    frac: float      # [%] 0-100
    pos: float       # phase carbon content [wt%], not the bulk composition

    def as_dict(self) -> Dict[str, object]:
        return {"name": self.name, "frac": self.frac, "pos": self.pos}


@dataclass(frozen=True)
class RegionResult:
    """Equilibrium lookup result before any quench override."""
    region_id: str
    fractions: Tuple[PhaseFraction, ...]

    @property
    def is_two_phase(self) -> bool:
        return len(self.fractions) == 2

    @property
    def total(self) -> float:
        return sum(f.frac for f in self.fractions)


@dataclass(frozen=True)
class MechanicalProperties:
    micro: str
    crystal: str
    yield_strength: int      # [MPa]
    uts: int                 # [MPa]
    hardness: int            # [HV]
    elong: int               # [%]


@dataclass(frozen=True)
class ThermodynamicState:
    """
    Solver output for one (carbon, temperature, cooling_rate) triple.

    Fractions keep full precision. ms_temp is None for C ≥ 2.0 wt%.
    """
    carbon: float
    temperature: float
    cooling_rate: float
    region_id: str
    region_label: str
    fractions: Tuple[PhaseFraction, ...]
    is_quenched: bool
    ms_temp: Optional[float]
    micro: str
    crystal: str
    yield_strength: int
    uts: int
    hardness: int
    elong: int

    @property
    def phases(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fractions)

    def fraction_of(self, name: str) -> float:
        """Fraction [%] of the first phase whose name contains `name`."""
        for f in self.fractions:
            if name in f.name:
                return f.frac
        return 0.0

    def as_dict(self) -> Dict[str, object]:
        """Record with the camelCase keys used by presentation layers."""
        return {
            "regionId": self.region_id,
            "regionLabel": self.region_label,
            "fractions": [f.as_dict() for f in self.fractions],
            "isQuenched": self.is_quenched,
            "msTemp": self.ms_temp,
            "micro": self.micro,
            "crystal": self.crystal,
            "yield": self.yield_strength,
            "uts": self.uts,
            "hardness": self.hardness,
            "elong": self.elong,
        }

    def summary(self) -> str:
        lines = [
            f"Fe-{self.carbon:.3f}C @ {self.temperature:.1f} °C "
            f"(rate {self.cooling_rate:g} °C/tick)",
            f"  Region      : {self.region_label} [{self.region_id}]",
            f"  State       : {'Quenched (Martensitic)' if self.is_quenched else 'Equilibrium'}",
        ]
        for f in self.fractions:
            lines.append(f"  - {f.name:<20} {f.frac:6.2f} %  (C={f.pos:.3f} wt%)")
        ms = f"{self.ms_temp:.1f} °C" if self.ms_temp is not None else "n/a"
        lines += [
            f"  Ms          : {ms}",
            f"  Micro       : {self.micro}",
            f"  Lattice     : {self.crystal}",
            f"  Yield       : {self.yield_strength} MPa",
            f"  UTS         : {self.uts} MPa",
            f"  Hardness    : {self.hardness} HV",
            f"  Elongation  : {self.elong} %",
        ]
        return "\n".join(lines)
