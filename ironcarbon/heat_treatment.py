"""
Heat Treatment Presets & Cooling Simulation
===========================================
合金プリセットと連続冷却シミュレーション

A cooling run drops the temperature by a fixed amount per tick
(tick = 50 ms in the interactive tool) and solves the state at every
tick. The per-tick drop is also the cooling rate handed to the solver,
so only `quench` (150) reaches the martensitic gate (≥ 50).

  anneal      2 °C/tick   slowed to max(1, 2/3) in the arrest windows
  normalize  10 °C/tick   slowed to max(1, 10/3) in the arrest windows
  quench    150 °C/tick

Arrest windows: 700-740 °C (eutectoid) and 1130-1160 °C (eutectic).
Runs stop at room temperature (20 °C).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .phases import ThermodynamicState
from .solver import get_state

logger = logging.getLogger(__name__)

ROOM_TEMPERATURE: float = 20.0
TICK_SECONDS: float = 0.05
TRAIL_LENGTH: int = 30
MAX_TICKS: int = 100_000

# (T_low, T_high) exclusive
ARREST_WINDOWS: Tuple[Tuple[float, float], ...] = ((700.0, 740.0), (1130.0, 1160.0))


# ==============================================================================
# Alloy presets
# ==============================================================================
@dataclass(frozen=True)
class AlloyPreset:
    name: str
    carbon: float      # [wt%]
    desc: str


ALLOY_PRESETS: Dict[str, AlloyPreset] = {
    "Pure Iron": AlloyPreset("Pure Iron", 0.00, "Commercially pure iron"),
    "AISI 1020": AlloyPreset("AISI 1020", 0.20, "Low-carbon structural steel"),
    "AISI 1045": AlloyPreset("AISI 1045", 0.45, "Medium-carbon shafting steel"),
    "Eutectoid": AlloyPreset("Eutectoid", 0.76, "Fully pearlitic steel"),
    "AISI 1095": AlloyPreset("AISI 1095", 0.95, "High-carbon spring steel"),
    "Cast Iron": AlloyPreset("Cast Iron", 3.00, "Hypoeutectic white cast iron"),
}


def get_preset(name: str) -> AlloyPreset:
    """Look up an alloy preset (case / space / dash insensitive)."""
    if name in ALLOY_PRESETS:
        return ALLOY_PRESETS[name]
    key = name.lower().replace(" ", "").replace("-", "").replace("_", "")
    for preset_name, preset in ALLOY_PRESETS.items():
        if preset_name.lower().replace(" ", "") == key:
            return preset
    raise KeyError(
        f"Unknown alloy preset '{name}'. "
        f"Known: {', '.join(ALLOY_PRESETS.keys())}"
    )


# ==============================================================================
# Treatments
# ==============================================================================
@dataclass(frozen=True)
class Treatment:
    name: str
    drop: float            # [°C / tick], also the solver cooling rate
    arrests: bool          # slow down in ARREST_WINDOWS

    def step(self, T: float) -> float:
        """Temperature drop for the tick starting at T."""
        if self.arrests and any(lo < T < hi for lo, hi in ARREST_WINDOWS):
            return max(1.0, self.drop / 3.0)
        return self.drop


TREATMENTS: Dict[str, Treatment] = {
    "anneal": Treatment("anneal", 2.0, True),
    "normalize": Treatment("normalize", 10.0, True),
    "quench": Treatment("quench", 150.0, False),
}


def get_treatment(name: str) -> Treatment:
    try:
        return TREATMENTS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown treatment '{name}'. Choose from: {', '.join(TREATMENTS.keys())}"
        ) from None


def cooling_path(start_temperature: float, treatment: str) -> np.ndarray:
    """
    Temperatures visited by a cooling run, starting temperature first.

    The last entry is ROOM_TEMPERATURE once the run reaches it. A start at
    or below room temperature yields a single point.
    """
    tr = get_treatment(treatment)
    temps = [float(start_temperature)]
    T = float(start_temperature)
    while T > ROOM_TEMPERATURE and len(temps) < MAX_TICKS:
        T = T - tr.step(T)
        if T <= ROOM_TEMPERATURE:
            T = ROOM_TEMPERATURE
        temps.append(T)
    return np.array(temps)


# ==============================================================================
# Cooling run
# ==============================================================================
@dataclass
class CoolingRun:
    """States along one cooling path at fixed carbon."""
    carbon: float
    treatment: str
    temperatures: np.ndarray
    states: List[ThermodynamicState] = field(default_factory=list)

    @property
    def duration_s(self) -> float:
        return (len(self.temperatures) - 1) * TICK_SECONDS

    @property
    def final_state(self) -> Optional[ThermodynamicState]:
        return self.states[-1] if self.states else None

    def transitions(self) -> List[Tuple[float, str, str]]:
        """(T, from_region, to_region) wherever the region id changes."""
        out = []
        for prev, cur in zip(self.states, self.states[1:]):
            if prev.region_id != cur.region_id:
                out.append((cur.temperature, prev.region_id, cur.region_id))
        return out

    def trail(self, n: int = TRAIL_LENGTH) -> List[Tuple[float, float]]:
        """Last n (carbon, T) points of the run."""
        return list(deque(((self.carbon, float(T)) for T in self.temperatures), maxlen=n))


def simulate_cooling(carbon: float, start_temperature: float,
                     treatment: str) -> CoolingRun:
    """
    Cool an alloy from start_temperature to room temperature.

    Parameters
    ----------
    carbon : float
        Bulk carbon [wt%].
    start_temperature : float
        Starting temperature [°C].
    treatment : str
        'anneal', 'normalize' or 'quench'.
    """
    tr = get_treatment(treatment)
    temps = cooling_path(start_temperature, tr.name)
    states = [get_state(carbon, float(T), tr.drop) for T in temps]
    run = CoolingRun(carbon=carbon, treatment=tr.name, temperatures=temps, states=states)
    logger.debug(
        "%s run C=%.3f: %d ticks, %d region changes, final %s",
        tr.name, carbon, len(temps), len(run.transitions()), states[-1].region_id,
    )
    return run
