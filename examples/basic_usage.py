#!/usr/bin/env python3
"""
ironcarbon Basic Usage Examples
===============================

Fe-C 状態図ソルバーの基本的な使い方
"""

import sys
sys.path.insert(0, '..')

import numpy as np

# =============================================================================
# Example 1: 平衡状態
# =============================================================================
print("=" * 70)
print("Example 1: Equilibrium State")
print("=" * 70)

from ironcarbon import get_state

# 亜共析鋼（α + γ 二相域）
s = get_state(0.45, 760)
print(f"\nFe-0.45C at 760°C: {s.region_label}")
for f in s.fractions:
    print(f"  {f.name:<20} {f.frac:6.2f} %  at C = {f.pos:.3f} wt%")

# 共析鋼の室温組織
s = get_state(0.76, 25)
print(f"\nFe-0.76C at 25°C: {s.region_label}")
print(f"  Micro    = {s.micro}")
print(f"  σ_y      = {s.yield_strength} MPa,  UTS = {s.uts} MPa")
print(f"  Hardness = {s.hardness} HV,  Elong = {s.elong} %")

# =============================================================================
# Example 2: 焼入れ（マルテンサイト）
# =============================================================================
print("\n" + "=" * 70)
print("Example 2: Quenched Martensite")
print("=" * 70)

from ironcarbon import ms_temperature, temperature_at_fraction

for c in [0.2, 0.45, 0.8]:
    ms = ms_temperature(c)
    t90 = temperature_at_fraction(ms, 0.9)
    s = get_state(c, 20, cooling_rate=150)
    print(f"\nFe-{c:.2f}C: Ms = {ms:.0f}°C, 90% at {t90:.0f}°C")
    print(f"  {s.micro}: martensite {s.fraction_of('Martensite'):.1f} %, "
          f"HV {s.hardness}, UTS {s.uts} MPa")

# =============================================================================
# Example 3: 境界曲線
# =============================================================================
print("\n" + "=" * 70)
print("Example 3: Boundary Curves")
print("=" * 70)

from ironcarbon import BOUNDARY_CURVES, check_continuity

print("\nCurves at 800°C:")
for name, fn in BOUNDARY_CURVES.items():
    print(f"  {name:<16} {fn(800.0):.4f} wt%")

bad = [row for row in check_continuity() if not row['ok']]
print(f"\nContinuity: {'all pairs meet' if not bad else bad}")

# =============================================================================
# Example 4: 連続冷却
# =============================================================================
print("\n" + "=" * 70)
print("Example 4: Cooling Runs")
print("=" * 70)

from ironcarbon import ALLOY_PRESETS, simulate_cooling

steel = ALLOY_PRESETS['AISI 1045']
for treatment in ['anneal', 'normalize', 'quench']:
    run = simulate_cooling(steel.carbon, 1000, treatment)
    final = run.final_state
    print(f"\n{steel.name} {treatment}: {len(run.temperatures)} ticks ({run.duration_s:.1f} s)")
    for T, src, dst in run.transitions():
        print(f"  {T:7.1f}°C  {src} → {dst}")
    print(f"  final: {final.micro}, HV {final.hardness}")

# =============================================================================
# Example 5: 相分率マップ
# =============================================================================
print("\n" + "=" * 70)
print("Example 5: Austenite Fraction Map")
print("=" * 70)

carbons = np.linspace(0.0, 1.2, 7)
temps = np.arange(900, 699, -40)
print("\n  T\\C  " + "".join(f"{c:7.2f}" for c in carbons))
for T in temps:
    row = [get_state(c, T).fraction_of('Austenite') for c in carbons]
    print(f"  {T:4d} " + "".join(f"{v:7.1f}" for v in row))

print("\n" + "=" * 70)
print("Done!")
print("=" * 70)
