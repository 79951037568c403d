#!/usr/bin/env python3
"""
ironcarbon CLI Entry Point

Usage:
    python -m ironcarbon                          # Quick reference
    python -m ironcarbon state 0.45 800           # Equilibrium state
    python -m ironcarbon state 0.45 100 --rate 150 --json
    python -m ironcarbon cool 0.45 --from 1000 --treatment quench
    python -m ironcarbon curves --T 800           # All boundary values at T
    python -m ironcarbon check                    # Curve continuity report
    python -m ironcarbon presets                  # Alloy presets + weldability
    python -m ironcarbon diagram --out fe_c.png   # Static diagram PNG
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .boundaries import BOUNDARY_CURVES, check_continuity
from .diagram import plot_diagram, sample_curve
from .heat_treatment import ALLOY_PRESETS, TREATMENTS, get_preset, simulate_cooling
from .properties import weldability
from .solver import get_state

QUICK_REFERENCE = f"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  ironcarbon v{__version__} — Fe-C Analytical Phase Engine                          ║
╠══════════════════════════════════════════════════════════════════════════════╣
║                                                                              ║
║    from ironcarbon import get_state                                          ║
║    s = get_state(0.45, 800)            # C [wt%], T [°C], rate=0             ║
║    s.region_label, s.fractions, s.uts                                        ║
║                                                                              ║
║    from ironcarbon import simulate_cooling                                   ║
║    run = simulate_cooling(0.45, 1000, 'quench')                              ║
║    run.final_state.micro                # 'Lath Martensite'                  ║
║                                                                              ║
║  CLI:                                                                        ║
║    python -m ironcarbon state 0.76 700                                       ║
║    python -m ironcarbon state 0.40 100 --rate 150                            ║
║    python -m ironcarbon cool 1045 --treatment normalize                      ║
║    python -m ironcarbon curves --T 1200                                      ║
║    python -m ironcarbon check                                                ║
║    python -m ironcarbon diagram --out fe_c.png --C 0.45 --T 800              ║
║                                                                              ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""


def _parse_carbon(value: str) -> float:
    """Carbon as wt% or an alloy preset name ('AISI 1045', '1045', 'Eutectoid')."""
    for name in (value, f"AISI {value}"):
        try:
            return get_preset(name).carbon
        except KeyError:
            pass
    try:
        return float(value)
    except ValueError:
        # report the preset lookup, not the float conversion
        return get_preset(value).carbon


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='ironcarbon',
        description='Analytical Fe-C phase diagram solver',
    )
    p.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = p.add_subparsers(dest='cmd')

    # --- state ---
    sp = sub.add_parser('state', help='Solve a single (C, T, rate) point')
    sp.add_argument('carbon', type=str, help='Carbon [wt%%] or preset name')
    sp.add_argument('temperature', type=float, help='Temperature [°C]')
    sp.add_argument('--rate', type=float, default=0.0, help='Cooling rate (≥50 quenches)')
    sp.add_argument('--json', action='store_true', help='Output JSON record')

    # --- cool ---
    sc = sub.add_parser('cool', help='Simulate a cooling run')
    sc.add_argument('carbon', type=str, help='Carbon [wt%%] or preset name')
    sc.add_argument('--from', dest='start', type=float, default=1000.0,
                    help='Start temperature [°C] (default: 1000)')
    sc.add_argument('--treatment', choices=list(TREATMENTS.keys()), default='anneal')
    sc.add_argument('--out', type=str, help='Also plot the trail to this PNG')

    # --- curves ---
    scv = sub.add_parser('curves', help='Boundary curve values')
    scv.add_argument('--T', type=float, help='Evaluate all curves at T [°C]')
    scv.add_argument('--name', type=str, help='Sample one curve')
    scv.add_argument('--range', nargs=2, type=float, metavar=('T_START', 'T_END'),
                     default=(0.0, 1538.0))
    scv.add_argument('--steps', type=int, default=20)

    # --- check ---
    sub.add_parser('check', help='Boundary continuity report')

    # --- presets ---
    sub.add_parser('presets', help='List alloy presets')

    # --- diagram ---
    sd = sub.add_parser('diagram', help='Write static diagram PNG')
    sd.add_argument('--out', type=str, default='fe_c_diagram.png')
    sd.add_argument('--C', type=float, help='Crosshair carbon [wt%%]')
    sd.add_argument('--T', type=float, help='Crosshair temperature [°C]')
    sd.add_argument('--steel', action='store_true', help='Zoom to 0-2.5 wt%% C')

    return p


def cmd_state(args) -> int:
    state = get_state(_parse_carbon(args.carbon), args.temperature, args.rate)
    if args.json:
        print(json.dumps(state.as_dict(), indent=2, ensure_ascii=False))
    else:
        print()
        print(state.summary())
        print()
    return 0


def cmd_cool(args) -> int:
    carbon = _parse_carbon(args.carbon)
    run = simulate_cooling(carbon, args.start, args.treatment)
    final = run.final_state

    print(f"\n  {run.treatment.capitalize()} Fe-{carbon:.3f}C from {args.start:.0f} °C")
    print(f"  {'='*55}")
    print(f"  Ticks           : {len(run.temperatures)} ({run.duration_s:.2f} s)")
    print(f"  {'-'*55}")
    for T, src, dst in run.transitions():
        print(f"  {T:8.1f} °C  {src:>12} → {dst}")
    print(f"  {'-'*55}")
    print(f"  Final region    : {final.region_label}")
    print(f"  Microstructure  : {final.micro}")
    print(f"  Yield / UTS     : {final.yield_strength} / {final.uts} MPa")
    print(f"  Hardness        : {final.hardness} HV")
    print()
    if args.out:
        plot_diagram(args.out, point=(carbon, float(run.temperatures[-1])), trail=run.trail())
        print(f"  Saved: {args.out}")
    return 0


def cmd_curves(args) -> int:
    if args.name:
        c, T = sample_curve(args.name, args.range[0], args.range[1], args.steps)
        print(f"\n  {args.name}: {args.range[0]:.0f} → {args.range[1]:.0f} °C")
        for ci, Ti in zip(c, T):
            print(f"  {Ti:8.1f} °C   {ci:.4f} wt%")
        print()
        return 0

    T = 727.0 if args.T is None else args.T
    print(f"\n  Boundary curves at {T:.1f} °C")
    print(f"  {'='*35}")
    for name, fn in BOUNDARY_CURVES.items():
        print(f"  {name:<16} {fn(T):8.4f} wt%")
    print()
    return 0


def cmd_check(args) -> int:
    report = check_continuity()
    print("\n  Boundary continuity")
    print(f"  {'='*60}")
    for row in report:
        a, b = row['pair']
        flag = 'OK' if row['ok'] else 'FAIL'
        print(f"  {a:>14} / {b:<15} @ {row['T']:6.0f} °C   gap={row['gap']:.2e}  {flag}")
    print()
    return 0 if all(row['ok'] for row in report) else 1


def cmd_presets(args) -> int:
    print(f"\n  Alloy presets ({len(ALLOY_PRESETS)})")
    print(f"  {'='*60}")
    for name, preset in ALLOY_PRESETS.items():
        w = weldability(preset.carbon)
        print(f"  {name:<10} {preset.carbon:5.2f} wt%  {w.rating:<11} {preset.desc}")
    print()
    return 0


def cmd_diagram(args) -> int:
    point = (args.C, args.T) if args.C is not None else None
    out = plot_diagram(args.out, point=point, max_carbon=2.5 if args.steel else 6.67)
    print(f"  Saved: {out}")
    return 0


COMMANDS = {
    'state': cmd_state,
    'cool': cmd_cool,
    'curves': cmd_curves,
    'check': cmd_check,
    'presets': cmd_presets,
    'diagram': cmd_diagram,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == 'diagram' and (args.C is None) != (args.T is None):
        parser.error('diagram: --C and --T must be given together')

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if args.cmd is None:
        print(QUICK_REFERENCE)
        return 0

    try:
        return COMMANDS[args.cmd](args)
    except (KeyError, ValueError) as e:
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
