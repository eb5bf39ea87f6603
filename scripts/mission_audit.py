"""
Mission audit report: phase timeline, fuel usage per phase and fault events
for a spacecraft mission run.
"""

from __future__ import annotations

import argparse
from collections import OrderedDict
from pathlib import Path
import sys

import numpy as np

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from spacecraft_sim.commands import ScriptedCommandSource
from spacecraft_sim.config import create_test_config
from spacecraft_sim.main import run_mission


def _phase_transitions(times, phases, alts, fuel):
    out = []
    prev = None
    for t, p, h, f in zip(times, phases, alts, fuel):
        if p != prev:
            out.append((float(t), str(p), float(h), float(f)))
            prev = p
    return out


def _phase_fuel_usage(phases, fuel, initial_fuel):
    """Fuel burned per phase, attributing each tick's burn to its phase."""
    usage = OrderedDict()
    previous = initial_fuel
    for p, f in zip(phases, fuel):
        usage[str(p)] = usage.get(str(p), 0.0) + max(0.0, float(previous - f))
        previous = f
    return usage


def build_report(result, initial_fuel: float = 100.0) -> str:
    log = result.log
    arrays = log.to_arrays()
    lines = []
    lines.append("=" * 72)
    lines.append("SPACECRAFT MISSION AUDIT")
    lines.append("=" * 72)
    lines.append(f"Result:       {result.reason}")
    lines.append(f"Success:      {result.success}")
    lines.append(f"Mission time: {result.mission_time:.0f} s ({result.ticks} ticks)")
    if result.hold_outcome is not None:
        lines.append(f"Orbit hold:   {result.hold_outcome.name}")
    lines.append("")
    lines.append("Phase transitions:")
    for t, p, h, f in _phase_transitions(arrays['time'], log.phase,
                                         arrays['altitude'], arrays['fuel_level']):
        lines.append(f"  t={t:6.0f}s | {p:<8} | alt={h:6.1f} km | fuel={f:5.1f}%")
    lines.append("")
    lines.append("Fuel used per phase:")
    for p, used in _phase_fuel_usage(log.phase, arrays['fuel_level'], initial_fuel).items():
        lines.append(f"  {p:<8} {used:6.2f}%")
    if len(arrays['fuel_level']):
        lines.append(f"  {'TOTAL':<8} {initial_fuel - float(np.min(arrays['fuel_level'])):6.2f}%")
    lines.append("")
    lines.append(f"Emergency procedures: {len(result.emergency_reports)}")
    for report in result.emergency_reports:
        reason = report.reason.name if report.reason is not None else "MANUAL"
        lines.append(f"  {reason:<16} {report.outcome.name:<14} "
                     f"{report.start_altitude:6.1f} -> {report.final_altitude:6.1f} km")
    lines.append(f"Fault events: {len(result.faults)}")
    for event in result.faults:
        lines.append(f"  [{event['kind']}] {event['message']}")
    lines.append("=" * 72)
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Spacecraft mission audit")
    parser.add_argument("--commands", "-c", nargs="*", default=["r", "y"],
                        help="Operator tokens for the orbit hold")
    parser.add_argument("--hold-seconds", type=float, default=0.0)
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Also write the report to this file")
    args = parser.parse_args(argv)

    result = run_mission(config=create_test_config(),
                         commands=ScriptedCommandSource(args.commands),
                         hold_seconds=args.hold_seconds)
    report = build_report(result)
    print(report)
    if args.output:
        Path(args.output).write_text(report + "\n")
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
