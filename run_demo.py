"""Demo script: fly a nominal mission with a confirmed return and show the timeline."""
from spacecraft_sim.commands import ScriptedCommandSource
from spacecraft_sim.main import run_mission
import numpy as np

result = run_mission(commands=ScriptedCommandSource(["r", "y"]), verbose=True)

print("\n\n===== MISSION TIMELINE =====")
log = result.log
if len(log) > 0:
    arrays = log.to_arrays()
    times = arrays['time']
    alts = arrays['altitude']
    vels = arrays['velocity']
    fuel = arrays['fuel_level']
    phases = log.phase
    print(f"Telemetry entries: {len(log)}")
    print(f"Time range: {times[0]:.0f}s - {times[-1]:.0f}s")
    print(f"Peak altitude: {np.max(alts):.1f} km")
    print(f"Peak velocity: {np.max(vels):.1f} km/s")
    print(f"Fuel remaining: {fuel[-1]:.1f}%")
    print()
    print("Phase Timeline:")
    prev_phase = None
    for i in range(len(phases)):
        if phases[i] != prev_phase:
            print(f"  t={times[i]:6.0f}s | Alt={alts[i]:6.1f} km | "
                  f"V={vels[i]:5.2f} km/s | Fuel={fuel[i]:5.1f}% | Phase: {phases[i]}")
            prev_phase = phases[i]

print()
print(f"Result: {result.reason}")
print(f"Fault events: {len(result.faults)}")
for event in result.faults:
    print(f"  [{event['kind']}] {event['message']}")
