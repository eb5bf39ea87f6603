"""
Spacecraft Mission Simulation - Mission Profile Plots

Plots generated from a TelemetryLog:
  01  Altitude profile with phase shading
  02  Velocity profile
  03  Fuel level with the critical threshold
  04  Ground track (longitude vs latitude)
"""

import os
from dataclasses import dataclass
from typing import List, Tuple

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from . import constants as C
from .telemetry import TelemetryLog


PHASE_COLORS = {
    'LAUNCH': '#ff7f0e',
    'ORBIT': '#2ca02c',
    'RETURN': '#1f77b4',
    'LANDED': '#7f7f7f',
    'IDLE': '#d62728',
}


@dataclass
class MissionData:
    """Telemetry columns as numpy arrays, ready for plotting."""
    time: np.ndarray
    altitude: np.ndarray
    velocity: np.ndarray
    fuel_level: np.ndarray
    latitude: np.ndarray
    longitude: np.ndarray
    phase: List[str]


def configure_plot_style() -> None:
    """Configure matplotlib defaults for mission plots."""
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'font.size': 11,
        'axes.titlesize': 13,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'lines.linewidth': 1.8,
    })


def extract_log_data(log: TelemetryLog) -> MissionData:
    """Convert a TelemetryLog into MissionData."""
    if len(log) == 0:
        raise ValueError("Telemetry log is empty; nothing to plot")
    arrays = log.to_arrays()
    return MissionData(
        time=arrays['time'],
        altitude=arrays['altitude'],
        velocity=arrays['velocity'],
        fuel_level=arrays['fuel_level'],
        latitude=arrays['latitude'],
        longitude=arrays['longitude'],
        phase=list(log.phase),
    )


def phase_segments(phases: List[str]) -> List[Tuple[str, int, int]]:
    """Split the phase column into (phase, start_index, end_index) runs."""
    segments = []
    if not phases:
        return segments
    start = 0
    for i in range(1, len(phases)):
        if phases[i] != phases[start]:
            segments.append((phases[start], start, i - 1))
            start = i
    segments.append((phases[start], start, len(phases) - 1))
    return segments


def _shade_phases(ax, data: MissionData):
    seen = set()
    for phase, i0, i1 in phase_segments(data.phase):
        label = phase if phase not in seen else None
        seen.add(phase)
        ax.axvspan(data.time[i0], data.time[i1], alpha=0.12,
                   color=PHASE_COLORS.get(phase, '#cccccc'), label=label)


def _save(fig, output_dir: str, name: str) -> str:
    plt.tight_layout()
    path = os.path.join(output_dir, name)
    fig.savefig(path, bbox_inches='tight', dpi=150)
    plt.close(fig)
    return path


def plot_altitude_profile(data: MissionData, output_dir: str) -> str:
    """Altitude vs mission time, shaded by phase."""
    fig, ax = plt.subplots()
    _shade_phases(ax, data)
    ax.plot(data.time, data.altitude, 'b-', label='Altitude')
    ax.axhline(C.ALTITUDE_CEILING, color='red', linestyle='--', linewidth=1.0,
               label=f'Ceiling ({C.ALTITUDE_CEILING:.0f} km)')
    ax.set_xlabel('Mission time (s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Altitude Profile', fontweight='bold')
    ax.legend(loc='upper right')
    ax.set_ylim(0, None)
    return _save(fig, output_dir, '01_altitude_profile.png')


def plot_velocity_profile(data: MissionData, output_dir: str) -> str:
    """Velocity vs mission time."""
    fig, ax = plt.subplots()
    _shade_phases(ax, data)
    ax.plot(data.time, data.velocity, 'g-', label='Velocity')
    ax.set_xlabel('Mission time (s)')
    ax.set_ylabel('Velocity (km/s)')
    ax.set_title('Velocity Profile', fontweight='bold')
    ax.legend(loc='upper right')
    return _save(fig, output_dir, '02_velocity_profile.png')


def plot_fuel_level(data: MissionData, output_dir: str) -> str:
    """Fuel level vs mission time with the critical threshold."""
    fig, ax = plt.subplots()
    _shade_phases(ax, data)
    ax.plot(data.time, data.fuel_level, 'k-', label='Fuel')
    ax.axhline(C.CRITICAL_FUEL_LEVEL, color='red', linestyle='--', linewidth=1.0,
               label=f'Critical ({C.CRITICAL_FUEL_LEVEL:.0f}%)')
    ax.set_xlabel('Mission time (s)')
    ax.set_ylabel('Fuel level (%)')
    ax.set_title('Fuel Level', fontweight='bold')
    ax.set_ylim(0, C.INITIAL_FUEL_LEVEL * 1.05)
    ax.legend(loc='upper right')
    return _save(fig, output_dir, '03_fuel_level.png')


def plot_ground_track(data: MissionData, output_dir: str) -> str:
    """Longitude vs latitude, colored by mission time."""
    fig, ax = plt.subplots()
    sc = ax.scatter(data.longitude, data.latitude, c=data.time, cmap='viridis', s=12)
    plt.colorbar(sc, ax=ax, label='Mission time (s)')
    ax.scatter([data.longitude[0]], [data.latitude[0]], c='green', s=80,
               marker='o', zorder=5, label='Start')
    ax.scatter([data.longitude[-1]], [data.latitude[-1]], c='red', s=80,
               marker='x', zorder=5, label='End')
    ax.set_xlabel('Longitude (deg)')
    ax.set_ylabel('Latitude (deg)')
    ax.set_title('Ground Track', fontweight='bold')
    ax.legend(loc='best')
    return _save(fig, output_dir, '04_ground_track.png')


def generate_all_plots(log: TelemetryLog, output_dir: str = "plots") -> List[str]:
    """Generate every mission plot.

    Args:
        log: Telemetry log of a mission run
        output_dir: Directory to save plots (created if it doesn't exist)

    Returns:
        List of paths to saved plot files
    """
    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    data = extract_log_data(log)

    plot_functions = [
        plot_altitude_profile,
        plot_velocity_profile,
        plot_fuel_level,
        plot_ground_track,
    ]
    return [plot_fn(data, output_dir) for plot_fn in plot_functions]
