"""
Spacecraft Mission Simulation - Telemetry and Fault Sinks

Consumers of the structured records the core emits:
  - TelemetryLog:     in-memory per-tick log with numpy/CSV export
  - ConsoleTelemetry: human-readable lines with localized phase labels
  - TelemetryBus:     fan-out to several telemetry sinks
  - FaultLog:         append-only fault record (memory, logging, file)
"""

import csv
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .state import MissionPhase, SpacecraftState
from .types import FaultEvent, TelemetrySnapshot

logger = logging.getLogger(__name__)


PHASE_LABELS = {
    'en': {
        MissionPhase.IDLE: "Idle",
        MissionPhase.LAUNCH: "Launch",
        MissionPhase.ORBIT: "In orbit",
        MissionPhase.RETURN: "Return",
        MissionPhase.LANDED: "Landed",
    },
    'tr': {
        MissionPhase.IDLE: "Bekleme",
        MissionPhase.LAUNCH: "Kalkış",
        MissionPhase.ORBIT: "Yörüngede",
        MissionPhase.RETURN: "Dönüş",
        MissionPhase.LANDED: "İniş",
    },
}


def make_snapshot(state: SpacecraftState, t: float) -> TelemetrySnapshot:
    """Build the structured telemetry record for the current tick."""
    return TelemetrySnapshot(
        time=t,
        phase=state.phase,
        latitude=state.latitude,
        longitude=state.longitude,
        altitude=state.altitude,
        velocity=state.velocity,
        fuel_level=state.fuel_level,
    )


def phase_label(phase: MissionPhase, locale: str = 'en') -> str:
    labels = PHASE_LABELS.get(locale, PHASE_LABELS['en'])
    return labels[phase]


def format_snapshot(snapshot: TelemetrySnapshot, locale: str = 'en') -> str:
    """Format a snapshot as a single telemetry line."""
    return (f"[TELEMETRY] t={snapshot['time']:6.1f}s | "
            f"{phase_label(snapshot['phase'], locale):<10} | "
            f"lat={snapshot['latitude']:9.4f} | lon={snapshot['longitude']:9.4f} | "
            f"alt={snapshot['altitude']:6.1f} km | v={snapshot['velocity']:5.2f} km/s | "
            f"fuel={snapshot['fuel_level']:5.1f}%")


@dataclass
class TelemetryLog:
    """Container for logged telemetry data."""
    time: List[float] = field(default_factory=list)
    phase: List[str] = field(default_factory=list)
    latitude: List[float] = field(default_factory=list)
    longitude: List[float] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)
    velocity: List[float] = field(default_factory=list)
    fuel_level: List[float] = field(default_factory=list)

    def publish(self, snapshot: TelemetrySnapshot):
        """Log data from the current tick."""
        self.time.append(snapshot['time'])
        self.phase.append(snapshot['phase'].name)
        self.latitude.append(snapshot['latitude'])
        self.longitude.append(snapshot['longitude'])
        self.altitude.append(snapshot['altitude'])
        self.velocity.append(snapshot['velocity'])
        self.fuel_level.append(snapshot['fuel_level'])

    def __len__(self) -> int:
        return len(self.time)

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Numeric columns as numpy arrays (for analysis and plotting)."""
        return {
            'time': np.asarray(self.time, dtype=np.float64),
            'latitude': np.asarray(self.latitude, dtype=np.float64),
            'longitude': np.asarray(self.longitude, dtype=np.float64),
            'altitude': np.asarray(self.altitude, dtype=np.float64),
            'velocity': np.asarray(self.velocity, dtype=np.float64),
            'fuel_level': np.asarray(self.fuel_level, dtype=np.float64),
        }

    def to_csv(self, filename: str):
        """Write the telemetry log to CSV for offline analysis."""
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        header = ['time_s', 'phase', 'latitude_deg', 'longitude_deg',
                  'altitude_km', 'velocity_km_s', 'fuel_pct']
        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            for i in range(len(self.time)):
                writer.writerow([
                    self.time[i], self.phase[i], self.latitude[i], self.longitude[i],
                    self.altitude[i], self.velocity[i], self.fuel_level[i],
                ])


class ConsoleTelemetry:
    """Prints one formatted line per snapshot."""

    def __init__(self, locale: str = 'en', stream=None):
        self.locale = locale
        self.stream = stream

    def publish(self, snapshot: TelemetrySnapshot):
        print(format_snapshot(snapshot, self.locale), file=self.stream or sys.stdout)


class TelemetryBus:
    """Forwards each snapshot to every attached sink."""

    def __init__(self, *sinks):
        self.sinks = list(sinks)

    def attach(self, sink):
        self.sinks.append(sink)

    def publish(self, snapshot: TelemetrySnapshot):
        for sink in self.sinks:
            sink.publish(snapshot)


class FaultLog:
    """
    Append-only record of fault events.

    Events are kept in memory, reported through logging and, when a path is
    given, appended to a text file as ``[timestamp] message`` lines.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.events: List[FaultEvent] = []

    def record(self, event: FaultEvent):
        self.events.append(event)
        logger.debug(f"Fault recorded [{event['kind']}]: {event['message']}")
        if self.path:
            os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
            with open(self.path, 'a') as fh:
                fh.write(f"[{int(event['timestamp'])}] {event['message']}\n")

    def kinds(self) -> List[str]:
        return [event['kind'] for event in self.events]

    def __len__(self) -> int:
        return len(self.events)
