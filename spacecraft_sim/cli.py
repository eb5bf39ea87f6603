"""
Spacecraft Mission Simulation - CLI

The single entry point for running a mission, exporting telemetry and
generating plots. The exit status reports the mission result: 0 if the craft
landed, 1 otherwise, 2 on an unexpected error.
"""

import argparse
import dataclasses
import logging
import os
import sys

from spacecraft_sim.commands import ConsoleCommandSource, ScriptedCommandSource
from spacecraft_sim.config import create_default_config
from spacecraft_sim.main import run_mission

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Spacecraft mission lifecycle simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    commands = parser.add_mutually_exclusive_group()
    commands.add_argument(
        "--commands", "-c",
        nargs="*",
        default=None,
        help="Operator tokens answered during the orbit hold, e.g. r y"
    )
    commands.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Prompt for the return command on the terminal"
    )
    parser.add_argument(
        "--realtime",
        type=float,
        nargs="?",
        const=1.0,
        default=0.0,
        help="Wall-clock delay per tick in seconds"
    )
    parser.add_argument(
        "--hold-seconds",
        type=float,
        default=0.0,
        help="Simulated time spent holding in orbit before resolving the hold"
    )
    parser.add_argument(
        "--backup",
        action="store_true",
        help="Activate the backup system automatically on an orbit systems fault"
    )
    parser.add_argument(
        "--error-log",
        type=str,
        default=None,
        help="Append fault events to this file"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write the telemetry log to this CSV file"
    )
    parser.add_argument(
        "--plots",
        type=str,
        default=None,
        help="Directory to save mission plots"
    )
    parser.add_argument(
        "--locale",
        choices=["en", "tr"],
        default="en",
        help="Language of phase labels in console telemetry"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress telemetry output"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main execution flow."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = dataclasses.replace(
        create_default_config(),
        tick_delay=args.realtime,
        orbit_hold_seconds=args.hold_seconds,
        enable_backup_system=args.backup,
        error_log_path=args.error_log,
        telemetry_locale=args.locale,
        verbose=not args.quiet,
    )
    if args.interactive:
        source = ConsoleCommandSource()
    else:
        source = ScriptedCommandSource(args.commands or [])

    try:
        result = run_mission(config=config, commands=source)

        print("\n" + "=" * 60)
        print("MISSION SUMMARY")
        print("=" * 60)
        print(f"Result:        {result.reason}")
        print(f"Final phase:   {result.final_state.phase.name}")
        print(f"Mission time:  {result.mission_time:.0f} s ({result.ticks} ticks)")
        print(f"Altitude:      {result.final_state.altitude:.1f} km")
        print(f"Fuel:          {result.final_state.fuel_level:.1f} %")
        print(f"Coordinates:   lat={result.final_state.latitude:.4f}, "
              f"lon={result.final_state.longitude:.4f}")
        print(f"Fault events:  {len(result.faults)}")
        print("=" * 60)

        if args.csv:
            result.log.to_csv(args.csv)
            logger.info(f"Telemetry written to {args.csv}")

        if args.plots and len(result.log) > 0:
            from spacecraft_sim.plotting import generate_all_plots
            plot_dir = os.path.abspath(args.plots)
            logger.info(f"Generating plots in {plot_dir}")
            generate_all_plots(result.log, plot_dir)

    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Simulation failed: {e}")
        return 2

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
