#!/usr/bin/env python3
"""Timetable window to iCalendar converter.

Loads a timetable data directory, resolves the periods and activities in a
forward window starting now, and writes them as an iCalendar (.ics) file
and, optionally, as a radial chart payload.
"""

import argparse
import sys
from datetime import datetime, timedelta

from loguru import logger

from catalog import JsonStore, to_naive_local
from schedule import activities_in_window, completion, periods_in_window
from transformer import ChartMode, ICalTransformer, RadialTransformer


def parse_datetime(value: str) -> datetime:
    """Parse datetime string in ISO format (YYYY-MM-DDTHH:MM) as naive local time."""
    try:
        return to_naive_local(datetime.fromisoformat(value))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid datetime: '{value}'. Expected YYYY-MM-DDTHH:MM."
        )


def parse_hours(value: str) -> float:
    """Parse a positive window length in hours."""
    try:
        hours = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number of hours: '{value}'.")
    if hours <= 0:
        raise argparse.ArgumentTypeError("Window length must be positive.")
    return hours


def _setup_logging(debug: bool = False) -> None:
    """Set up console logging.
    
    Args:
        debug: Enable debug logging level.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if debug else "WARNING",
        colorize=True,
    )


def main() -> None:
    """Main entry point for the converter."""
    parser = argparse.ArgumentParser(
        description="Export the upcoming timetable window to iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 timetable2iCal.py --data-dir ~/.local/share/timetable
  python3 timetable2iCal.py --data-dir data --week B --year-level 11 --from 2026-03-04T08:00 --hours 48
  python3 timetable2iCal.py --data-dir data --arcs donut.json --mode timetable
        """
    )
    
    parser.add_argument(
        "--data-dir",
        default="data",
        help="Directory holding SchoolPeriods.json, activities.json, tasks.json and settings.json (default: data)"
    )
    
    parser.add_argument(
        "--week",
        default=None,
        help="Week designator (A or B). Default: current_week from settings.json"
    )
    
    parser.add_argument(
        "--year-level",
        type=int,
        default=None,
        help="Year level used for the Wednesday schedule. Default: year_level from settings.json"
    )
    
    parser.add_argument(
        "--from",
        dest="start",
        type=parse_datetime,
        default=None,
        help="Window start (format: YYYY-MM-DDTHH:MM). Default: now"
    )
    
    parser.add_argument(
        "--hours",
        type=parse_hours,
        default=12.0,
        help="Window length in hours (default: 12)"
    )
    
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ChartMode],
        default=ChartMode.COMBINED.value,
        help="Streams shown in the radial chart payload (default: combined)"
    )
    
    parser.add_argument(
        "-o", "--output",
        default="timetable.ics",
        help="Output file path (default: timetable.ics)"
    )
    
    parser.add_argument(
        "--arcs",
        default=None,
        help="Also write the radial chart payload to this JSON file"
    )
    
    parser.add_argument(
        "--tasks",
        action="store_true",
        help="Print the weighted completion of every task"
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    
    args = parser.parse_args()
    _setup_logging(args.verbose)
    
    # Ensure output file has .ics extension
    output_path = args.output
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"
    
    try:
        store = JsonStore(args.data_dir)
        settings = store.load_settings()
        week = (args.week or settings.current_week).upper()
        year_level = args.year_level if args.year_level is not None else settings.year_level
        
        start = args.start or datetime.now().replace(microsecond=0)
        end = start + timedelta(hours=args.hours)
        
        catalog = store.load_catalog()
        periods = periods_in_window(catalog, week, year_level, start, end)
        activities = activities_in_window(store.load_activities(), start, end)
        
        print(f"Found {len(periods)} periods and {len(activities)} activities "
              f"(week {week}, year {year_level}).")
        
        if not periods and not activities:
            print("Warning: Nothing scheduled. The output file will be empty.")
        
        transformer = ICalTransformer()
        transformer.transform(periods, activities, start, end)
        transformer.save(output_path)
        print(f"Timetable saved to: {output_path}")
        print(f"Window: {start:%Y-%m-%d %H:%M} to {end:%Y-%m-%d %H:%M}")
        
        if args.arcs:
            radial = RadialTransformer(ChartMode(args.mode))
            arcs = radial.transform(periods, activities, start, end)
            radial.save(args.arcs)
            print(f"Chart payload with {len(arcs)} arcs saved to: {args.arcs}")
        
        if args.tasks:
            for task in store.load_tasks():
                print(f"{task.title or task.id}: {completion(task):.0f}% Completed")
        
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected failure")
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
