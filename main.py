#!/usr/bin/env python3
"""Main entry point for Course Builder."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import settings
from parsers.csv_parser import CsvParser
from analyzers.course_builder import CourseBuilder
from models.workout import WorkoutDescriptor
from visualizers.zwo_generator import ZwoGenerator

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Set up logging configuration.

    Logs go to stderr so the rendered workout can be piped from stdout.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='course-builder',
        description='Build a Zwift workout file from a CSV course of time, power and text hints',
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=(
            'Examples:\n'
            '  %(prog)s "Hill Ride" course.csv > hill_ride.zwo\n'
            '  %(prog)s "Hill Ride" course.csv --ftp 280 --scale 1.05 -o hill_ride.zwo\n'
            '  %(prog)s "Fast Ride" course.csv --acceleration 2 --raster 10\n'
            '  %(prog)s "Hill Ride" course.csv --format summary'
        )
    )

    parser.add_argument('name', help='Course name')
    parser.add_argument('file', help='Path to the CSV file to read (time,power,text)')

    parser.add_argument(
        '--description', '-d', help='Optional course description'
    )
    parser.add_argument(
        '--author', '-A', default=settings.DEFAULT_AUTHOR, help='Course author'
    )
    parser.add_argument(
        '--sport-type', '-T', default=settings.DEFAULT_SPORT_TYPE, help='Sport type of the workout'
    )
    parser.add_argument(
        '--tag', dest='tags', action='append', default=[], help='Workout tag (repeatable)'
    )
    parser.add_argument(
        '--time-mode', '-t', choices=settings.TIME_MODES, default=settings.DEFAULT_TIME_MODE,
        help='"time": offsets from the start, "duration": length of each row'
    )
    parser.add_argument(
        '--ftp', type=float, help='Functional Threshold Power (W), defaults to $FTP or 250'
    )
    parser.add_argument(
        '--power-unit', choices=settings.POWER_UNITS, default=settings.DEFAULT_POWER_UNIT,
        help='Unit of the power column'
    )
    parser.add_argument(
        '--acceleration', '-a', type=float, default=1.0, help='Time shrink factor'
    )
    parser.add_argument(
        '--scale', '-s', type=float, default=1.0, help='Power scale factor'
    )
    parser.add_argument(
        '--raster', '-r', type=float, default=settings.DEFAULT_RASTER_SECONDS,
        help='Duration rasterization in seconds'
    )
    parser.add_argument(
        '--raster-basis', choices=settings.RASTER_BASES, default=settings.DEFAULT_RASTER_BASIS,
        help='"source": raster in course-file seconds, "output": raster in workout seconds'
    )
    parser.add_argument(
        '--strict-order', action='store_true',
        help='Fail on decreasing times instead of sorting rows'
    )
    parser.add_argument(
        '--format', '-f', choices=settings.OUTPUT_FORMATS, default=settings.DEFAULT_OUTPUT_FORMAT,
        help='Output format'
    )
    parser.add_argument(
        '--output', '-o', help='Output file, defaults to stdout'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', help='Enable verbose logging'
    )

    return parser.parse_args(argv)


class CourseBuilderApp:
    """Main application class."""

    def __init__(self, args: argparse.Namespace):
        """Initialize the application from parsed arguments."""
        self.args = args
        ftp = args.ftp if args.ftp is not None else settings.get_ftp()
        self.csv_parser = CsvParser(ftp=ftp, time_mode=args.time_mode, power_unit=args.power_unit)
        self.course_builder = CourseBuilder(
            raster=args.raster,
            accel=args.acceleration,
            power_scale=args.scale,
            raster_basis=args.raster_basis,
            power_precision=settings.POWER_PRECISION,
            strict_order=args.strict_order,
        )
        self.zwo_generator = ZwoGenerator()

    def build(self) -> WorkoutDescriptor:
        """Read the course file and build the workout."""
        file_path = Path(self.args.file)
        logger.info(f"Building course from: {file_path}")
        samples = self.csv_parser.parse_file(file_path)
        return self.course_builder.build(
            samples,
            name=self.args.name,
            author=self.args.author,
            description=self.args.description,
            sport_type=self.args.sport_type,
            tags=self.args.tags,
        )

    def output(self, workout: WorkoutDescriptor):
        """Write the workout to the output file or stdout."""
        if self.args.output:
            self.zwo_generator.write(workout, self.args.output, self.args.format)
        else:
            sys.stdout.write(self.zwo_generator.generate(workout, self.args.format))


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        app = CourseBuilderApp(args)
        workout = app.build()
        app.output(workout)
    except (ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return 1

    summary = workout.get_summary()
    logger.info(
        f"{workout.name} - {summary['duration_minutes']:.1f} min, "
        f"{summary['step_count']} steps, "
        f"IF {summary['intensity_factor']:.2f}, TSS {summary['training_stress_score']:.0f}"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
