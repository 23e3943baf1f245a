#!/usr/bin/env python3
"""Basic example of turning a course CSV into a Zwift workout."""

import sys
from pathlib import Path

# Add the parent directory to the path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from parsers.csv_parser import CsvParser
from analyzers.course_builder import CourseBuilder
from visualizers.zwo_generator import ZwoGenerator


def build_course(file_path: str, output_dir: str = "output", accel: float = 1.0):
    """Build a workout from a course file and write the .zwo and summary."""

    # Initialize components
    parser = CsvParser(ftp=settings.get_ftp())
    builder = CourseBuilder(raster=settings.DEFAULT_RASTER_SECONDS, accel=accel,
                            power_precision=settings.POWER_PRECISION)
    generator = ZwoGenerator()

    print(f"Parsing course file: {file_path}")
    samples = parser.parse_file(Path(file_path))
    print(f"Rows read: {len(samples)}")

    name = Path(file_path).stem.replace('_', ' ').title()
    workout = builder.build(samples, name=name, author=settings.DEFAULT_AUTHOR)

    summary = builder.summarize(workout)
    print("\n=== COURSE SUMMARY ===")
    print(f"Duration: {summary['duration_minutes']} min")
    print(f"Steps: {summary['step_count']}")
    print(f"Text Events: {summary['hint_count']}")
    print(f"Average Power: {summary['avg_power']:.0%} FTP")
    print(f"Training Stress Score: {summary['training_stress_score']:.0f}")

    output_path = Path(output_dir)
    zwo_file = generator.write(workout, output_path / f"{Path(file_path).stem}.zwo")
    print(f"\nWorkout saved to {zwo_file}")
    summary_file = generator.write(workout, output_path / f"{Path(file_path).stem}.md", format='summary')
    print(f"Summary saved to {summary_file}")

    return workout


def main():
    """Main function for command line usage."""
    if len(sys.argv) < 2:
        print("Usage: python basic_course.py <course_file> [output_dir] [acceleration]")
        print("Example: python basic_course.py hill_ride.csv")
        sys.exit(1)

    file_path = sys.argv[1]
    output_dir = sys.argv[2] if len(sys.argv) > 2 else "output"
    accel = float(sys.argv[3]) if len(sys.argv) > 3 else 1.0

    if not Path(file_path).exists():
        print(f"File not found: {file_path}")
        sys.exit(1)

    try:
        build_course(file_path, output_dir, accel)
        print("\nDone!")
    except ValueError as e:
        print(f"Error building course: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
