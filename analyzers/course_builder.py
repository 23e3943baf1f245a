"""Course builder running the sample-to-workout pipeline."""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from models.exceptions import EmptyWorkoutError, InvalidParameterError
from models.workout import MergedStep, Sample, WorkoutDescriptor
from .normalizer import Normalizer
from .scaler import Scaler
from .rasterizer import Rasterizer
from .merger import SegmentMerger

logger = logging.getLogger(__name__)

RASTER_BASES = ("source", "output")


def assemble_workout(steps: Sequence[MergedStep], name: str, author: str,
                     description: Optional[str] = None, sport_type: str = "ride",
                     tags: Iterable[str] = ()) -> WorkoutDescriptor:
    """Wrap merged steps with course metadata.

    Raises:
        EmptyWorkoutError: If there are no steps
    """
    if not steps:
        raise EmptyWorkoutError("Workout has no steps; the course has zero duration")

    return WorkoutDescriptor(
        name=name,
        steps=tuple(steps),
        author=author,
        description=description,
        sport_type=sport_type,
        tags=tuple(tags),
    )


class CourseBuilder:
    """Build workouts from course samples.

    Stages run in order (normalize, scale, rasterize, merge, assemble) and
    the first failure aborts the build.
    """

    def __init__(self, raster: float = 30.0, accel: float = 1.0, power_scale: float = 1.0,
                 raster_basis: str = "source", power_precision: Optional[int] = None,
                 strict_order: bool = False):
        """Initialize course builder.

        Args:
            raster: Slice width in seconds
            accel: Time shrink factor
            power_scale: Power multiplier
            raster_basis: 'source' measures the raster in course-file seconds,
                'output' in seconds of the produced workout
            power_precision: Decimals to round scaled powers to
            strict_order: Reject decreasing times instead of sorting
        """
        if raster_basis not in RASTER_BASES:
            raise InvalidParameterError(
                f"raster_basis must be one of {', '.join(RASTER_BASES)}, got {raster_basis!r}"
            )

        self.normalizer = Normalizer(strict_order=strict_order)
        self.scaler = Scaler(accel=accel, power_scale=power_scale, power_precision=power_precision)
        self.raster = raster
        self.raster_basis = raster_basis

        if raster_basis == "source":
            self.rasterizer = Rasterizer(raster, time_scale=self.scaler.accel)
        else:
            self.rasterizer = Rasterizer(raster)
        self.merger = SegmentMerger()

    def build(self, samples: Iterable[Sample], name: str, author: str,
              description: Optional[str] = None, sport_type: str = "ride",
              tags: Iterable[str] = ()) -> WorkoutDescriptor:
        """Build a workout from raw samples.

        Args:
            samples: Course samples, e.g. a SampleTable
            name: Workout name
            author: Workout author
            description: Optional description
            sport_type: Sport tag of the workout
            tags: Workout tags

        Returns:
            Finished WorkoutDescriptor
        """
        timeline = self.normalizer.normalize(samples)
        scaled = self.scaler.scale(timeline)
        segments = self.rasterizer.rasterize(scaled)
        steps = self.merger.merge(segments)

        workout = assemble_workout(
            steps,
            name=name,
            author=author,
            description=description,
            sport_type=sport_type,
            tags=tags,
        )
        logger.info(
            f"Built '{name}': {len(workout.steps)} steps from {len(segments)} segments, "
            f"{workout.total_duration:g}s, {workout.hint_count} text events"
        )
        return workout

    def summarize(self, workout: WorkoutDescriptor) -> Dict[str, Any]:
        """Get the summary of a built workout along with the build settings."""
        summary = workout.get_summary()
        summary['settings'] = {
            'raster': self.raster,
            'raster_basis': self.raster_basis,
            'effective_raster': self.rasterizer.effective_raster,
            'accel': self.scaler.accel,
            'power_scale': self.scaler.power_scale,
        }
        return summary
