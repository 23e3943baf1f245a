"""Normalizer turning raw course samples into a validated timeline."""

import logging
import math
from typing import Iterable, List

import pandas as pd

from models.exceptions import (
    EmptyWorkoutError,
    InvalidSampleError,
    MissingInitialPowerError,
    OrderingError,
)
from models.workout import Sample, Timeline

logger = logging.getLogger(__name__)


class Normalizer:
    """Validate and sort samples into a carry-forward power timeline."""

    def __init__(self, strict_order: bool = False):
        """Initialize normalizer.

        Args:
            strict_order: Reject samples whose time decreases instead of sorting them
        """
        self.strict_order = strict_order

    def normalize(self, samples: Iterable[Sample]) -> Timeline:
        """Build a timeline from raw samples.

        Args:
            samples: Samples in file order

        Returns:
            Timeline sorted by time, ties kept in input order

        Raises:
            EmptyWorkoutError: If there are no samples
            InvalidSampleError: If a sample has a negative time or no payload
            OrderingError: If times decrease (strict mode) or two powers share a time
            MissingInitialPowerError: If no power is defined at time 0
        """
        samples = list(samples)
        if not samples:
            raise EmptyWorkoutError("Course contains no samples")

        for line, sample in enumerate(samples, start=1):
            self._validate_sample(sample, line)

        if self.strict_order:
            self._check_monotonic(samples)

        df = pd.DataFrame({
            'time': [s.time for s in samples],
            'has_power': [s.has_power for s in samples],
        })
        df = df.sort_values('time', kind='stable')

        power_times = df.loc[df['has_power'], 'time']
        collisions = power_times[power_times.duplicated()]
        if not collisions.empty:
            raise OrderingError(
                f"Multiple power values at time {collisions.iloc[0]:g}s"
            )

        if power_times.empty or power_times.iloc[0] > 0:
            raise MissingInitialPowerError("No power defined at time 0")

        timeline = Timeline(samples=tuple(samples[i] for i in df.index))
        logger.debug(
            f"Normalized {len(timeline)} samples "
            f"({len(power_times)} power events, {len(timeline.text_events)} text events)"
        )
        return timeline

    def _validate_sample(self, sample: Sample, line: int):
        if not math.isfinite(sample.time) or sample.time < 0:
            raise InvalidSampleError(f"Sample {line}: time must be a non-negative number")
        if not sample.has_power and not sample.has_text:
            raise InvalidSampleError(f"Sample {line}: neither power nor text given")

    def _check_monotonic(self, samples: List[Sample]):
        for line, (previous, current) in enumerate(zip(samples, samples[1:]), start=2):
            if current.time < previous.time:
                raise OrderingError(
                    f"Sample {line}: time {current.time:g}s is before last time {previous.time:g}s"
                )
