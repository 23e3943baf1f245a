"""Data models for course building."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .zones import ZoneCalculator


@dataclass(frozen=True)
class Sample:
    """One raw course row.

    Attributes:
        time: Offset from workout start in seconds
        power: Power as a fraction of FTP (1.0 = threshold)
        text: Short annotation shown to the rider
    """

    time: float
    power: Optional[float] = None
    text: Optional[str] = None

    @property
    def has_power(self) -> bool:
        return self.power is not None

    @property
    def has_text(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class SampleTable:
    """Parsed course rows in file order."""

    samples: Tuple[Sample, ...]
    source: Optional[Path] = None

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class Timeline:
    """Validated samples sorted by time.

    The effective power at any instant is the power of the latest
    power-bearing sample at or before it. Lookups binary-search the
    power event times instead of expanding the step function.
    """

    samples: Tuple[Sample, ...]
    _power_times: np.ndarray = field(init=False, repr=False, compare=False)
    _power_values: Tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        power_samples = [s for s in self.samples if s.has_power]
        object.__setattr__(
            self, '_power_times', np.array([s.time for s in power_samples], dtype=float)
        )
        object.__setattr__(self, '_power_values', tuple(s.power for s in power_samples))

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def total_duration(self) -> float:
        """Time of the last sample, which marks the end of the workout."""
        if not self.samples:
            return 0.0
        return self.samples[-1].time

    @property
    def text_events(self) -> Tuple[Sample, ...]:
        return tuple(s for s in self.samples if s.has_text)

    def power_at(self, time: float) -> float:
        """Evaluate the carried-forward power at a single instant.

        Raises:
            ValueError: If no power is defined at or before ``time``
        """
        return self.power_at_many([time])[0]

    def power_at_many(self, times: Sequence[float]) -> List[float]:
        """Evaluate the carried-forward power at several instants.

        Args:
            times: Query instants in seconds

        Returns:
            One power value per query instant
        """
        indices = np.searchsorted(self._power_times, np.asarray(times, dtype=float), side='right') - 1
        if len(indices) and indices.min() < 0:
            raise ValueError("No power defined before the requested time")
        return [self._power_values[i] for i in indices.tolist()]


@dataclass(frozen=True)
class TextHint:
    """Annotation placed ``offset`` seconds after the start of its step."""

    offset: float
    text: str


@dataclass(frozen=True)
class Segment:
    """Raster-aligned slice of the step function."""

    start: float
    duration: float
    power: float
    hints: Tuple[TextHint, ...] = ()

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class MergedStep:
    """Maximal run of adjacent segments sharing the same power."""

    start: float
    duration: float
    power: float
    hints: Tuple[TextHint, ...] = ()

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class WorkoutDescriptor:
    """Finished workout handed to the serializer."""

    name: str
    steps: Tuple[MergedStep, ...]
    author: str
    description: Optional[str] = None
    sport_type: str = "ride"
    tags: Tuple[str, ...] = ()

    @property
    def total_duration(self) -> float:
        """Total duration in seconds."""
        return sum(step.duration for step in self.steps)

    @property
    def duration_minutes(self) -> float:
        return self.total_duration / 60

    @property
    def hint_count(self) -> int:
        return sum(len(step.hints) for step in self.steps)

    def get_summary(self) -> Dict[str, Any]:
        """Get a time-weighted summary of the workout.

        Powers are FTP fractions, so the normalized power doubles as the
        intensity factor.
        """
        summary = {
            'name': self.name,
            'author': self.author,
            'sport_type': self.sport_type,
            'step_count': len(self.steps),
            'hint_count': self.hint_count,
            'duration_seconds': self.total_duration,
            'duration_minutes': round(self.duration_minutes, 1),
            'avg_power': None,
            'max_power': None,
            'min_power': None,
            'normalized_power': None,
            'intensity_factor': None,
            'training_stress_score': None,
            'zones': {},
        }

        total = self.total_duration
        if not self.steps or total <= 0:
            return summary

        powers = np.array([step.power for step in self.steps], dtype=float)
        durations = np.array([step.duration for step in self.steps], dtype=float)

        normalized_power = float(np.average(powers ** 4, weights=durations) ** 0.25)
        summary['avg_power'] = float(np.average(powers, weights=durations))
        summary['max_power'] = float(powers.max())
        summary['min_power'] = float(powers.min())
        summary['normalized_power'] = normalized_power
        summary['intensity_factor'] = normalized_power
        summary['training_stress_score'] = (total / 3600) * normalized_power ** 2 * 100
        summary['zones'] = ZoneCalculator.calculate_zone_time(
            list(zip(powers.tolist(), durations.tolist())),
            ZoneCalculator.get_power_zones(),
        )
        return summary
