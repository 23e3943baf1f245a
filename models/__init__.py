"""Data models for Course Builder."""

from .workout import (
    Sample,
    SampleTable,
    Timeline,
    TextHint,
    Segment,
    MergedStep,
    WorkoutDescriptor,
)
from .zones import ZoneDefinition, ZoneCalculator
from .exceptions import (
    CourseBuilderError,
    OrderingError,
    MissingInitialPowerError,
    InvalidParameterError,
    EmptyWorkoutError,
    InvalidSampleError,
    CsvFormatError,
)

__all__ = [
    'Sample',
    'SampleTable',
    'Timeline',
    'TextHint',
    'Segment',
    'MergedStep',
    'WorkoutDescriptor',
    'ZoneDefinition',
    'ZoneCalculator',
    'CourseBuilderError',
    'OrderingError',
    'MissingInitialPowerError',
    'InvalidParameterError',
    'EmptyWorkoutError',
    'InvalidSampleError',
    'CsvFormatError',
]
