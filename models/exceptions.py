"""Error kinds raised while building a course."""


class CourseBuilderError(ValueError):
    """Base class for every failure of a course build."""


class OrderingError(CourseBuilderError):
    """Raised when samples are out of order or two power values share a timestamp."""


class MissingInitialPowerError(CourseBuilderError):
    """Raised when no power is defined at time 0."""


class InvalidParameterError(CourseBuilderError):
    """Raised when a scaling or rasterization parameter is out of range."""


class EmptyWorkoutError(CourseBuilderError):
    """Raised when there is nothing to build a workout from."""


class InvalidSampleError(CourseBuilderError):
    """Raised when a single sample is unusable (negative time, no payload)."""


class CsvFormatError(CourseBuilderError):
    """Raised when a course CSV file is malformed."""
