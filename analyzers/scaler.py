"""Linear time and power scaling of a timeline."""

import logging
from typing import Optional

from models.exceptions import InvalidParameterError
from models.workout import Sample, Timeline

logger = logging.getLogger(__name__)


def require_positive(name: str, value: float) -> float:
    """Return ``value`` if it is a positive number.

    Raises:
        InvalidParameterError: For zero, negative or NaN values
    """
    if not value > 0:
        raise InvalidParameterError(f"{name} must be positive, got {value!r}")
    return value


class Scaler:
    """Time acceleration and power scaling.

    Times are divided by ``accel`` and powers multiplied by ``power_scale``.
    Powers are not clamped; out-of-range values are left to the consumer.
    """

    def __init__(self, accel: float = 1.0, power_scale: float = 1.0,
                 power_precision: Optional[int] = None):
        """Initialize scaler.

        Args:
            accel: Time shrink factor, must be > 0
            power_scale: Power multiplier, must be > 0
            power_precision: Decimals to round scaled powers to, None keeps them exact
        """
        self.accel = require_positive("accel", accel)
        self.power_scale = require_positive("power_scale", power_scale)
        self.power_precision = power_precision

    def scale(self, timeline: Timeline) -> Timeline:
        """Return a new timeline with scaled times and powers."""
        if self.accel == 1.0 and self.power_scale == 1.0 and self.power_precision is None:
            return timeline

        scaled = Timeline(samples=tuple(
            Sample(
                time=sample.time / self.accel,
                power=self._scale_power(sample.power),
                text=sample.text,
            )
            for sample in timeline
        ))
        logger.debug(
            f"Scaled timeline by accel={self.accel:g}, power_scale={self.power_scale:g}: "
            f"{timeline.total_duration:g}s -> {scaled.total_duration:g}s"
        )
        return scaled

    def _scale_power(self, power: Optional[float]) -> Optional[float]:
        if power is None:
            return None
        scaled = power * self.power_scale
        if self.power_precision is not None:
            scaled = round(scaled, self.power_precision)
        return scaled
