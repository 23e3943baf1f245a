"""Rasterizer slicing a timeline into fixed-width power segments."""

import logging
import math
from typing import List

import numpy as np

from models.workout import Segment, TextHint, Timeline
from .scaler import require_positive

logger = logging.getLogger(__name__)


class Rasterizer:
    """Slice the step function at multiples of ``raster`` seconds.

    Each slice takes the power in effect at its start. A power change
    inside a slice only shows up from the next boundary on, so the raster
    must be at least as fine as the shortest power change worth keeping.
    """

    def __init__(self, raster: float = 30.0, time_scale: float = 1.0):
        """Initialize rasterizer.

        Args:
            raster: Slice width in seconds
            time_scale: Divisor applied to every boundary, so boundaries are
                computed as (k * raster) / time_scale like scaled sample times
        """
        self.raster = require_positive("raster", raster)
        self.time_scale = require_positive("time_scale", time_scale)

    @property
    def effective_raster(self) -> float:
        """Slice width on the timeline being rasterized."""
        return self.raster / self.time_scale

    def rasterize(self, timeline: Timeline) -> List[Segment]:
        """Slice a timeline into contiguous segments covering [0, total).

        Args:
            timeline: Normalized (and scaled) timeline

        Returns:
            Segments in time order; empty when the timeline has no duration
        """
        total = timeline.total_duration
        if total <= 0:
            logger.debug("Timeline has zero duration, no segments produced")
            return []

        starts = self._slice_starts(total)
        ends = starts[1:] + [total]
        powers = timeline.power_at_many(starts)

        hints: List[List[TextHint]] = [[] for _ in starts]
        if timeline.text_events:
            event_times = np.array([e.time for e in timeline.text_events], dtype=float)
            owners = np.searchsorted(np.array(starts), event_times, side='right') - 1
            for event, owner in zip(timeline.text_events, owners.tolist()):
                if event.time >= total:
                    # Annotations at the very end go to the start of the last slice
                    hints[-1].append(TextHint(offset=0.0, text=event.text))
                else:
                    hints[owner].append(TextHint(offset=event.time - starts[owner], text=event.text))

        segments = [
            Segment(start=start, duration=end - start, power=power, hints=tuple(slice_hints))
            for start, end, power, slice_hints in zip(starts, ends, powers, hints)
        ]
        logger.debug(f"Rasterized {total:g}s at {self.effective_raster:g}s into {len(segments)} segments")
        return segments

    def _slice_starts(self, total: float) -> List[float]:
        # Same operation as Scaler times, so aligned power changes match exactly
        count = int(math.ceil(total * self.time_scale / self.raster)) + 1
        starts = [(k * self.raster) / self.time_scale for k in range(count)]
        return [start for start in starts if start < total]
