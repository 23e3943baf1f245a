"""Segment merger collapsing equal-power runs into steps."""

import logging
from typing import List, Sequence, Union

from models.workout import MergedStep, Segment, TextHint

logger = logging.getLogger(__name__)


class SegmentMerger:
    """Collapse adjacent segments with identical power.

    Powers are compared exactly. Step boundaries are always a subset of
    the segment boundaries, and merging an already merged list is a no-op.
    """

    def merge(self, segments: Sequence[Union[Segment, MergedStep]]) -> List[MergedStep]:
        """Merge consecutive equal-power segments.

        Args:
            segments: Contiguous segments (or steps) in time order

        Returns:
            Steps with hint offsets rebased to the step start
        """
        steps: List[MergedStep] = []
        run: List[Union[Segment, MergedStep]] = []

        for segment in segments:
            if run and segment.power != run[0].power:
                steps.append(self._close(run))
                run = []
            run.append(segment)

        if run:
            steps.append(self._close(run))

        logger.debug(f"Merged {len(segments)} segments into {len(steps)} steps")
        return steps

    def _close(self, run: List[Union[Segment, MergedStep]]) -> MergedStep:
        hints: List[TextHint] = []
        consumed = 0.0
        for segment in run:
            hints.extend(
                TextHint(offset=consumed + hint.offset, text=hint.text)
                for hint in segment.hints
            )
            consumed += segment.duration

        return MergedStep(
            start=run[0].start,
            duration=consumed,
            power=run[0].power,
            hints=tuple(hints),
        )
