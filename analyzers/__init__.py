"""Course building stages: normalize, scale, rasterize, merge."""

from .normalizer import Normalizer
from .scaler import Scaler
from .rasterizer import Rasterizer
from .merger import SegmentMerger
from .course_builder import CourseBuilder, assemble_workout

__all__ = [
    'Normalizer',
    'Scaler',
    'Rasterizer',
    'SegmentMerger',
    'CourseBuilder',
    'assemble_workout',
]
