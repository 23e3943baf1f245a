"""Output generation for built workouts."""

from .zwo_generator import ZwoGenerator

__all__ = ['ZwoGenerator']
