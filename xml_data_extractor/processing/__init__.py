"""Batch processing components."""

from .sequential_extractor import SequentialExtractor

__all__ = ['SequentialExtractor']
