"""Filtering, copying and orchestration for the Image Finder tool."""

from .image_filter import ImageFilter, evaluate_dimensions
from .copier import CopyExecutor
from .pipeline import ImagePipeline, run_pipeline

__all__ = [
    'ImageFilter',
    'evaluate_dimensions',
    'CopyExecutor',
    'ImagePipeline',
    'run_pipeline',
]
