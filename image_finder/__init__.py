"""Image Finder - collect images above a minimum resolution from many directories."""

__version__ = "1.0.0"
__author__ = "Image Finder Team"

# Import key classes for convenient top-level access
from .errors import ImageFinderError, StructuralError
from .models import FilterCriteria, ImagePreference, OutputFormat, RunStats
from .scanning import DirectoryWalker, is_image
from .processing import ImageFilter, CopyExecutor, ImagePipeline, run_pipeline
from .settings import Settings, ResolvedConfig, load_settings, write_default_settings

__all__ = [
    # Core classes
    'ImagePipeline',
    'DirectoryWalker',
    'ImageFilter',
    'CopyExecutor',

    # Configuration
    'Settings',
    'ResolvedConfig',
    'load_settings',
    'write_default_settings',

    # Data models
    'FilterCriteria',
    'ImagePreference',
    'OutputFormat',
    'RunStats',

    # Functions
    'is_image',
    'run_pipeline',

    # Errors
    'ImageFinderError',
    'StructuralError',

    # Package metadata
    '__version__',
    '__author__'
]
