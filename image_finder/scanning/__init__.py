"""Discovery modules for the Image Finder tool."""

from .classifier import is_image, guess_mime
from .walker import DirectoryWalker, DirectoryListing, discover_images

__all__ = [
    'is_image',
    'guess_mime',
    'DirectoryWalker',
    'DirectoryListing',
    'discover_images',
]
