#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Extension-based image classification.

This is the cheap first stage: it never touches file contents. Whether a
candidate actually decodes is decided later by the image filter.
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

# Load the type map once, before any walker thread asks for it
mimetypes.init()


def guess_mime(path: Union[str, Path]) -> Optional[str]:
    """Return the MIME type implied by the path's extension, or None.

    Compressed wrappers such as `photo.jpg.gz` report an encoding and are
    treated as unknown, since the file on disk is not an image.
    """
    mime, encoding = mimetypes.guess_type(str(path), strict=False)
    if encoding is not None:
        return None
    return mime


def is_image(path: Union[str, Path]) -> bool:
    """Check if the path's inferred content type is image/*. The file need not exist."""
    mime = guess_mime(path)
    return mime is not None and mime.split("/", 1)[0] == "image"
