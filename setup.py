# setup.py
"""Setup script for the Image Finder tool."""

import os

from setuptools import setup, find_packages

setup(
    name="image-finder",
    version="1.0.0",
    description="Find images above a minimum resolution and collect them in one directory",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Image Finder Team",
    packages=find_packages(exclude=["image_finder.tests", "image_finder.tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=8.0.0",
        "tqdm>=4.50.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=2.10.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "image-finder=image_finder.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
        "Topic :: System :: Filesystems",
    ],
)
