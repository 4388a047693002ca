#!/usr/bin/env python

"""
Ref: https://github.com/argoai/argoverse-api/blob/master/setup.py
A setuptools based setup module.
See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""

from pathlib import Path

# Always prefer setuptools over distutils
from setuptools import find_packages, setup

# Get the long description from the README file
long_description = (Path(__file__).parent / "README.md").read_text()

setup(
    name="sfmstats",
    version="0.1.0",
    description="Quality-control statistics of sparse 3D reconstructions.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="",
    author="",
    author_email="",
    license="BSD-3-Clause",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: POSIX",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Image Recognition",
    ],
    keywords="computer-vision structure-from-motion",
    packages=find_packages(include=["sfmstats", "sfmstats.*"]),
    package_data={"sfmstats": ["configs/*.yaml"]},
    include_package_data=True,
    python_requires=">= 3.8",
    install_requires=[
        "dask[distributed]",
        "gtsam>=4.2",
        "hydra-core>=1.2",
        "numpy",
        "omegaconf",
        "simplejson",
    ],
    extras_require={"test": ["pytest"]},
)
