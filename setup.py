# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.


import re
import sys
from pathlib import Path

# Ensure we have the minimum Python version
if sys.version_info < (3, 10):
    print("Error: tensorcore requires Python 3.10 or later")
    sys.exit(1)

try:
    from setuptools import find_packages, setup
except ImportError:
    print("Error: setuptools is required to build tensorcore")
    print("Please install it with: pip install setuptools")
    sys.exit(1)

HERE = Path(__file__).parent

# Read the README file
readme_path = HERE / "README.md"
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

version_text = (HERE / "tensorcore" / "_version.py").read_text(encoding="utf-8")
VERSION = re.search(r'^__version__ = "([^"]+)"', version_text, re.M).group(1)

# Minimal dependencies - keep this lean for production
INSTALL_REQUIRES = [
    "numpy",
]

# Development dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest",
        "pytest-benchmark",
    ],
    "test": [
        "pytest",
        "pytest-benchmark",
        "numpy",
    ],
}

# Add 'all' extra that includes everything
EXTRAS_REQUIRE["all"] = sorted(
    {dep for deps in EXTRAS_REQUIRE.values() for dep in deps}
)

setup(
    name="tensorcore",
    version=VERSION,
    description="A minimal N-dimensional tensor core with zero-copy buffer views",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Soumyadip Sarkar",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    packages=find_packages(include=["tensorcore", "tensorcore.*"]),
    include_package_data=True,
    zip_safe=False,
    keywords=["tensor", "ndarray", "numpy", "zero-copy"],
)
