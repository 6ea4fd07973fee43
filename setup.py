"""
Setup script for pdfattach.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
with open(this_directory / "requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line.strip()]

setup(
    name="pdfattach",
    version="1.0.0",
    description="Attach a file to a PDF and convert it to PDF/A with an embedded, declared attachment",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfattach Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "pdfattach": ["resources/*.icm", "resources/fonts/*.ttf"],
    },
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdfattach=pdfattach.cli.main:run",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf pdfa pdf/a attachment embedded-file archive icc conversion",
    include_package_data=True,
    zip_safe=False,
)
