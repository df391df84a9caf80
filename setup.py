"""
Setup script for ultipdf.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
requirements = (this_directory / "requirements.txt").read_text(encoding='utf-8').splitlines()

setup(
    name="ultipdf",
    version="1.0.0",
    description="Stateless PDF transformation toolkit with a JSON HTTP API and a CLI",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="ultipdf Contributors",
    author_email="",
    packages=find_packages(include=["ultipdf", "ultipdf.*"]),
    install_requires=[line for line in requirements if line and not line.startswith("#")],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.24.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ultipdf=ultipdf.cli.main:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Framework :: FastAPI",
    ],
    keywords="pdf merge split rotate watermark compress images api cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
