"""
Version metadata for the Ames Housing exploration package.

The version string lives in pyproject.toml and is read back through
importlib.metadata when the package is installed.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ames-housing-exploration")
except PackageNotFoundError:
    __version__ = "0.0.0"
