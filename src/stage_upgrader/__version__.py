"""Version information for stage-upgrader.

The VERSION file at the project root is the only place the version is
written: the build reads it into the package metadata, and source
checkouts that were never installed read it directly.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    __version__ = version("stage-upgrader")
except PackageNotFoundError:
    __version__ = (Path(__file__).resolve().parents[2] / "VERSION").read_text().strip()
