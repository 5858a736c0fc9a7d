"""Installed calcpad version."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version


def get_version() -> str:
    """Return the installed distribution version, or 0.0.0 when running from a bare checkout."""
    try:
        return _metadata_version("calcpad")
    except PackageNotFoundError:
        return "0.0.0"
