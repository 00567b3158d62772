"""Library version information."""

from contextlib import suppress
import importlib.metadata


def extract_version() -> str:
    """Return package version.

    Returns version of the installed package, or a development marker when the
    package is imported from a source checkout without being installed.
    """
    with suppress(importlib.metadata.PackageNotFoundError):
        return importlib.metadata.version("invitation-resolver")
    return "0.1.0.dev0"


__version__ = extract_version()
