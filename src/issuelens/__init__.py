"""issuelens - overlay validator issues onto JSON documents."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("issuelens")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from issuelens.server import create_server, main

__all__ = ["__version__", "create_server", "main"]
