"""Drive cargo builds, decode their JSON messages and locate built binaries."""

__version__ = "0.1.0"

__all__ = ["__version__"]