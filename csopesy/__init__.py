"""Process scheduler emulator with an interactive shell and a marquee console."""

__version__ = "0.1.0"
__all__ = ["__version__"]