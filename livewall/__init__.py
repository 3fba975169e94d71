"""Read video track metadata from MP4 files, with a small command line front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]