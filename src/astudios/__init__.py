"""astudios - side-by-side Android Studio version manager."""

__version__ = "0.1.0"
