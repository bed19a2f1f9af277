"""notizapp - a small personal note keeper with a trash can."""

__version__ = "0.1.0"
