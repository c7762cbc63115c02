"""Resume feedback service: community insight collection and resume scoring."""

__version__ = "1.0.0"
