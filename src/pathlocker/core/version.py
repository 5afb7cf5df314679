"""Version information for pathlocker."""

__version__ = "1.0.0"
