"""Version information for view-lookup."""

__version__ = "0.1.0"
