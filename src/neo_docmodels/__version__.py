"""Version information for neo-docmodels."""

__version__ = "0.1.0"
