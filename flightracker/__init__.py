"""Live flight tracking service and viewer core."""

__version__ = "0.1.0"
