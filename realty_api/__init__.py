"""REST backend for a real-estate agent's marketing site."""

__version__ = "1.0.0"
