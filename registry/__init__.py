"""Self-curated project registry service."""

__version__ = "0.1.0"
