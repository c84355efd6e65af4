"""CineSocial: in-memory entity store for a social and streaming platform."""

__version__ = "0.1.0"
