"""Exoplanet candidate classifier: KOI scoring engine and HTTP API."""

__version__ = "1.0.0"
