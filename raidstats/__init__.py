"""Suivi de statistiques de raids."""

__version__ = "0.1.0"
