"""Permitrack - entry/exit permit tracking service."""

__version__ = "0.1.0"
