"""Helpers for building observability backend queries, and the ``swctl`` command."""

__version__ = "0.1.0"