# src/qst/__init__.py
"""qst: run things quickly, restart them on changes."""

__version__ = "0.2.0"
