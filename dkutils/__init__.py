"""
dkutils - shared helpers for file handling, conversions, dates, JSON and validation.
"""

__version__ = "1.0.0"
