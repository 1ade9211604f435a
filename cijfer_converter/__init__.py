"""Cijfer Converter - exam score to grade conversion."""

__version__ = "1.0.0"
