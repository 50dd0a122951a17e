"""Commute timing prediction and delay response engine."""

__version__ = "0.1.0"
