"""Ant colony foraging in a generated maze."""

__version__ = "0.1.0"
