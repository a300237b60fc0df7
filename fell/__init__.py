"""Seeded room-grid level generation for a side-view platformer."""

__version__ = "0.1.0"
