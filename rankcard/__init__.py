"""Rank Card Service — renders rank/XP progress cards as PNG images.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
