"""
Torque - The Torque Paradox bottle-cap puzzle engine.

A turn-based puzzle: guess which way each cap is locked, then twist it
open with enough force before time and energy run out. The package provides:
- Bottle generation with a per-level difficulty curve
- Deterministic move resolution (jam, open, shatter, exhaust)
- A session game loop across ten bottles
- A plain-text terminal driver
"""

__version__ = "0.1.0"
