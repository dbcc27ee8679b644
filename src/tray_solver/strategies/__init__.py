"""
Strategies Package - Concrete move generators.

Import this module to register all built-in generators.
"""

from .piece_centric import PieceCentricGenerator
from .gap_centric import GapCentricGenerator

__all__ = [
    "PieceCentricGenerator",
    "GapCentricGenerator",
]
