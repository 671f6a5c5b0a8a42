"""Utility modules for Hopfield associative memories.

This package provides state generation, pattern corruption and similarity
helpers, and weight-matrix persistence.
"""

from .generators import StateGenerator
from .masking import add_noise, flip_bits, hamming_distance, overlap
from .persistence import load_weights, save_weights

__all__ = [
    # Generation
    "StateGenerator",
    # Corruption and similarity
    "add_noise",
    "flip_bits",
    "hamming_distance",
    "overlap",
    # Persistence
    "load_weights",
    "save_weights",
]
