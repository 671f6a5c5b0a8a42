"""Functional API for discrete Hopfield networks."""

from .hopfield import (
    bipolar_sign,
    energy,
    finalize_weights,
    hebbian_outer_sum,
    local_field,
    unit_energies,
    unstable_units,
)

__all__ = [
    "bipolar_sign",
    "energy",
    "finalize_weights",
    "hebbian_outer_sum",
    "local_field",
    "unit_energies",
    "unstable_units",
]
