"""Hopfield network modules and functional API."""
