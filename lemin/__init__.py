"""Ant farm routing: validate a farm, find routes, list the ants' moves, and draw them."""

__version__ = "0.1.0"