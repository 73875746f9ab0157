"""Utility functions for coordinate handling."""

from .coordinate_utils import hemisphere, to_nmea_coord

__all__ = [
    "hemisphere",
    "to_nmea_coord",
]
