"""Visualization module for room detection.

This module renders detected rooms and their walls to PNG images.
"""

from .generator import generate_floor_image

__all__ = ["generate_floor_image"]
