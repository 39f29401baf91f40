"""Rendering and reporting for the ant maze simulation."""

from .visualizer import Visualizer
from .reporter import Reporter

__all__ = ['Visualizer', 'Reporter']
