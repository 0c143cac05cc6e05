"""Tableside - restaurant front-of-house API"""

__version__ = "1.0.0"
