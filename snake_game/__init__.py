"""Terminal Snake with obstacle levels"""

__version__ = "1.0.0"
