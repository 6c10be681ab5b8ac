"""
Version information for the ProConnect API.
"""

__version__ = "1.0.0"
