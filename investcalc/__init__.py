"""
Real estate investment calculator.
"""

__version__ = "0.1.0"
