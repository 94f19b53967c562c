"""
Utility modules for rotorsim
"""

from .console import console

__all__ = ["console"]
