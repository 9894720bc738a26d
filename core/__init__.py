"""
Core package for Bakery Orders
Contains the application wiring
"""

from .bakery_app import BakeryApp

__all__ = [
    'BakeryApp'
]
