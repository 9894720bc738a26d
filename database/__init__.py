"""
Database package for Bakery Orders
Contains database connection and repository classes
"""

from .connection import DatabaseConnection
from .repository import (
    UserRepository, ProductRepository, PickupLocationRepository, OrderRepository
)

__all__ = [
    'DatabaseConnection',
    'UserRepository', 'ProductRepository', 'PickupLocationRepository', 'OrderRepository'
]
