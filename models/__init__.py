"""
Models package for Bakery Orders
Contains data models and type definitions
"""

from .product import Product, PickupLocation
from .user import User, Role
from .order import Order, OrderItem, OrderState, HistoryItem, Customer
from .dashboard import DashboardData, DeliveryStats

__all__ = [
    'Product', 'PickupLocation',
    'User', 'Role',
    'Order', 'OrderItem', 'OrderState', 'HistoryItem', 'Customer',
    'DashboardData', 'DeliveryStats'
]
