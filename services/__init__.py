"""
Services package for Bakery Orders
Contains business logic services
"""

from .password_service import PasswordService
from .data_generator import DataGenerator
from .order_service import OrderService
from .dashboard_service import DashboardService

__all__ = [
    'PasswordService', 'DataGenerator', 'OrderService', 'DashboardService'
]
