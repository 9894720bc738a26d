"""
Main BakeryApp class - wires repositories and services together
"""
from datetime import date
from typing import Dict, Any, Optional

from models.dashboard import DashboardData
from models.order import OrderState
from database.connection import DatabaseConnection
from database.repository import (
    UserRepository, ProductRepository, PickupLocationRepository, OrderRepository
)
from services.password_service import PasswordService
from services.data_generator import DataGenerator
from services.order_service import OrderService
from services.dashboard_service import DashboardService


class BakeryApp:
    # Entry point for every operation, owns one database connection factory

    def __init__(self, db_path: str = "bakery.db", seed: int = 1, today: Optional[date] = None):
        self.db_connection = DatabaseConnection(db_path)
        self.today = today

        # Repository layer
        self.user_repo = UserRepository(self.db_connection)
        self.product_repo = ProductRepository(self.db_connection)
        self.pickup_location_repo = PickupLocationRepository(self.db_connection)
        self.order_repo = OrderRepository(self.db_connection)

        # Service layer
        self.password_service = PasswordService()
        self.data_generator = DataGenerator(
            self.user_repo, self.product_repo, self.pickup_location_repo,
            self.order_repo, self.password_service, seed=seed, today=today
        )
        self.order_service = OrderService(self.order_repo, self.user_repo)
        self.dashboard_service = DashboardService(self.order_repo, today=today)

    # === Demo data ===
    def load_data(self) -> bool:
        # Seed an empty database, returns False when it was already seeded
        return self.data_generator.load_data()

    # === Orders ===
    def get_order_details(self, order_id: int) -> Dict[str, Any]:
        return self.order_service.get_order_details(order_id)

    def change_order_state(self, order_id: int, user_email: str, new_state: OrderState,
                           message: Optional[str] = None) -> Dict[str, Any]:
        return self.order_service.change_state(order_id, user_email, new_state, message)

    def add_order_comment(self, order_id: int, user_email: str, message: str) -> Dict[str, Any]:
        return self.order_service.add_comment(order_id, user_email, message)

    # === Dashboard ===
    def get_dashboard_data(self, today: Optional[date] = None) -> DashboardData:
        return self.dashboard_service.get_dashboard_data(today)
