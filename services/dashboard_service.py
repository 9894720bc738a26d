"""
Dashboard service - delivery and sales statistics
"""
import calendar
from datetime import date, timedelta
from typing import Optional

from models.order import OrderState
from models.dashboard import DashboardData, DeliveryStats
from database.repository import OrderRepository

SALES_YEARS = 3


class DashboardService:
    # Aggregates order data for the dashboard view

    def __init__(self, order_repository: OrderRepository, today: Optional[date] = None):
        self.order_repo = order_repository
        # Fixed reference date, falls back to the clock when unset
        self.today = today

    def get_delivery_stats(self, today: Optional[date] = None) -> DeliveryStats:
        today = today or self.today or date.today()
        return DeliveryStats(
            delivered_today=self.order_repo.count_by_due_date_and_state(today, OrderState.DELIVERED),
            due_today=self.order_repo.count_by_due_date(today),
            due_tomorrow=self.order_repo.count_by_due_date(today + timedelta(days=1)),
            not_available_today=self.order_repo.count_by_due_date_and_state(today, OrderState.PROBLEM),
            new_orders=self.order_repo.count_by_state(OrderState.NEW)
        )

    def get_dashboard_data(self, today: Optional[date] = None) -> DashboardData:
        today = today or self.today or date.today()

        days_in_month = calendar.monthrange(today.year, today.month)[1]
        per_day = self.order_repo.count_delivered_per_day(today.year, today.month)
        per_month = self.order_repo.count_delivered_per_month(today.year)

        sales_per_month = []
        for years_back in range(SALES_YEARS):
            sales = self.order_repo.sales_per_month(today.year - years_back)
            sales_per_month.append([sales.get(month, 0) for month in range(1, 13)])

        # Products sharing a name are reported together
        product_deliveries = {}
        for name, quantity in self.order_repo.product_deliveries(today.year, today.month):
            product_deliveries[name] = product_deliveries.get(name, 0) + quantity
        product_deliveries = dict(sorted(product_deliveries.items(),
                                         key=lambda entry: (-entry[1], entry[0])))

        return DashboardData(
            delivery_stats=self.get_delivery_stats(today),
            deliveries_this_month=[per_day.get(day, 0) for day in range(1, days_in_month + 1)],
            deliveries_this_year=[per_month.get(month, 0) for month in range(1, 13)],
            sales_per_month=sales_per_month,
            product_deliveries=product_deliveries
        )
