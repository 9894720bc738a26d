"""
Dashboard statistics data models
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any


@dataclass
class DeliveryStats:
    """Order counts shown at the top of the dashboard"""
    delivered_today: int = 0
    due_today: int = 0
    due_tomorrow: int = 0
    not_available_today: int = 0
    new_orders: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delivered_today": self.delivered_today,
            "due_today": self.due_today,
            "due_tomorrow": self.due_tomorrow,
            "not_available_today": self.not_available_today,
            "new_orders": self.new_orders
        }


@dataclass
class DashboardData:
    """Aggregated delivery and sales figures"""
    delivery_stats: DeliveryStats
    deliveries_this_month: List[int] = field(default_factory=list)
    deliveries_this_year: List[int] = field(default_factory=list)
    # Row 0 is the current year, row 1 the year before, and so on
    sales_per_month: List[List[int]] = field(default_factory=list)
    product_deliveries: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "delivery_stats": self.delivery_stats.to_dict(),
            "deliveries_this_month": self.deliveries_this_month,
            "deliveries_this_year": self.deliveries_this_year,
            "sales_per_month": self.sales_per_month,
            "product_deliveries": self.product_deliveries
        }
