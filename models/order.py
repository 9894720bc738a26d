"""
Order related data models

An order carries its own lifecycle: every state change goes through
Order.change_state, which appends exactly one HistoryItem. Transitions are
not validated against the current state; callers pick a sensible one.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional, Dict, Any
from enum import Enum

from .product import Product, PickupLocation
from .user import User

logger = logging.getLogger(__name__)


class OrderState(Enum):
    NEW = "new"
    CONFIRMED = "confirmed"
    READY = "ready"
    DELIVERED = "delivered"
    PROBLEM = "problem"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


STATE_MESSAGES = {
    OrderState.NEW: "Order placed",
    OrderState.CONFIRMED: "Order confirmed",
    OrderState.READY: "Order ready for pickup",
    OrderState.DELIVERED: "Order delivered",
    OrderState.PROBLEM: "Problem with order",
    OrderState.CANCELLED: "Order cancelled",
}


@dataclass
class Customer:
    """Customer information, owned by a single order"""
    full_name: str = ""
    phone_number: str = ""
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_name": self.full_name,
            "phone_number": self.phone_number,
            "details": self.details
        }


@dataclass
class OrderItem:
    """Order item data model"""
    product: Product
    quantity: int = 1
    comment: Optional[str] = None
    order_item_id: Optional[int] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Quantity must be positive, got {self.quantity}")

    @property
    def total_price(self) -> int:
        return self.quantity * self.product.price

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "order_item_id": self.order_item_id,
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "comment": self.comment,
            "total_price": self.total_price
        }


@dataclass(frozen=True, eq=False)
class HistoryItem:
    """Audit record of a state change or a comment (new_state is None)"""
    created_by: User
    message: str
    new_state: Optional[OrderState]
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created_by": self.created_by.email,
            "message": self.message,
            "new_state": self.new_state.value if self.new_state else None,
            "timestamp": self.timestamp.isoformat()
        }


@dataclass
class Order:
    """Order data model"""
    created_by: User
    customer: Customer = field(default_factory=Customer)
    pickup_location: Optional[PickupLocation] = None
    due_date: Optional[date] = None
    due_time: Optional[time] = None
    state: OrderState = OrderState.NEW
    items: List[OrderItem] = field(default_factory=list)
    history: List[HistoryItem] = field(default_factory=list)
    order_id: Optional[int] = None

    @property
    def due_datetime(self) -> datetime:
        return datetime.combine(self.due_date, self.due_time)

    @property
    def total_price(self) -> int:
        return sum(item.total_price for item in self.items)

    def contains_product(self, product: Product) -> bool:
        return any(item.product.same_as(product) for item in self.items)

    def add_item(self, product: Product, quantity: int = 1,
                 comment: Optional[str] = None) -> OrderItem:
        if self.contains_product(product):
            raise ValueError(f"Product '{product.name}' is already part of the order")
        item = OrderItem(product=product, quantity=quantity, comment=comment)
        self.items.append(item)
        return item

    def change_state(self, user: User, new_state: OrderState,
                     message: Optional[str] = None,
                     timestamp: Optional[datetime] = None) -> HistoryItem:
        """Move the order to new_state and record it in the history.

        Any transition is accepted, including re-entering the current state.
        """
        item = self._append_history(user, message or STATE_MESSAGES[new_state],
                                    new_state, timestamp)
        self.state = new_state
        return item

    def add_comment(self, user: User, message: str,
                    timestamp: Optional[datetime] = None) -> HistoryItem:
        return self._append_history(user, message, None, timestamp)

    def _append_history(self, user: User, message: str, new_state: Optional[OrderState],
                        timestamp: Optional[datetime]) -> HistoryItem:
        if timestamp is None:
            # Seeded orders may carry history dated after the current clock
            timestamp = datetime.now()
            if self.history and timestamp < self.history[-1].timestamp:
                logger.warning("Order %s: clock %s is behind the last history entry, "
                               "recording at %s", self.order_id, timestamp,
                               self.history[-1].timestamp)
                timestamp = self.history[-1].timestamp
        elif self.history and timestamp < self.history[-1].timestamp:
            raise ValueError(
                f"History entry at {timestamp} is older than the last entry "
                f"at {self.history[-1].timestamp}"
            )
        item = HistoryItem(created_by=user, message=message,
                           new_state=new_state, timestamp=timestamp)
        self.history.append(item)
        return item

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "order_id": self.order_id,
            "customer": self.customer.to_dict(),
            "pickup_location": self.pickup_location.name if self.pickup_location else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "due_time": self.due_time.strftime("%H:%M") if self.due_time else None,
            "state": self.state.value,
            "created_by": self.created_by.email,
            "total_price": self.total_price,
            "items": [item.to_dict() for item in self.items],
            "history": [item.to_dict() for item in self.history]
        }
