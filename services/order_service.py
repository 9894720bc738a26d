"""
Order service - state changes and comments on stored orders
"""
import logging
from typing import Dict, Any, Optional

from models.order import OrderState
from database.repository import OrderRepository, UserRepository

logger = logging.getLogger(__name__)


class OrderService:
    # Business logic around the lifecycle of persisted orders

    def __init__(self, order_repository: OrderRepository, user_repository: UserRepository):
        self.order_repo = order_repository
        self.user_repo = user_repository

    def get_order_details(self, order_id: int) -> Dict[str, Any]:
        # Full order: customer, items, history and current state
        order = self.order_repo.get_order(order_id)
        if not order:
            return {
                "success": False,
                "error": f"Order {order_id} not found."
            }

        return {
            "success": True,
            "order": order.to_dict(),
            "message": f"Order {order_id} is {order.state.display_name.lower()}."
        }

    def change_state(self, order_id: int, user_email: str, new_state: OrderState,
                     message: Optional[str] = None) -> Dict[str, Any]:
        # Any target state is accepted, the caller picks a sensible transition.
        # The entry is stamped with the current time, or with the time of the
        # last history entry when that one lies in the future.
        order = self.order_repo.get_order(order_id)
        if not order:
            return {
                "success": False,
                "error": f"Order {order_id} not found."
            }

        user = self.user_repo.find_by_email(user_email)
        if not user:
            return {
                "success": False,
                "error": f"User {user_email} not found."
            }

        previous_state = order.state
        history_item = order.change_state(user, new_state, message)
        self.order_repo.update_state(order, history_item)

        logger.info("Order %s changed from %s to %s by %s",
                    order_id, previous_state.value, new_state.value, user_email)

        return {
            "success": True,
            "order_id": order_id,
            "previous_state": previous_state.value,
            "state": new_state.value,
            "history_item": history_item.to_dict(),
            "message": history_item.message
        }

    def add_comment(self, order_id: int, user_email: str, message: str) -> Dict[str, Any]:
        # Informational history entry, the state stays as it is
        if not message or not message.strip():
            return {
                "success": False,
                "error": "Comment must not be empty."
            }

        order = self.order_repo.get_order(order_id)
        if not order:
            return {
                "success": False,
                "error": f"Order {order_id} not found."
            }

        user = self.user_repo.find_by_email(user_email)
        if not user:
            return {
                "success": False,
                "error": f"User {user_email} not found."
            }

        history_item = order.add_comment(user, message.strip())
        self.order_repo.update_state(order, history_item)

        return {
            "success": True,
            "order_id": order_id,
            "state": order.state.value,
            "history_item": history_item.to_dict()
        }
