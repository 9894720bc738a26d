"""
Product and pickup location data models
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(eq=False)
class Product:
    """Product data model, price in minor currency units"""
    name: str
    price: int
    product_id: Optional[int] = None

    def same_as(self, other: "Product") -> bool:
        # Identity before persistence, generated id afterwards
        if self is other:
            return True
        return self.product_id is not None and self.product_id == other.product_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price
        }


@dataclass(eq=False)
class PickupLocation:
    """Pickup location data model"""
    name: str
    pickup_location_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "pickup_location_id": self.pickup_location_id,
            "name": self.name
        }
