# Pydantic Models
from applestore.models.item import Item
from applestore.models.order import Order
from applestore.models.profile import ProfileInfo, UserProfile

__all__ = [
    # Catalog models
    "Item",
    # Order models
    "Order",
    # Customer models
    "ProfileInfo",
    "UserProfile",
]
