# Database modules

from .connection import create_client, ensure_indexes
from .users import UserDatabase
from .categories import CategoryDatabase
from .products import ProductDatabase
from .carts import CartDatabase
from .orders import OrderDatabase

__all__ = [
    "create_client",
    "ensure_indexes",
    "UserDatabase",
    "CategoryDatabase",
    "ProductDatabase",
    "CartDatabase",
    "OrderDatabase",
]
