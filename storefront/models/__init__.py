# Storefront Models

from .user import User, UserRecord, UserRole, RegisterRequest, LoginRequest, TokenResponse
from .category import Category, CategoryRequest
from .product import Product, ProductCreateRequest, ProductUpdateRequest, StockAdjustmentRequest
from .cart import Cart, CartItem, AddToCartRequest, UpdateCartItemRequest, CartResponse
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)

__all__ = [
    "User",
    "UserRecord",
    "UserRole",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "Category",
    "CategoryRequest",
    "Product",
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "StockAdjustmentRequest",
    "Cart",
    "CartItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PlaceOrderRequest",
    "UpdateOrderStatusRequest",
]
