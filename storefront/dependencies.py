"""FastAPI dependencies resolving the components built by create_app"""

from fastapi import Request

from .database import CartDatabase, CategoryDatabase, ProductDatabase, UserDatabase
from .security.tokens import TokenSigner
from .services import OrderPlacementService, OrderService


def get_user_db(request: Request) -> UserDatabase:
    return request.app.state.user_db


def get_category_db(request: Request) -> CategoryDatabase:
    return request.app.state.category_db


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_cart_db(request: Request) -> CartDatabase:
    return request.app.state.cart_db


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_order_placement(request: Request) -> OrderPlacementService:
    return request.app.state.order_placement


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service
