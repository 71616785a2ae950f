"""Cart API routes"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Response

from ..database.carts import CartDatabase
from ..database.products import ProductDatabase
from ..dependencies import get_cart_db, get_product_db
from ..exceptions import NotFoundError
from ..models.cart import AddToCartRequest, Cart, CartResponse, UpdateCartItemRequest
from ..security.auth_middleware import require_user
from ..security.models import Identity

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _cart_response(cart: Cart, product_db: ProductDatabase, message: str | None = None) -> CartResponse:
    """Build a response with the subtotal at current prices"""
    subtotal = Decimal("0")
    for item in cart.items:
        product = product_db.get_product(item.product_id)
        if product:
            subtotal += product.price * item.quantity
    return CartResponse(cart=cart, items=cart.items, subtotal=subtotal, message=message)


@router.get("", response_model=CartResponse)
def get_cart(
    identity: Identity = Depends(require_user),
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Get the caller's cart; an empty response if none exists"""
    cart = cart_db.get_cart_for_user(identity.user_id)
    if not cart:
        return CartResponse(items=[])
    return _cart_response(cart, product_db)


@router.post("", response_model=CartResponse)
def add_to_cart(
    request: AddToCartRequest,
    response: Response,
    identity: Identity = Depends(require_user),
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Add an item to the cart, creating the cart on first use"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise NotFoundError("Product", request.product_id)

    cart, created = cart_db.add_item(identity.user_id, product.id, request.quantity)
    response.status_code = 201 if created else 200
    return _cart_response(cart, product_db, message=f"Added {request.quantity}x {product.name} to cart")


@router.put("/{product_id}", response_model=CartResponse)
def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    identity: Identity = Depends(require_user),
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Update item quantity in cart"""
    cart = cart_db.update_item_quantity(identity.user_id, product_id, request.quantity)
    if not cart:
        raise NotFoundError("Cart item", product_id)
    return _cart_response(cart, product_db, message="Cart updated")


@router.delete("/{product_id}", response_model=CartResponse)
def remove_from_cart(
    product_id: str,
    identity: Identity = Depends(require_user),
    cart_db: CartDatabase = Depends(get_cart_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Remove an item from the cart"""
    cart = cart_db.remove_item(identity.user_id, product_id)
    if not cart:
        raise NotFoundError("Cart", identity.user_id)
    return _cart_response(cart, product_db, message="Item removed")
