"""Order API routes"""

from fastapi import APIRouter, Depends

from ..dependencies import get_order_placement, get_order_service
from ..models.order import Order, PlaceOrderRequest, UpdateOrderStatusRequest
from ..security.auth_middleware import require_admin, require_user
from ..security.models import Identity
from ..services import OrderPlacementService, OrderService

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=Order, status_code=201)
def place_order(
    request: PlaceOrderRequest,
    identity: Identity = Depends(require_user),
    placement: OrderPlacementService = Depends(get_order_placement),
):
    """Place an order from the caller's cart"""
    return placement.place_order(identity, request.shipping_address)


@router.get("", response_model=list[Order])
def list_orders(
    admin: Identity = Depends(require_admin),
    orders: OrderService = Depends(get_order_service),
):
    """List all orders (admin only)"""
    return orders.list_all_orders(admin)


@router.get("/my-orders", response_model=list[Order])
def list_my_orders(
    identity: Identity = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
):
    """List the caller's orders, newest first"""
    return orders.list_orders_for_user(identity.user_id)


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    identity: Identity = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
):
    """Get an order owned by the caller, or any order for an admin"""
    return orders.get_order(order_id, identity)


@router.put("/{order_id}", response_model=Order)
def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    admin: Identity = Depends(require_admin),
    orders: OrderService = Depends(get_order_service),
):
    """Update an order's status (admin only)"""
    return orders.update_status(order_id, request.status, admin)
