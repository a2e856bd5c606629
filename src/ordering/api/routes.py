"""FastAPI routes for the Ordering domain: carts and checkout."""

from fastapi import APIRouter, Depends, Response
from protean.exceptions import ObjectNotFoundError
from sqlalchemy.orm import Session

from identity.auth import current_user, require_user
from identity.user.user import User
from ordering.api.schemas import (
    AddCartItemRequest,
    AddCartItemResponse,
    CartDetailResponse,
    CartItemResponse,
    CartResponse,
    CheckoutRequest,
    CreateCartRequest,
    OrderDetailResponse,
    UpdateCartItemRequest,
)
from ordering.cart.items import add_to_cart, remove_from_cart, update_cart_quantity
from ordering.cart.management import create_cart, get_or_create_cart
from ordering.cart.repository import CartRepository
from ordering.order.checkout import place_order
from ordering.order.repository import OrderRepository
from shared.database import get_session

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("/{session_id}", response_model=CartDetailResponse)
def get_cart(session_id: str, session: Session = Depends(get_session)) -> CartDetailResponse:
    return CartDetailResponse.model_validate(get_or_create_cart(session, session_id))


@cart_router.post("", status_code=201, response_model=CartResponse)
def create_cart_endpoint(
    body: CreateCartRequest | None = None,
    user: User | None = Depends(current_user),
    session: Session = Depends(get_session),
) -> CartResponse:
    session_id = body.session_id if body else None
    cart = create_cart(session, session_id=session_id, user_id=user.id if user else None)
    return CartResponse.model_validate(cart)


@cart_router.post("/items", status_code=201, response_model=AddCartItemResponse)
def add_cart_item(body: AddCartItemRequest, session: Session = Depends(get_session)) -> AddCartItemResponse:
    item = add_to_cart(session, cart_id=body.cart_id, product_id=body.product_id, quantity=body.quantity)
    return AddCartItemResponse(
        item=CartItemResponse.model_validate(item),
        cart=CartDetailResponse.model_validate(CartRepository(session).get(item.cart_id)),
    )


@cart_router.put("/items/{item_id}", response_model=CartItemResponse)
def update_cart_item(
    item_id: int, body: UpdateCartItemRequest, session: Session = Depends(get_session)
) -> CartItemResponse:
    return CartItemResponse.model_validate(update_cart_quantity(session, item_id, body.quantity))


@cart_router.delete("/items/{item_id}", status_code=204)
def delete_cart_item(item_id: int, session: Session = Depends(get_session)) -> Response:
    remove_from_cart(session, item_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderDetailResponse)
def checkout(
    body: CheckoutRequest,
    user: User | None = Depends(current_user),
    session: Session = Depends(get_session),
) -> OrderDetailResponse:
    order = place_order(session, user_id=user.id if user else None, **body.model_dump())
    return OrderDetailResponse.model_validate(order)


@order_router.get("", response_model=list[OrderDetailResponse])
def my_orders(
    user: User = Depends(require_user), session: Session = Depends(get_session)
) -> list[OrderDetailResponse]:
    return [OrderDetailResponse.model_validate(o) for o in OrderRepository(session).for_user(user.id)]


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
def get_my_order(
    order_id: int, user: User = Depends(require_user), session: Session = Depends(get_session)
) -> OrderDetailResponse:
    order = OrderRepository(session).get_detailed(order_id)
    # Other customers' orders are reported as missing
    if order.user_id != user.id and not user.is_admin:
        raise ObjectNotFoundError({"_entity": "Order not found"})
    return OrderDetailResponse.model_validate(order)
