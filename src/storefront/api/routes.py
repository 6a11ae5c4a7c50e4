"""FastAPI routes for the Storefront domain: orders, cart and catalogue."""

import json

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.auth import current_user_id
from storefront.api.presenters import present_cart, present_order, present_orders, present_product
from storefront.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CartItemIdResponse,
    CartItemSchema,
    CategoryIdResponse,
    CreateCategoryRequest,
    OrderSchema,
    ProductIdResponse,
    ProductSchema,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.cart_item import CartItem
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.catalogue.management import AddProduct, CreateCategory
from storefront.catalogue.product import Product
from storefront.order.order import Order
from storefront.order.placement import PlaceOrderFromCart, checkout_command_for, is_direct_payload

logger = structlog.get_logger(__name__)

ORDER_FAILED_MESSAGE = "Failed to create order"


async def _json_object(request: Request) -> dict:
    """Request body as a dict; an empty or non-object body counts as no body."""
    body = await request.body()
    if not body:
        return {}
    payload = json.loads(body)
    return payload if isinstance(payload, dict) else {}


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderSchema)
async def create_order(request: Request, user_id: str = Depends(current_user_id)):
    """Place an order from the caller's cart, or from a complete checkout payload.

    A body with `total_amount` and `order_items` is persisted as submitted;
    anything that goes wrong with it is reported as a 500. Otherwise the
    caller's cart is priced and consumed, and an empty cart is a 400.
    """
    try:
        payload = await _json_object(request)
    except ValueError:
        return JSONResponse(status_code=400, content={"message": "Malformed JSON body"})

    if is_direct_payload(payload):
        return _place_from_payload(payload, user_id)

    order_id = current_domain.process(PlaceOrderFromCart(user_id=user_id), asynchronous=False)
    return present_order(current_domain.repository_for(Order).get(order_id))


def _place_from_payload(payload: dict, user_id: str):
    try:
        command = checkout_command_for(payload, user_id)
        order_id = current_domain.process(command, asynchronous=False)
        return present_order(current_domain.repository_for(Order).get(order_id))
    except Exception:
        logger.exception("Error creating order", user_id=user_id)
        return JSONResponse(status_code=500, content={"message": ORDER_FAILED_MESSAGE})


@order_router.get("/my-orders", response_model=list[OrderSchema])
async def my_orders(user_id: str = Depends(current_user_id)):
    orders = current_domain.repository_for(Order).placed_by(user_id)
    return present_orders(orders)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=list[CartItemSchema])
async def view_cart(user_id: str = Depends(current_user_id)):
    return present_cart(current_domain.repository_for(CartItem).for_user(user_id))


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_cart_item(body: AddToCartRequest, user_id: str = Depends(current_user_id)) -> CartItemIdResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(cart_item_id=result)


@cart_router.put("/items/{cart_item_id}", response_model=StatusResponse)
async def update_cart_item_quantity(
    cart_item_id: str, body: UpdateCartQuantityRequest, user_id: str = Depends(current_user_id)
) -> StatusResponse:
    command = UpdateCartQuantity(
        user_id=user_id,
        cart_item_id=cart_item_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{cart_item_id}", response_model=StatusResponse)
async def remove_cart_item(cart_item_id: str, user_id: str = Depends(current_user_id)) -> StatusResponse:
    command = RemoveFromCart(user_id=user_id, cart_item_id=cart_item_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalogue Routers
# ---------------------------------------------------------------------------
category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(name=body.name, description=body.description)
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(**body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str):
    product = current_domain.repository_for(Product).get(product_id)
    return present_product(product)
