"""Order placement: the two checkout variants and their handler.

A checkout request is either `PlaceOrderFromCart` (price the caller's cart
and consume it) or `PlaceOrderFromPayload` (persist the line items and total
the frontend computed). `checkout_command_for` decides which one a request
body describes.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order, OrderSource

logger = structlog.get_logger(__name__)

EMPTY_CART_MESSAGE = "Cart is empty"


@storefront.command(part_of="Order")
class PlaceOrderFromCart:
    user_id = Identifier(required=True)


@storefront.command(part_of="Order")
class PlaceOrderFromPayload:
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    delivery_address = Text()
    payment_method = String(max_length=255)
    order_items = Text(required=True)  # JSON: list of {product_id, quantity, price}


def _truthy(value) -> bool:
    """Truthiness as the checkout page sees it: empty lists and objects count."""
    return isinstance(value, list | dict) or bool(value)


def is_direct_payload(payload: dict) -> bool:
    """A body carrying a truthy total and item list is a self-contained order."""
    return _truthy(payload.get("total_amount")) and _truthy(payload.get("order_items"))


def checkout_command_for(payload: dict, caller_id: str):
    """Translate a checkout request body into the matching placement command.

    An explicit `user_id` in a direct payload places the order on that
    user's behalf; otherwise the order belongs to the caller.
    """
    if not is_direct_payload(payload):
        return PlaceOrderFromCart(user_id=caller_id)

    delivery_address = payload.get("delivery_address")
    if delivery_address is not None and not isinstance(delivery_address, str):
        delivery_address = json.dumps(delivery_address)

    return PlaceOrderFromPayload(
        user_id=str(payload.get("user_id") or caller_id),
        total_amount=payload["total_amount"],
        delivery_address=delivery_address,
        payment_method=payload.get("payment_method"),
        order_items=json.dumps(payload["order_items"]),
    )


def price_cart(cart_items, products_by_id) -> tuple[list[dict], float]:
    """Price cart lines at each product's tax-inclusive unit price.

    Returns the order item records and the running total, accumulated in
    cart order.
    """
    total = 0
    items_data = []
    for cart_item in cart_items:
        unit_price = products_by_id[str(cart_item.product_id)].price_with_tax()
        total += unit_price * cart_item.quantity
        items_data.append(
            {
                "product_id": str(cart_item.product_id),
                "quantity": cart_item.quantity,
                "price": unit_price,
            }
        )
    return items_data, total


def payload_items(raw_items) -> list[dict]:
    """Normalise submitted line items; prices are trusted as sent.

    Product ids must be integers. A non-numeric id or price raises ValueError.
    """
    return [
        {
            "product_id": str(int(item["product_id"])),
            "quantity": item["quantity"],
            "price": float(item["price"]),
        }
        for item in raw_items
    ]


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrderFromCart)
    def place_from_cart(self, command):
        cart_repo = current_domain.repository_for(CartItem)
        cart_items = cart_repo.for_user(command.user_id)
        if not cart_items:
            raise ValidationError({"cart": [EMPTY_CART_MESSAGE]})

        product_repo = current_domain.repository_for(Product)
        products_by_id = {
            str(cart_item.product_id): product_repo.get(cart_item.product_id) for cart_item in cart_items
        }
        items_data, total = price_cart(cart_items, products_by_id)

        order = Order.place(
            user_id=command.user_id,
            items_data=items_data,
            total=total,
            source=OrderSource.CART,
        )
        current_domain.repository_for(Order).add(order)

        # Consumed in the same unit of work as the order write
        cart_repo.clear_for(command.user_id)

        logger.info(
            "Order placed from cart",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(items_data),
            total_amount=total,
        )
        return str(order.id)

    @handle(PlaceOrderFromPayload)
    def place_from_payload(self, command):
        items_data = payload_items(json.loads(command.order_items))
        total = float(command.total_amount)

        order = Order.place(
            user_id=command.user_id,
            items_data=items_data,
            total=total,
            source=OrderSource.PAYLOAD,
            delivery_address=command.delivery_address,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed from checkout payload",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(items_data),
            total_amount=total,
        )
        return str(order.id)
