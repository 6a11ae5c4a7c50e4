"""Order aggregate: a user's placed order with its frozen line items.

Line prices are captured at placement time and never recomputed: cart orders
store each product's tax-inclusive unit price, payload orders store whatever
price the checkout submitted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced


class OrderSource(Enum):
    CART = "Cart"
    PAYLOAD = "Payload"


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    price = Float(required=True)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    total_price = Float(required=True)
    total_amount = Float(required=True)
    delivery_address = Text()
    payment_method = String(max_length=255)
    source = String(choices=OrderSource, default=OrderSource.CART.value)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @invariant.post
    def totals_must_match(self):
        if self.total_amount != self.total_price:
            raise ValidationError({"total_amount": ["Total amount must equal total price"]})

    @classmethod
    def place(cls, user_id, items_data, total, source, delivery_address=None, payment_method=None):
        """Build a new order.

        Args:
            user_id: Owner of the order.
            items_data: List of dicts with product_id, quantity and price.
            total: Used for both total_price and total_amount.
            source: An OrderSource.
            delivery_address: Free-form address text, optional.
            payment_method: Payment method label, optional.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            total_price=total,
            total_amount=total,
            delivery_address=delivery_address,
            payment_method=payment_method,
            source=source.value,
            items=[OrderItem(**item) for item in items_data],
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                source=source.value,
                item_count=len(items_data),
                total_amount=total,
                placed_at=now,
            )
        )
        return order

    @property
    def billed_total(self) -> float:
        """Total shown to the customer, falling back to total_price when total_amount is unset."""
        return self.total_amount or self.total_price


@storefront.repository(part_of=Order)
class OrderRepository:
    def placed_by(self, user_id) -> list[Order]:
        """A user's orders, most recent first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items
