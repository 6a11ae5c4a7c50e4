"""Domain events raised by the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was persisted, either from the user's cart or from a checkout payload."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    source = String(required=True, max_length=20)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)
