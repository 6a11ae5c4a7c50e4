"""Domain events raised by cart items."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="CartItem")
class CartItemAdded:
    cart_item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    added_at = DateTime()


@storefront.event(part_of="CartItem")
class CartItemQuantityChanged:
    cart_item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="CartItem")
class CartItemRemoved:
    cart_item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
