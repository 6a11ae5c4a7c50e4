"""Cart item aggregate: one row per (user, product) in a user's shopping cart.

A user's cart is simply the set of their cart items; there is no cart
aggregate around them. Placing an order from the cart consumes every row.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer

from storefront.cart.events import CartItemAdded, CartItemQuantityChanged, CartItemRemoved
from storefront.domain import storefront


@storefront.aggregate
class CartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id, product_id, quantity):
        now = datetime.now(UTC)
        item = cls(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            added_at=now,
            updated_at=now,
        )
        item.raise_(
            CartItemAdded(
                cart_item_id=str(item.id),
                user_id=str(user_id),
                product_id=str(product_id),
                quantity=quantity,
                added_at=now,
            )
        )
        return item

    def change_quantity(self, new_quantity):
        previous_quantity = self.quantity
        self.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityChanged(
                cart_item_id=str(self.id),
                user_id=str(self.user_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def increase_quantity(self, quantity):
        self.change_quantity(self.quantity + quantity)

    def mark_removed(self):
        """Record the removal; the caller removes the row from the repository."""
        self.raise_(
            CartItemRemoved(
                cart_item_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(self.product_id),
            )
        )


@storefront.repository(part_of=CartItem)
class CartItemRepository:
    def for_user(self, user_id) -> list[CartItem]:
        """All of a user's cart items, oldest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("added_at").all().items

    def for_user_and_product(self, user_id, product_id) -> CartItem | None:
        items = self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().items
        return items[0] if items else None

    def discard(self, item: CartItem) -> None:
        """Delete a cart row within the current unit of work."""
        self._dao.delete(item)

    def clear_for(self, user_id) -> int:
        """Delete every cart row the user owns; returns how many were removed."""
        items = self.for_user(user_id)
        for item in items:
            self._dao.delete(item)
        return len(items)

    def owned_by(self, cart_item_id, user_id) -> CartItem:
        """Fetch a cart item, treating another user's row as missing."""
        item = self.get(cart_item_id)
        if str(item.user_id) != str(user_id):
            raise ObjectNotFoundError(f"`CartItem` object with identifier {cart_item_id} does not exist.")
        return item
