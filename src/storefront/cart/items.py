"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="CartItem")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class RemoveFromCart:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)


@storefront.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Raises ObjectNotFoundError for an unknown product
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(CartItem)
        item = repo.for_user_and_product(command.user_id, command.product_id)
        if item is None:
            item = CartItem.create(
                user_id=command.user_id,
                product_id=command.product_id,
                quantity=command.quantity,
            )
        else:
            item.increase_quantity(command.quantity)

        repo.add(item)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.owned_by(command.cart_item_id, command.user_id)
        item.change_quantity(command.quantity)
        repo.add(item)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.owned_by(command.cart_item_id, command.user_id)
        item.mark_removed()
        repo.discard(item)
