"""Assemble response schemas from aggregates and the rows they reference."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import CartItemSchema, OrderItemSchema, OrderSchema, ProductSchema
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.order.order import OrderSource


def _get_or_none(aggregate_cls, identifier):
    if not identifier:
        return None
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        return None


def load_products(product_ids, with_categories=False) -> dict[str, ProductSchema | None]:
    """Product schemas keyed by id; ids that no longer resolve map to None."""
    products = {}
    categories = {}
    for product_id in {str(pid) for pid in product_ids}:
        product = _get_or_none(Product, product_id)
        if product is None:
            products[product_id] = None
            continue

        category = None
        if with_categories and product.category_id:
            category_id = str(product.category_id)
            if category_id not in categories:
                categories[category_id] = _get_or_none(Category, category_id)
            category = categories[category_id]

        products[product_id] = ProductSchema.from_domain(product, category)
    return products


def present_product(product, with_category=True) -> ProductSchema:
    category = _get_or_none(Category, product.category_id) if with_category else None
    return ProductSchema.from_domain(product, category)


def _wire_product_id(order, item) -> int | str:
    """Payload orders reference products by integer id; cart orders by catalogue id."""
    if order.source == OrderSource.PAYLOAD.value:
        return int(item.product_id)
    return str(item.product_id)


def _order_schema(order, products) -> OrderSchema:
    return OrderSchema(
        id=str(order.id),
        user_id=str(order.user_id),
        total_price=order.total_price,
        total_amount=order.total_amount,
        delivery_address=order.delivery_address,
        payment_method=order.payment_method,
        created_at=order.created_at,
        items=[
            OrderItemSchema(
                id=str(item.id),
                order_id=str(order.id),
                product_id=_wire_product_id(order, item),
                quantity=item.quantity,
                price=item.price,
                product=products.get(str(item.product_id)),
            )
            for item in order.items
        ],
    )


def present_order(order, with_categories=False) -> OrderSchema:
    products = load_products([item.product_id for item in order.items], with_categories)
    return _order_schema(order, products)


def present_orders(orders) -> list[OrderSchema]:
    """Orders with their items, products and product categories."""
    products = load_products(
        [item.product_id for order in orders for item in order.items],
        with_categories=True,
    )
    return [_order_schema(order, products) for order in orders]


def present_cart(cart_items) -> list[CartItemSchema]:
    products = load_products([item.product_id for item in cart_items])
    return [
        CartItemSchema(
            id=str(item.id),
            user_id=str(item.user_id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            added_at=item.added_at,
            product=products.get(str(item.product_id)),
        )
        for item in cart_items
    ]
