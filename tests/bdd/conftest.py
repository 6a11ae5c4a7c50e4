"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.cart_item import CartItem
from storefront.order.order import Order


@pytest.fixture
def products():
    """Product ids by name, filled in by Given steps."""
    return {}


@pytest.fixture
def checkout():
    """Outcome of the When step: the placed order or the rejection."""
    return {"order": None, "error": None}


@given(parsers.cfparse('a product "{name}" priced {price:f} with {tax:f} percent tax'))
def _(products, make_product, name, price, tax):
    products[name] = make_product(name=name, price=price, tax_percent=tax)


@given(parsers.cfparse('a product "{name}" priced {price:f} with no tax'))
def _(products, make_product, name, price):
    products[name] = make_product(name=name, price=price)


@given(parsers.cfparse('shopper "{user_id}" has {quantity:d} of "{name}" in their cart'))
def _(products, add_to_cart, user_id, quantity, name):
    add_to_cart(user_id, products[name], quantity)


@then(parsers.cfparse("the order total is {amount:f}"))
def _(checkout, amount):
    order = checkout["order"]
    assert order.total_amount == pytest.approx(amount)
    assert order.total_price == order.total_amount


@then(parsers.cfparse("the order has {count:d} items"))
def _(checkout, count):
    assert len(checkout["order"].items) == count


@then(parsers.cfparse('the cart of "{user_id}" is empty'))
def _(user_id):
    assert current_domain.repository_for(CartItem).for_user(user_id) == []


@then(parsers.cfparse('the cart of "{user_id}" still has {count:d} items'))
def _(user_id, count):
    assert len(current_domain.repository_for(CartItem).for_user(user_id)) == count


@then(parsers.cfparse('shopper "{user_id}" has no orders'))
def _(user_id):
    assert current_domain.repository_for(Order).placed_by(user_id) == []
