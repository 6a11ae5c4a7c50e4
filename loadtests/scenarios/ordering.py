"""Ordering load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper who fills a cart and
checks it out, and a checkout page that submits fully priced orders.
Both finish by listing the shopper's orders.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    bearer_token,
    cart_item_data,
    category_data,
    checkout_payload,
    product_data,
    shopper_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        user_id = shopper_id()
        self.state = ShopperState(user_id=user_id, token=bearer_token(user_id))

    def _seed_catalogue(self, product_count):
        with self.client.post(
            "/categories",
            json=category_data(),
            catch_response=True,
            name="POST /categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = resp.json()["category_id"]
            else:
                resp.failure(f"Create category failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

        for _ in range(product_count):
            with self.client.post(
                "/products",
                json=product_data(self.state.category_id),
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code} - {extract_error_detail(resp)}")
                    self.interrupt()

    def _list_orders(self):
        with self.client.get(
            "/orders/my-orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/my-orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")
            elif len(resp.json()) < len(self.state.order_ids):
                resp.failure(f"Expected at least {len(self.state.order_ids)} orders, got {len(resp.json())}")


class CartCheckoutJourney(_ShopperJourney):
    """Seed Catalogue -> Browse -> Add to Cart -> View Cart -> Checkout -> My Orders.

    Generates events: CartItemAdded (x3), OrderPlaced.
    """

    @task
    def seed_catalogue(self):
        self._seed_catalogue(product_count=3)

    @task
    def browse_products(self):
        for product_id in self.state.product_ids:
            with self.client.get(
                f"/products/{product_id}",
                catch_response=True,
                name="GET /products/{id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Get product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def fill_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart/items",
                json=cart_item_data(product_id),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_item_ids.append(resp.json()["cart_item_id"])
                else:
                    resp.failure(f"Add cart item failed: {resp.status_code} - {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def view_cart(self):
        with self.client.get(
            "/cart",
            headers=self.state.headers,
            catch_response=True,
            name="GET /cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def checkout_cart(self):
        with self.client.post(
            "/orders",
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders (cart)",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
                self.state.cart_item_ids.clear()
            else:
                resp.failure(f"Cart checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_orders(self):
        self._list_orders()

    @task
    def done(self):
        self.interrupt()


class DirectCheckoutJourney(_ShopperJourney):
    """Submit Priced Order -> My Orders.

    Models the checkout page posting the line items and total it computed.
    Generates events: OrderPlaced.
    """

    @task
    def submit_order(self):
        payload = checkout_payload(line_count=2)
        with self.client.post(
            "/orders",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders (payload)",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Direct checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
            elif resp.json()["totalAmount"] != payload["total_amount"]:
                resp.failure("Order total differs from the submitted total")
            else:
                self.state.order_ids.append(resp.json()["id"])

    @task
    def list_orders(self):
        self._list_orders()

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """Shoppers split between cart checkout and direct checkout."""

    wait_time = between(1, 3)
    tasks = {CartCheckoutJourney: 3, DirectCheckoutJourney: 2}
