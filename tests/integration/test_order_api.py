"""Integration tests for Order API endpoints via TestClient."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderSource

CALLER_ID = "user-001"


def _seed_cart(client, product_id, quantity):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": quantity})
    assert response.status_code == 201


class TestCreateOrderFromCart:
    def test_creates_order_and_clears_cart(self, client, make_product):
        product_id = make_product(name="Lamp", price=40.0, tax_percent=12.5, image_url="lamp.jpg")
        _seed_cart(client, product_id, 2)

        response = client.post("/orders")

        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == CALLER_ID
        assert body["totalPrice"] == 90.0
        assert body["totalAmount"] == 90.0
        assert body["total_amount"] == 90.0
        assert body["delivery_address"] is None
        assert body["payment_method"] is None
        assert len(body["items"]) == 1
        item = body["items"][0]
        assert item["productId"] == product_id
        assert item["quantity"] == 2
        assert item["price"] == 45.0
        assert item["orderId"] == body["id"]
        assert item["product"]["name"] == "Lamp"
        assert item["product"]["imageUrl"] == "lamp.jpg"

        assert current_domain.repository_for(CartItem).for_user(CALLER_ID) == []

    def test_total_matches_taxed_sum(self, client, make_product):
        first_id = make_product(price=19.99, tax_percent=7.5)
        second_id = make_product(price=3.1)
        _seed_cart(client, first_id, 3)
        _seed_cart(client, second_id, 2)

        response = client.post("/orders", json={})

        expected = 0
        expected += (19.99 + 19.99 * 7.5 / 100) * 3
        expected += 3.1 * 2
        assert response.status_code == 201
        assert response.json()["totalPrice"] == expected
        assert response.json()["totalAmount"] == expected

    def test_empty_cart_is_400(self, client):
        response = client.post("/orders")

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"
        assert current_domain.repository_for(Order).placed_by(CALLER_ID) == []

    def test_partial_body_falls_back_to_cart(self, client):
        response = client.post("/orders", json={"total_amount": 10})

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"

    def test_product_gone_from_catalogue_is_404(self, client, make_product):
        product_id = make_product()
        _seed_cart(client, product_id, 1)
        product_repo = current_domain.repository_for(Product)
        product_repo._dao.delete(product_repo.get(product_id))

        response = client.post("/orders")

        assert response.status_code == 404
        assert product_id in response.json()["message"]
        assert len(current_domain.repository_for(CartItem).for_user(CALLER_ID)) == 1

    def test_blank_order_items_fall_back_to_cart(self, client):
        response = client.post("/orders", json={"total_amount": 10, "order_items": ""})

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"
        assert current_domain.repository_for(Order).placed_by(CALLER_ID) == []

    def test_malformed_json_is_400(self, client):
        response = client.post("/orders", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400


class TestCreateOrderFromPayload:
    def _payload(self, **overrides):
        payload = {
            "total_amount": 99.99,
            "delivery_address": "12 MG Road, Bengaluru",
            "payment_method": "cod",
            "order_items": [{"product_id": 1, "quantity": 2, "price": 49.995}],
        }
        payload.update(overrides)
        return payload

    def test_persists_payload_as_submitted(self, client):
        response = client.post("/orders", json=self._payload())

        assert response.status_code == 201
        body = response.json()
        assert body["totalAmount"] == 99.99
        assert body["totalPrice"] == 99.99
        assert body["total_amount"] == 99.99
        assert body["deliveryAddress"] == "12 MG Road, Bengaluru"
        assert body["delivery_address"] == "12 MG Road, Bengaluru"
        assert body["paymentMethod"] == "cod"
        assert body["payment_method"] == "cod"
        assert len(body["items"]) == 1
        item = body["items"][0]
        assert item["productId"] == 1
        assert item["quantity"] == 2
        assert item["price"] == 49.995
        assert item["product"] is None

    def test_numeric_string_product_id_is_an_integer(self, client):
        response = client.post(
            "/orders",
            json=self._payload(order_items=[{"product_id": "7", "quantity": 1, "price": 30.0}]),
        )

        assert response.status_code == 201
        assert response.json()["items"][0]["productId"] == 7

    def test_non_numeric_product_id_is_500(self, client):
        response = client.post(
            "/orders",
            json=self._payload(order_items=[{"product_id": "abc", "quantity": 2, "price": 1.0}]),
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create order"}
        assert current_domain.repository_for(Order).placed_by(CALLER_ID) == []

    def test_does_not_consume_the_cart(self, client, make_product):
        _seed_cart(client, make_product(), 1)

        response = client.post("/orders", json=self._payload())

        assert response.status_code == 201
        assert len(current_domain.repository_for(CartItem).for_user(CALLER_ID)) == 1

    def test_payload_user_id_owns_the_order(self, client):
        response = client.post("/orders", json=self._payload(user_id="user-999"))

        assert response.status_code == 201
        assert response.json()["userId"] == "user-999"

    def test_non_numeric_price_is_500(self, client):
        response = client.post(
            "/orders",
            json=self._payload(order_items=[{"product_id": 1, "quantity": 2, "price": "abc"}]),
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create order"}
        assert current_domain.repository_for(Order).placed_by(CALLER_ID) == []

    def test_non_numeric_total_is_500(self, client):
        response = client.post("/orders", json=self._payload(total_amount="a lot"))

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create order"}

    def test_item_without_price_is_500(self, client):
        response = client.post("/orders", json=self._payload(order_items=[{"product_id": 1, "quantity": 2}]))
        assert response.status_code == 500


class TestMyOrders:
    def _order(self, user_id, product_id, created_at):
        order = Order.place(
            user_id=user_id,
            items_data=[{"product_id": product_id, "quantity": 1, "price": 5.0}],
            total=5.0,
            source=OrderSource.CART,
        )
        order.created_at = created_at
        current_domain.repository_for(Order).add(order)
        return str(order.id)

    def test_no_orders_is_empty_list(self, client):
        response = client.get("/orders/my-orders")

        assert response.status_code == 200
        assert response.json() == []

    def test_most_recent_first(self, client, make_product):
        product_id = make_product()
        now = datetime.now(UTC)
        older = self._order(CALLER_ID, product_id, now - timedelta(hours=3))
        newer = self._order(CALLER_ID, product_id, now)
        self._order("someone-else", product_id, now)

        response = client.get("/orders/my-orders")

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [newer, older]

    def test_products_carry_compat_fields_and_category(self, client, make_category, make_product):
        category_id = make_category(name="Lighting")
        product_id = make_product(
            name="Lamp",
            price=40.0,
            original_price=55.0,
            available_stock=7,
            image_url="lamp.jpg",
            reviews_count=12,
            category_id=category_id,
        )
        self._order(CALLER_ID, product_id, datetime.now(UTC))

        order = client.get("/orders/my-orders").json()[0]

        assert order["total_amount"] == 5.0
        product = order["items"][0]["product"]
        assert product["image_url"] == "lamp.jpg"
        assert product["imageUrl"] == "lamp.jpg"
        assert product["stock_quantity"] == 7
        assert product["availableStock"] == 7
        assert product["original_price"] == 55.0
        assert product["reviews_count"] == 12
        assert product["category"]["name"] == "Lighting"

    def test_compat_fields_present_when_product_fields_are_empty(self, client, make_product):
        product_id = make_product(name="Bare", price=1.0)
        self._order(CALLER_ID, product_id, datetime.now(UTC))

        product = client.get("/orders/my-orders").json()[0]["items"][0]["product"]

        assert product["image_url"] is None
        assert product["stock_quantity"] == 0
        assert product["original_price"] is None
        assert product["reviews_count"] == 0
        assert product["category"] is None

    def test_order_from_cart_is_listed(self, client, make_product):
        _seed_cart(client, make_product(), 1)
        created = client.post("/orders").json()

        listed = client.get("/orders/my-orders").json()

        assert [order["id"] for order in listed] == [created["id"]]

    def test_payload_order_lists_integer_product_ids(self, client):
        client.post(
            "/orders",
            json={"total_amount": 12.5, "order_items": [{"product_id": 3, "quantity": 5, "price": 2.5}]},
        )

        item = client.get("/orders/my-orders").json()[0]["items"][0]

        assert item["productId"] == 3
        assert item["product"] is None
