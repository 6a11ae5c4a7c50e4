"""Faker-based data generators for Locust load test scenarios.

Payloads use the exact field names the API's request schemas expect.
"""

import os
import random
import uuid
from datetime import UTC, datetime, timedelta

import jwt
from faker import Faker

fake = Faker()


def shopper_id() -> str:
    return f"lt-{uuid.uuid4().hex[:12]}"


def bearer_token(user_id: str) -> str:
    """Sign a short-lived token the API accepts, using the server's JWT_SECRET."""
    claims = {"id": user_id, "exp": datetime.now(UTC) + timedelta(hours=1)}
    return jwt.encode(claims, os.getenv("JWT_SECRET", "storefront-dev-secret"), algorithm="HS256")


def category_data() -> dict:
    return {
        "name": f"{fake.word().capitalize()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(),
    }


def product_data(category_id: str | None = None) -> dict:
    """Generate an AddProductRequest payload."""
    price = round(random.uniform(4.99, 249.99), 2)
    payload = {
        "name": f"{fake.word().capitalize()} {fake.word().capitalize()}"[:255],
        "description": fake.paragraph(nb_sentences=2),
        "price": price,
        "tax_percent": random.choice([0.0, 5.0, 12.0, 18.0]),
        "original_price": round(price * random.uniform(1.0, 1.4), 2),
        "available_stock": random.randint(5, 200),
        "image_url": f"https://cdn.example.com/images/{uuid.uuid4().hex}.jpg",
    }
    if category_id:
        payload["category_id"] = category_id
    return payload


def cart_item_data(product_id: str) -> dict:
    return {"product_id": product_id, "quantity": random.randint(1, 3)}


def delivery_address() -> dict:
    return {
        "street": fake.street_address(),
        "city": fake.city(),
        "postal_code": fake.zipcode(),
        "country": "US",
    }


def checkout_payload(line_count: int = 2) -> dict:
    """A fully priced order as the checkout page submits it, with integer product ids."""
    order_items = [
        {
            "product_id": random.randint(1, 5000),
            "quantity": random.randint(1, 4),
            "price": round(random.uniform(4.99, 99.99), 2),
        }
        for _ in range(line_count)
    ]
    total = round(sum(item["quantity"] * item["price"] for item in order_items), 2)
    return {
        "total_amount": total,
        "order_items": order_items,
        "delivery_address": delivery_address(),
        "payment_method": random.choice(["card", "cod", "upi"]),
    }
