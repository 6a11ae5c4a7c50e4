"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users. State holds the ids returned by creation endpoints so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from browsing through checkout."""

    user_id: str
    token: str
    category_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}
