"""Category aggregate: groups products for browsing."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100)
    description: Text()
    created_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, description=None):
        return cls(name=name, description=description, created_at=datetime.now(UTC))
