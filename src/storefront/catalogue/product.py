"""Product aggregate: the priced, stocked item a cart line and an order line refer to."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    """A sellable product.

    `tax_percent` is optional; a product without one is sold tax-free.
    `original_price` is the pre-discount price shown struck through on the
    storefront and plays no part in order totals.
    """

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    tax_percent: Float(min_value=0.0)
    original_price: Float(min_value=0.0)
    available_stock: Integer(default=0, min_value=0)
    image_url: String(max_length=1024)
    reviews_count: Integer(min_value=0)
    category_id: Identifier()
    created_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        tax_percent=None,
        original_price=None,
        available_stock=0,
        image_url=None,
        reviews_count=None,
        category_id=None,
    ):
        return cls(
            name=name,
            price=price,
            description=description,
            tax_percent=tax_percent,
            original_price=original_price,
            available_stock=available_stock or 0,
            image_url=image_url,
            reviews_count=reviews_count,
            category_id=category_id,
            created_at=datetime.now(UTC),
        )

    def price_with_tax(self) -> float:
        """Unit price including this product's tax percentage."""
        return self.price + (self.price * (self.tax_percent or 0) / 100)
