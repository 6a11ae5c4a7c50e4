"""Pydantic request/response schemas for the Storefront API.

Request bodies are snake_case. Responses carry the persisted fields in
camelCase, which is what the storefront frontend was built against, plus a
handful of snake_case duplicates it also reads. Both spellings are declared
here and nowhere else.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CategorySchema(WireModel):
    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_domain(cls, category):
        return cls(id=str(category.id), name=category.name, description=category.description)


class ProductSchema(WireModel):
    id: str
    name: str
    description: str | None = None
    price: float
    tax_percent: float | None = None
    original_price: float | None = None
    available_stock: int | None = None
    image_url: str | None = None
    reviews_count: int | None = None
    category_id: str | None = None
    created_at: datetime | None = None
    category: CategorySchema | None = None

    @computed_field(alias="image_url")
    @property
    def image_url_compat(self) -> str | None:
        return self.image_url

    @computed_field(alias="stock_quantity")
    @property
    def stock_quantity_compat(self) -> int | None:
        return self.available_stock

    @computed_field(alias="original_price")
    @property
    def original_price_compat(self) -> float | None:
        return self.original_price

    @computed_field(alias="reviews_count")
    @property
    def reviews_count_compat(self) -> int:
        return self.reviews_count or 0

    @classmethod
    def from_domain(cls, product, category=None):
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            tax_percent=product.tax_percent,
            original_price=product.original_price,
            available_stock=product.available_stock,
            image_url=product.image_url,
            reviews_count=product.reviews_count,
            category_id=str(product.category_id) if product.category_id else None,
            created_at=product.created_at,
            category=CategorySchema.from_domain(category) if category is not None else None,
        )


class OrderItemSchema(WireModel):
    id: str
    order_id: str
    product_id: int | str
    quantity: int
    price: float
    product: ProductSchema | None = None


class OrderSchema(WireModel):
    id: str
    user_id: str
    total_price: float
    total_amount: float
    delivery_address: str | None = None
    payment_method: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemSchema] = []

    @computed_field(alias="total_amount")
    @property
    def total_amount_compat(self) -> float:
        return self.total_amount or self.total_price

    @computed_field(alias="delivery_address")
    @property
    def delivery_address_compat(self) -> str | None:
        return self.delivery_address

    @computed_field(alias="payment_method")
    @property
    def payment_method_compat(self) -> str | None:
        return self.payment_method


class CartItemSchema(WireModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    added_at: datetime | None = None
    product: ProductSchema | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


class CreateCategoryRequest(BaseModel):
    name: str
    description: str | None = None


class AddProductRequest(BaseModel):
    name: str
    price: float = Field(ge=0)
    description: str | None = None
    tax_percent: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    available_stock: int = Field(default=0, ge=0)
    image_url: str | None = None
    reviews_count: int | None = Field(default=None, ge=0)
    category_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ceramic Pour-Over Set",
                    "price": 42.0,
                    "tax_percent": 18.0,
                    "original_price": 55.0,
                    "available_stock": 12,
                    "image_url": "https://cdn.example.com/pour-over.jpg",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Acknowledgement Schemas
# ---------------------------------------------------------------------------
class CartItemIdResponse(BaseModel):
    cart_item_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
