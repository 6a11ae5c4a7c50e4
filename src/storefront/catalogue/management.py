"""Catalogue management: commands and handler for categories and products."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    tax_percent: Float(min_value=0.0)
    original_price: Float(min_value=0.0)
    available_stock: Integer(default=0, min_value=0)
    image_url: String(max_length=1024)
    reviews_count: Integer(min_value=0)
    category_id: Identifier()


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        if command.category_id:
            # Raises ObjectNotFoundError for an unknown category
            current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            tax_percent=command.tax_percent,
            original_price=command.original_price,
            available_stock=command.available_stock,
            image_url=command.image_url,
            reviews_count=command.reviews_count,
            category_id=command.category_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
