"""Storefront bounded context: catalogue, shopping cart and orders.

Orders are created either from the caller's cart or from a checkout payload
submitted directly by the frontend, and listed back per user.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
