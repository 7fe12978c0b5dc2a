"""ShopForm bounded context: storefront registrations and product reviews.

Collects customer-submitted forms and reviews per shop, validates them
according to their shape, and aggregates star ratings per product.
"""

from protean.domain import Domain

from shopform.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shopform = Domain(name="shopform")
