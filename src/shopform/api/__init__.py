"""ShopForm API package."""

from shopform.api.application import create_app
from shopform.api.routes import userdata_router

__all__ = ["create_app", "userdata_router"]
