"""Shop domain API package."""

from shop.api.errors import register_error_handlers
from shop.api.routes import item_router, member_router, order_router

__all__ = ["item_router", "member_router", "order_router", "register_error_handlers"]
