"""Shop bounded context: members, items, orders and the order query layer.

Members place orders for items; every order ships to a single delivery address.
Reads go through explicit query strategies (see ``shop.order_query``) rather
than on-access association loading.
"""

from protean.domain import Domain

from shop.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

shop = Domain(name="shop")


def custom_setting(name, default):
    """Read a value from the ``[custom]`` table of ``domain.toml``."""
    custom = shop.config.get("custom") or {}
    return custom.get(name, default)
