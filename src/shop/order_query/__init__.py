"""Order query layer: read strategies over orders and their items."""

from shop.order_query.aggregator import aggregate_flat_rows
from shop.order_query.results import (
    AddressData,
    OrderFlatRow,
    OrderItemQueryResult,
    OrderQueryResult,
    OrderSimpleQueryResult,
)
from shop.order_query.strategies import OrderQueryStrategy, find_orders, find_simple_orders

__all__ = [
    "AddressData",
    "OrderFlatRow",
    "OrderItemQueryResult",
    "OrderQueryResult",
    "OrderQueryStrategy",
    "OrderSimpleQueryResult",
    "aggregate_flat_rows",
    "find_orders",
    "find_simple_orders",
]
