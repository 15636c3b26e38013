"""Collapse flat order/item rows into one result per order."""

from shop.order_query.results import OrderItemQueryResult, OrderQueryResult

_REQUIRED_ORDER_FIELDS = ("order_id", "name", "order_date", "order_status")


def _order_key(row):
    missing = [field for field in _REQUIRED_ORDER_FIELDS if getattr(row, field) is None]
    if missing:
        raise ValueError(f"Flat row for order {row.order_id!r} is missing {', '.join(missing)}")
    return (row.order_id, row.name, row.order_date, row.order_status, row.address)


def aggregate_flat_rows(rows):
    """Group ``OrderFlatRow``s by their order-level fields.

    Orders come out in the order their first row was seen and each order keeps
    its items in row order. Rows with the same order id but differing
    order-level fields are treated as different orders.

    Raises ``ValueError`` when a row lacks any of order id, member name,
    order date or status. A missing address is allowed.
    """
    grouped = {}
    for row in rows:
        key = _order_key(row)
        grouped.setdefault(key, []).append(
            OrderItemQueryResult(
                item_name=row.item_name,
                order_price=row.order_price,
                count=row.count,
            )
        )

    return [
        OrderQueryResult(
            order_id=order_id,
            name=name,
            order_date=order_date,
            order_status=order_status,
            address=address,
            order_items=tuple(items),
        )
        for (order_id, name, order_date, order_status, address), items in grouped.items()
    ]
