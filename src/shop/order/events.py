"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from shop.domain import shop


@shop.event(part_of="Order")
class OrderPlaced:
    """A member placed an order.

    Carries the member name, delivery address and item names as they were at
    placement so read models can be built without further lookups.
    """

    __version__ = 1

    order_id: Identifier(required=True)
    member_id: Identifier(required=True)
    member_name: String(required=True)
    order_date: DateTime(required=True)
    status: String(required=True)
    sort_key: String(required=True)
    city: String()
    street: String()
    zipcode: String()
    items: Text(required=True)  # JSON: [{item_id, item_name, order_price, count, line_no}]
    total_price: Integer(required=True)


@shop.event(part_of="Order")
class OrderCanceled:
    """An order was canceled before delivery completed."""

    __version__ = 1

    order_id: Identifier(required=True)
    canceled_at: DateTime(required=True)
