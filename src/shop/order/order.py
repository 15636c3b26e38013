"""Order aggregate with its OrderItem and Delivery entities.

An order references its member and items by id only. Order items snapshot
the unit price at placement; later price changes on the item do not touch
existing orders.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, HasOne, Identifier, Integer, String, ValueObject

from shop.domain import shop
from shop.shared.address import Address


class OrderStatus(Enum):
    ORDERED = "ORDERED"
    CANCELED = "CANCELED"


class DeliveryStatus(Enum):
    READY = "READY"
    COMP = "COMP"


def order_sort_key(order_date, order_id):
    """Orders sort by placement time, then id, as one comparable string."""
    return f"{order_date.astimezone(UTC):%Y%m%d%H%M%S%f}|{order_id}"


@shop.entity(part_of="Order")
class OrderItem:
    """One line of an order: an item, its unit price at order time and a count."""

    item_id: Identifier(required=True)
    order_price: Integer(required=True, min_value=0)
    count: Integer(required=True, min_value=1)
    line_no: Integer(required=True, min_value=0)

    @property
    def total_price(self):
        return self.order_price * self.count


@shop.entity(part_of="Order")
class Delivery:
    """Where an order ships to, copied from the member at placement."""

    address: ValueObject(Address)
    status: String(choices=DeliveryStatus, default=DeliveryStatus.READY.value)


@shop.aggregate
class Order:
    member_id: Identifier(required=True)
    order_date: DateTime(required=True)
    status: String(choices=OrderStatus, default=OrderStatus.ORDERED.value)
    sort_key: String(max_length=80)
    delivery: HasOne(Delivery)
    items: HasMany(OrderItem)

    @property
    def total_price(self):
        return sum(item.total_price for item in self.items)

    @classmethod
    def place(cls, member, lines):
        """Create an order for ``member``.

        ``lines`` is a sequence of ``(item, count)`` pairs. Stock is not
        touched here; the placing handler removes it from each item.
        """
        from shop.order.events import OrderPlaced

        now = datetime.now(UTC)
        address = member.address
        order = cls(member_id=member.id, order_date=now, status=OrderStatus.ORDERED.value)
        order.sort_key = order_sort_key(now, order.id)
        order.delivery = Delivery(
            address=Address(city=address.city, street=address.street, zipcode=address.zipcode) if address else None,
            status=DeliveryStatus.READY.value,
        )

        snapshot = []
        for line_no, (item, count) in enumerate(lines):
            order.add_items(
                OrderItem(
                    item_id=item.id,
                    order_price=item.price,
                    count=count,
                    line_no=line_no,
                )
            )
            snapshot.append(
                {
                    "item_id": str(item.id),
                    "item_name": item.name,
                    "order_price": item.price,
                    "count": count,
                    "line_no": line_no,
                }
            )

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                member_id=member.id,
                member_name=member.name,
                order_date=now,
                status=OrderStatus.ORDERED.value,
                sort_key=order.sort_key,
                city=address.city if address else None,
                street=address.street if address else None,
                zipcode=address.zipcode if address else None,
                items=json.dumps(snapshot),
                total_price=sum(line["order_price"] * line["count"] for line in snapshot),
            )
        )
        return order

    def cancel(self):
        from shop.order.events import OrderCanceled

        if self.status == OrderStatus.CANCELED.value:
            raise ValidationError({"status": ["Order is already canceled"]})
        if self.delivery is not None and self.delivery.status == DeliveryStatus.COMP.value:
            raise ValidationError({"delivery": ["Delivered orders cannot be canceled"]})

        self.status = OrderStatus.CANCELED.value
        self.raise_(
            OrderCanceled(
                order_id=self.id,
                canceled_at=datetime.now(UTC),
            )
        )
