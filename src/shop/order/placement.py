"""Order placement — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.item.item import Item
from shop.member.member import Member
from shop.order.order import Order
from shop.utils.logging import get_logger

logger = get_logger(__name__)


@shop.command(part_of="Order")
class PlaceOrder:
    """Place an order for a member.

    ``items`` is a JSON list of ``{"item_id": ..., "count": ...}``; an empty
    list places an order with no items.
    """

    member_id: Identifier(required=True)
    items: Text(required=True)


@shop.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        member = current_domain.repository_for(Member).get(command.member_id)

        try:
            entries = json.loads(command.items)
        except json.JSONDecodeError as exc:
            raise ValidationError({"items": ["Items must be a JSON list"]}) from exc
        if not isinstance(entries, list):
            raise ValidationError({"items": ["Items must be a JSON list"]})

        item_repo = current_domain.repository_for(Item)
        loaded = {}
        lines = []
        for entry in entries:
            item_id = str(entry["item_id"])
            count = int(entry["count"])
            if item_id not in loaded:
                loaded[item_id] = item_repo.get(item_id)
            item = loaded[item_id]
            item.remove_stock(count)
            lines.append((item, count))

        for item in loaded.values():
            item_repo.add(item)

        order = Order.place(member, lines)
        current_domain.repository_for(Order).add(order)

        logger.info("order_placed", order_id=str(order.id), member_id=str(member.id), lines=len(lines))
        return str(order.id)
