"""Order cancellation — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.item.item import Item
from shop.order.order import Order


@shop.command(part_of="Order")
class CancelOrder:
    """Cancel an order and return its items to stock."""

    order_id: Identifier(required=True)


@shop.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel()

        item_repo = current_domain.repository_for(Item)
        restocked = {}
        for order_item in order.items:
            item_id = str(order_item.item_id)
            if item_id not in restocked:
                restocked[item_id] = item_repo.get(item_id)
            restocked[item_id].add_stock(order_item.count)

        for item in restocked.values():
            item_repo.add(item)

        repo.add(order)
