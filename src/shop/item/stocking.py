"""Item registration and listing."""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from shop.domain import custom_setting, shop
from shop.item.item import Item


@shop.command(part_of="Item")
class AddItem:
    """Put a new item on sale with an initial stock level."""

    name: String(required=True, max_length=255)
    price: Integer(required=True, min_value=0)
    stock_quantity: Integer(default=0, min_value=0)


@shop.command_handler(part_of=Item)
class AddItemHandler:
    @handle(AddItem)
    def add_item(self, command):
        item = Item(
            name=command.name,
            price=command.price,
            stock_quantity=command.stock_quantity,
        )
        current_domain.repository_for(Item).add(item)
        return str(item.id)


def find_items() -> list[Item]:
    return (
        current_domain.repository_for(Item)
        ._dao.query.order_by("name")
        .limit(custom_setting("max_query_rows", 1000))
        .all()
        .items
    )
