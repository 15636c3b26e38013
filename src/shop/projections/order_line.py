"""Order lines: one row per order item with the order fields repeated."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.member.events import MemberRenamed
from shop.member.member import Member
from shop.order.events import OrderCanceled, OrderPlaced
from shop.order.order import Order, OrderStatus
from shop.projections.paging import iter_records


def line_id_for(order_id, line_no):
    return f"{order_id}:{line_no}"


@shop.projection
class OrderLine:
    line_id = Identifier(identifier=True, required=True)
    order_id = Identifier(required=True)
    member_id = Identifier(required=True)
    member_name = String(required=True, max_length=100)
    order_date = DateTime(required=True)
    status = String(required=True)
    sort_key = String(required=True, max_length=90)
    city = String(max_length=100)
    street = String(max_length=255)
    zipcode = String(max_length=20)
    item_id = Identifier(required=True)
    item_name = String(required=True, max_length=255)
    order_price = Integer(required=True)
    count = Integer(required=True)
    line_no = Integer(required=True)


@shop.projector(projector_for=OrderLine, aggregates=[Order, Member])
class OrderLineProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        repo = current_domain.repository_for(OrderLine)
        for line in json.loads(event.items) if event.items else []:
            repo.add(
                OrderLine(
                    line_id=line_id_for(event.order_id, line["line_no"]),
                    order_id=event.order_id,
                    member_id=event.member_id,
                    member_name=event.member_name,
                    order_date=event.order_date,
                    status=event.status,
                    sort_key=f"{event.sort_key}|{line['line_no']:06d}",
                    city=event.city,
                    street=event.street,
                    zipcode=event.zipcode,
                    item_id=line["item_id"],
                    item_name=line["item_name"],
                    order_price=line["order_price"],
                    count=line["count"],
                    line_no=line["line_no"],
                )
            )

    @on(OrderCanceled)
    def on_order_canceled(self, event):
        repo = current_domain.repository_for(OrderLine)
        for line in list(iter_records(OrderLine, "line_id", order_id=event.order_id)):
            line.status = OrderStatus.CANCELED.value
            repo.add(line)

    @on(MemberRenamed)
    def on_member_renamed(self, event):
        repo = current_domain.repository_for(OrderLine)
        for line in list(iter_records(OrderLine, "line_id", member_id=event.member_id)):
            line.member_name = event.name
            repo.add(line)
