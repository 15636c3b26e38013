"""Order summary: one row per order with its member name and delivery address."""

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


@shop.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    member_id = Identifier(required=True)
    member_name = String(required=True, max_length=100)
    order_date = DateTime(required=True)
    status = String(required=True)
    sort_key = String(required=True, max_length=80)
    city = String(max_length=100)
    street = String(max_length=255)
    zipcode = String(max_length=20)
    item_count = Integer(default=0)
    total_price = Integer(default=0)


@shop.projector(projector_for=OrderSummary, aggregates=[Order, Member])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        items = json.loads(event.items) if event.items else []
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                member_id=event.member_id,
                member_name=event.member_name,
                order_date=event.order_date,
                status=event.status,
                sort_key=event.sort_key,
                city=event.city,
                street=event.street,
                zipcode=event.zipcode,
                item_count=len(items),
                total_price=event.total_price,
            )
        )

    @on(OrderCanceled)
    def on_order_canceled(self, event):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(event.order_id)
        summary.status = OrderStatus.CANCELED.value
        repo.add(summary)

    @on(MemberRenamed)
    def on_member_renamed(self, event):
        repo = current_domain.repository_for(OrderSummary)
        for summary in list(iter_records(OrderSummary, "order_id", member_id=event.member_id)):
            summary.member_name = event.name
            repo.add(summary)
