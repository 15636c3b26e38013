import json
from datetime import UTC, datetime, timedelta, timezone

import pytest
from protean.exceptions import ValidationError
from shop.item.item import Item
from shop.member.member import Member
from shop.order.events import OrderCanceled, OrderPlaced
from shop.order.order import DeliveryStatus, Order, OrderStatus, order_sort_key


@pytest.fixture()
def member():
    return Member.join(name="userA", city="Seoul", street="1 Main St", zipcode="11111")


@pytest.fixture()
def books():
    return (
        Item(name="JPA1 BOOK", price=10000, stock_quantity=100),
        Item(name="JPA2 BOOK", price=20000, stock_quantity=100),
    )


class TestOrderPlacement:
    def test_place_sets_member_status_and_date(self, member, books):
        order = Order.place(member, [(books[0], 1)])

        assert order.member_id == member.id
        assert order.status == OrderStatus.ORDERED.value
        assert order.order_date is not None

    def test_place_sets_sort_key_from_date_and_id(self, member, books):
        order = Order.place(member, [(books[0], 1)])

        assert order.sort_key == order_sort_key(order.order_date, order.id)
        assert order.sort_key.endswith(f"|{order.id}")
        assert order.order_date.tzinfo is not None

    def test_place_numbers_lines_and_snapshots_prices(self, member, books):
        order = Order.place(member, [(books[0], 1), (books[1], 2)])

        lines = sorted(order.items, key=lambda line: line.line_no)
        assert [line.line_no for line in lines] == [0, 1]
        assert [line.order_price for line in lines] == [10000, 20000]
        assert [line.count for line in lines] == [1, 2]

    def test_total_price_sums_lines(self, member, books):
        order = Order.place(member, [(books[0], 1), (books[1], 2)])
        assert order.total_price == 50000

    def test_delivery_copies_member_address(self, member, books):
        order = Order.place(member, [(books[0], 1)])

        assert order.delivery.status == DeliveryStatus.READY.value
        assert order.delivery.address.city == "Seoul"
        assert order.delivery.address.zipcode == "11111"

    def test_member_without_address_gets_delivery_without_address(self, books):
        order = Order.place(Member.join(name="userB"), [(books[0], 1)])
        assert order.delivery.address is None

    def test_order_without_items(self, member):
        order = Order.place(member, [])

        assert len(order.items) == 0
        assert order.total_price == 0

    def test_place_raises_order_placed_with_snapshot(self, member, books):
        order = Order.place(member, [(books[0], 1), (books[1], 2)])

        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == order.id
        assert event.member_name == "userA"
        assert event.city == "Seoul"
        assert event.total_price == 50000

        snapshot = json.loads(event.items)
        assert [line["item_name"] for line in snapshot] == ["JPA1 BOOK", "JPA2 BOOK"]
        assert [line["line_no"] for line in snapshot] == [0, 1]


class TestOrderCancellation:
    def test_cancel_sets_status_and_raises_event(self, member, books):
        order = Order.place(member, [(books[0], 1)])
        order._events.clear()

        order.cancel()

        assert order.status == OrderStatus.CANCELED.value
        assert isinstance(order._events[-1], OrderCanceled)

    def test_cannot_cancel_twice(self, member, books):
        order = Order.place(member, [(books[0], 1)])
        order.cancel()

        with pytest.raises(ValidationError) as exc:
            order.cancel()
        assert "status" in exc.value.messages

    def test_cannot_cancel_delivered_order(self, member, books):
        order = Order.place(member, [(books[0], 1)])
        order.delivery.status = DeliveryStatus.COMP.value

        with pytest.raises(ValidationError) as exc:
            order.cancel()

        assert "delivery" in exc.value.messages
        assert order.status == OrderStatus.ORDERED.value


class TestOrderSortKey:
    def test_earlier_orders_sort_first(self):
        earlier = order_sort_key(datetime(2026, 1, 1, 9, 0, tzinfo=UTC), "b")
        later = order_sort_key(datetime(2026, 1, 1, 9, 0, 0, 1, tzinfo=UTC), "a")
        assert earlier < later

    def test_same_instant_ties_break_on_order_id(self):
        moment = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)
        assert order_sort_key(moment, "a") < order_sort_key(moment, "b")

    def test_offsets_are_normalised_to_utc(self):
        seoul = timezone(timedelta(hours=9))
        assert order_sort_key(datetime(2026, 1, 1, 18, 0, tzinfo=seoul), "a") == order_sort_key(
            datetime(2026, 1, 1, 9, 0, tzinfo=UTC), "a"
        )
