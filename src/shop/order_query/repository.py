"""Order read queries, one method per loading strategy.

Every query goes through ``_fetch`` so the number of store round trips each
strategy costs is visible on ``queries_issued``.
"""

from protean.utils.globals import current_domain

from shop.domain import custom_setting
from shop.item.item import Item
from shop.member.member import Member
from shop.order.order import Delivery, Order, OrderItem
from shop.order_query.aggregator import aggregate_flat_rows
from shop.order_query.results import (
    AddressData,
    OrderFlatRow,
    OrderItemQueryResult,
    OrderQueryResult,
    OrderSimpleQueryResult,
)
from shop.projections.order_line import OrderLine
from shop.projections.order_summary import OrderSummary
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def _item_result(line):
    return OrderItemQueryResult(item_name=line.item_name, order_price=line.order_price, count=line.count)


def _summary_address(summary):
    return AddressData.from_parts(summary.city, summary.street, summary.zipcode)


class OrderQueryRepository:
    def __init__(self, batch_size: int | None = None):
        self.batch_size = batch_size or custom_setting("batch_fetch_size", 100)
        self.max_rows = custom_setting("max_query_rows", 1000)
        self.queries_issued = 0

    def _query(self, cls):
        return current_domain.repository_for(cls)._dao.query

    def _fetch(self, queryset) -> list:
        self.queries_issued += 1
        return queryset.all().items

    def _fetch_all(self, queryset) -> list:
        """Fetch every row of an ordered queryset in ``max_rows`` pages."""
        rows = []
        offset = 0
        while True:
            page = self._fetch(queryset.offset(offset).limit(self.max_rows))
            rows.extend(page)
            if len(page) < self.max_rows:
                return rows
            offset += self.max_rows

    def _page_limit(self, limit):
        return self.max_rows if limit is None else min(limit, self.max_rows)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------
    def find_naive(self, offset: int = 0, limit: int | None = None) -> list[OrderQueryResult]:
        """Load each association separately, the way lazy loading would."""
        orders = self._fetch(
            self._query(Order).order_by("sort_key").offset(offset).limit(self._page_limit(limit))
        )

        results = []
        for order in orders:
            member = self._fetch(self._query(Member).filter(id=order.member_id).limit(1))
            delivery = self._fetch(self._query(Delivery).filter(order_id=order.id).limit(1))
            order_items = self._fetch(
                self._query(OrderItem).filter(order_id=order.id).order_by("line_no").limit(self.max_rows)
            )

            item_results = []
            for order_item in order_items:
                item = self._fetch(self._query(Item).filter(id=order_item.item_id).limit(1))
                item_results.append(
                    OrderItemQueryResult(
                        item_name=item[0].name if item else None,
                        order_price=order_item.order_price,
                        count=order_item.count,
                    )
                )

            results.append(
                OrderQueryResult(
                    order_id=str(order.id),
                    name=member[0].name if member else None,
                    order_date=order.order_date,
                    order_status=order.status,
                    address=AddressData.from_value(delivery[0].address) if delivery else None,
                    order_items=tuple(item_results),
                )
            )
        return results

    def find_fetch_join(self, offset: int = 0, limit: int | None = None) -> list[OrderQueryResult]:
        """Read orders joined to their member and delivery, then items per order."""
        summaries = self._fetch_summaries(offset, limit)
        return [
            self._result(
                summary,
                self._fetch_all(self._query(OrderLine).filter(order_id=summary.order_id).order_by("line_no")),
            )
            for summary in summaries
        ]

    def find_batched(self, offset: int = 0, limit: int | None = None) -> list[OrderQueryResult]:
        """Read a page of orders, then their items with one ``IN`` query per batch."""
        summaries = self._fetch_summaries(offset, limit)
        order_ids = [str(summary.order_id) for summary in summaries]

        lines_by_order = {order_id: [] for order_id in order_ids}
        for start in range(0, len(order_ids), self.batch_size):
            batch = order_ids[start : start + self.batch_size]
            for line in self._fetch_all(self._query(OrderLine).filter(order_id__in=batch).order_by("line_id")):
                lines_by_order[str(line.order_id)].append(line)

        return [
            self._result(summary, sorted(lines_by_order[str(summary.order_id)], key=lambda line: line.line_no))
            for summary in summaries
        ]

    def find_flat(self) -> list[OrderQueryResult]:
        """Read the order/item join as flat rows in one query and collapse them.

        At most ``max_rows`` rows are read. When more exist, the lines of the
        order straddling the cap are dropped, so every returned order is whole.
        """
        lines = self._fetch(self._query(OrderLine).order_by("sort_key").limit(self.max_rows + 1))
        if len(lines) > self.max_rows:
            cut_order_id = str(lines[self.max_rows].order_id)
            lines = lines[: self.max_rows]
            while lines and str(lines[-1].order_id) == cut_order_id:
                lines.pop()
            logger.warning(
                "flat_query_truncated",
                max_rows=self.max_rows,
                rows_returned=len(lines),
                first_dropped_order=cut_order_id,
            )

        rows = [
            OrderFlatRow(
                order_id=str(line.order_id),
                name=line.member_name,
                order_date=line.order_date,
                order_status=line.status,
                address=_summary_address(line),
                item_name=line.item_name,
                order_price=line.order_price,
                count=line.count,
            )
            for line in lines
        ]
        return aggregate_flat_rows(rows)

    def find_simple(self, offset: int = 0, limit: int | None = None) -> list[OrderSimpleQueryResult]:
        """Orders with their member name and delivery address, no items."""
        return [
            OrderSimpleQueryResult(
                order_id=str(summary.order_id),
                name=summary.member_name,
                order_date=summary.order_date,
                order_status=summary.status,
                address=_summary_address(summary),
            )
            for summary in self._fetch_summaries(offset, limit)
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _fetch_summaries(self, offset, limit):
        return self._fetch(
            self._query(OrderSummary).order_by("sort_key").offset(offset).limit(self._page_limit(limit))
        )

    def _result(self, summary, lines):
        return OrderQueryResult(
            order_id=str(summary.order_id),
            name=summary.member_name,
            order_date=summary.order_date,
            order_status=summary.status,
            address=_summary_address(summary),
            order_items=tuple(_item_result(line) for line in lines),
        )
