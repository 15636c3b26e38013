"""Strategy selection for order listing."""

from enum import Enum

from shop.domain import custom_setting
from shop.order_query.repository import OrderQueryRepository
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class OrderQueryStrategy(Enum):
    NAIVE = "naive"
    FETCH_JOIN = "fetch_join"
    BATCHED = "batched"
    FLAT = "flat"


def find_orders(
    strategy: OrderQueryStrategy = OrderQueryStrategy.BATCHED,
    offset: int = 0,
    limit: int | None = None,
    batch_size: int | None = None,
    repository: OrderQueryRepository | None = None,
):
    """List orders with members, delivery addresses and items.

    All strategies return the same ``OrderQueryResult``s for the same data;
    they differ only in how many queries they cost. ``FLAT`` reads everything
    in one query and does not paginate.
    """
    strategy = OrderQueryStrategy(strategy)
    repository = repository or OrderQueryRepository(batch_size=batch_size)
    paginated = bool(offset) or limit is not None
    if limit is None:
        limit = custom_setting("default_page_size", 100)

    if strategy is OrderQueryStrategy.NAIVE:
        results = repository.find_naive(offset=offset, limit=limit)
    elif strategy is OrderQueryStrategy.FETCH_JOIN:
        results = repository.find_fetch_join(offset=offset, limit=limit)
    elif strategy is OrderQueryStrategy.BATCHED:
        results = repository.find_batched(offset=offset, limit=limit)
    else:
        if paginated:
            logger.warning("flat_strategy_ignores_pagination", offset=offset, limit=limit)
        results = repository.find_flat()

    logger.debug(
        "orders_queried",
        strategy=strategy.value,
        orders=len(results),
        queries=repository.queries_issued,
    )
    return results


def find_simple_orders(offset: int = 0, limit: int | None = None, repository: OrderQueryRepository | None = None):
    """List orders with their member name and delivery address only."""
    repository = repository or OrderQueryRepository()
    if limit is None:
        limit = custom_setting("default_page_size", 100)
    return repository.find_simple(offset=offset, limit=limit)
