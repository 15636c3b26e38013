"""Helpers for walking every projection record that matches a filter."""

from protean.utils.globals import current_domain

from shop.domain import custom_setting


def iter_records(projection_cls, order_by, **filters):
    """Yield all matching records, one bounded page at a time.

    ``order_by`` must name a unique field, usually the identifier, so that
    consecutive pages neither repeat nor skip records.
    """
    page_size = custom_setting("max_query_rows", 1000)
    dao = current_domain.repository_for(projection_cls)._dao
    offset = 0
    while True:
        page = dao.query.filter(**filters).order_by(order_by).offset(offset).limit(page_size).all().items
        yield from page
        if len(page) < page_size:
            return
        offset += page_size
