import pytest


@pytest.fixture(scope="session")
def _shop_domain():
    """Initialize the shop domain once per session."""
    from shop.domain import shop

    shop.init()
    return shop


@pytest.fixture(scope="session", autouse=True)
def setup_db(_shop_domain):
    from shop.utils.db import drop_db, setup_db

    setup_db(_shop_domain)

    yield

    drop_db(_shop_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_shop_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _shop_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

