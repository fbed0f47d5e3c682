import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("STOREFRONT_STORE", "memory")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Fresh store, settings and services for every test."""
    from storefront.cart import reset_carts
    from storefront.config import reset_settings
    from storefront.notification import reset_notification_center
    from storefront.order import reset_ledger
    from storefront.persistence import reset_store

    def _reset():
        reset_carts()
        reset_ledger()
        reset_notification_center()
        reset_store()
        reset_settings()

    _reset()
    yield
    _reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def store():
    from storefront.persistence.memory_store import InMemoryStore

    return InMemoryStore()


@pytest.fixture()
def settings():
    from storefront.config import StorefrontSettings

    return StorefrontSettings()


@pytest.fixture()
def address():
    return {
        "name": "Jane Doe",
        "street": "1 Market St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
        "phone": "555-0100",
    }


def make_product(product_id="prod-001", name="Widget", price=25.0, category="gadgets"):
    from storefront.shared.product import Product

    return Product(product_id=product_id, name=name, price=price, category=category)


@pytest.fixture()
def product_factory():
    return make_product
