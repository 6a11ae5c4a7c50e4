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


def pytest_configure(config):
    # Must be set before the domain module is imported and its config loaded
    os.environ["PROTEAN_ENV"] = config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
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


# ---------------------------------------------------------------------------
# Catalogue and cart builders shared by application, integration and BDD tests
# ---------------------------------------------------------------------------
@pytest.fixture
def make_category():
    from protean import current_domain
    from storefront.catalogue.management import CreateCategory

    def _make(name="Kitchen", description=None):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _make


@pytest.fixture
def make_product():
    from protean import current_domain
    from storefront.catalogue.management import AddProduct

    def _make(name="Widget", price=10.0, **overrides):
        command = AddProduct(name=name, price=price, **overrides)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture
def add_to_cart():
    from protean import current_domain
    from storefront.cart.items import AddToCart

    def _add(user_id, product_id, quantity=1):
        command = AddToCart(user_id=user_id, product_id=product_id, quantity=quantity)
        return current_domain.process(command, asynchronous=False)

    return _add
