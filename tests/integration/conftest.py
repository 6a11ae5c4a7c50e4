import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api.auth import current_user_id
from storefront.api.errors import register_error_handlers
from storefront.api.routes import cart_router, category_router, order_router, product_router


@pytest.fixture()
def app():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(order_router)
    app.include_router(cart_router)
    app.include_router(product_router)
    app.include_router(category_router)
    return app


@pytest.fixture()
def client(app):
    """Client whose requests are all made as user-001."""
    app.dependency_overrides[current_user_id] = lambda: "user-001"
    return TestClient(app, raise_server_exceptions=False)
