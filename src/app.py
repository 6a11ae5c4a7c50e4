"""Storefront FastAPI application.

Serves the order, cart and catalogue endpoints. Every request to a domain
route runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay in storefront/domain.toml:
#   - unset / "test" → in-memory providers
#   - "production"   → PostgreSQL via DATABASE_URL
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront.domain import storefront
from storefront.utils.logging import bind_request_context, clear_request_context

storefront.init()

_DOMAIN_ROUTE_PREFIXES = ("/orders", "/cart", "/products", "/categories")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce storefront: catalogue, cart and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_ROUTE_PREFIXES):
        bind_request_context(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_request_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api.errors import register_error_handlers  # noqa: E402
from storefront.api.routes import cart_router, category_router, order_router, product_router  # noqa: E402

register_error_handlers(app)

app.include_router(order_router)
app.include_router(cart_router)
app.include_router(product_router)
app.include_router(category_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
