"""Marketplace FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
under the API prefix runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml (test, production).
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.domain import marketplace
from marketplace.utils.logging import bind_request, clear_request

marketplace.init()

API_PREFIX = "/api/v2"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketplace API",
    description="Multi-shop checkout, order lifecycle and seller ledger",
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
    """Push the marketplace domain context for API requests."""
    if request.url.path.startswith(API_PREFIX):
        bind_request(
            request_id=request.headers.get("X-Request-Id") or uuid4().hex,
            path=request.url.path,
            actor_id=request.headers.get("X-Actor-Id"),
            actor_role=request.headers.get("X-Actor-Role"),
        )
        try:
            with marketplace.domain_context():
                response = await call_next(request)
        finally:
            clear_request()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.api.errors import register_error_handlers  # noqa: E402
from marketplace.api.orders import order_router  # noqa: E402
from marketplace.api.payments import payment_router  # noqa: E402
from marketplace.api.products import product_router  # noqa: E402
from marketplace.api.shops import shop_router  # noqa: E402
from marketplace.api.withdrawals import withdraw_router  # noqa: E402

for router in (order_router, withdraw_router, shop_router, product_router, payment_router):
    app.include_router(router, prefix=API_PREFIX)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": marketplace.name},
        }
    )
