"""Storefront FastAPI application.

Processes commands synchronously via HTTP; every request runs inside the
storefront domain context.

Usage:
    uvicorn storefront.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import ErrorKind, StorefrontError
from storefront.utils.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PERSISTENCE: 503,
}


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = _STATUS_BY_KIND[exc.kind]
    if exc.kind is ErrorKind.CONFLICT:
        logger.warning("Request conflicted", path=request.url.path, error=str(exc))
    elif exc.kind is ErrorKind.PERSISTENCE:
        logger.error("Store unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.messages, "kind": exc.kind.value, "retryable": exc.retryable},
    )


def register_storefront_error_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)


def create_app(init_domain: bool = True, setup_logging: bool = True) -> FastAPI:
    """Build the storefront API.

    Tests that already activated the domain pass ``init_domain=False``.
    """
    from storefront.domain import storefront

    if setup_logging:
        configure_logging()
    if init_domain:
        storefront.init()

    app = FastAPI(
        title="Storefront API",
        description="Shopping cart, checkout, order tracking and notifications",
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
        """Push the storefront domain context and request log context."""
        add_context(request_id=uuid.uuid4().hex[:12], method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    register_storefront_error_handlers(app)

    from storefront.api import cart_router, notification_router, order_router, tracking_router

    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(tracking_router)
    app.include_router(notification_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
