"""Reviews domain API package."""

from uuid import uuid4

from fastapi import FastAPI, Request
from protean.integrations.fastapi import register_exception_handlers

from reviews.api.errors import register_review_exception_handlers
from reviews.api.routes import (
    feedback_router,
    product_review_router,
    review_router,
    settings_router,
    user_review_router,
)
from reviews.utils.logging import add_context, clear_context

ROUTERS = (
    product_review_router,
    review_router,
    user_review_router,
    feedback_router,
    settings_router,
)


def install(app: FastAPI) -> FastAPI:
    """Mount the reviews routers and error handlers on ``app``.

    Every request runs inside the reviews domain context, with its
    ``X-Request-Id`` (generated when absent) bound to the log context and
    echoed on the response.
    """
    from reviews.domain import reviews

    for router in ROUTERS:
        app.include_router(router)

    register_exception_handlers(app)
    register_review_exception_handlers(app)

    @app.middleware("http")
    async def reviews_domain_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or uuid4().hex
        add_context(request_id=request_id)
        try:
            with reviews.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-Id"] = request_id
        return response

    return app


__all__ = [
    "install",
    "product_review_router",
    "review_router",
    "user_review_router",
    "feedback_router",
    "settings_router",
]
