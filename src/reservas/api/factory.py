"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from reservas.api.errors import install_error_handlers, unexpected_error_response
from reservas.api.routes import reservations
from reservas.observability.correlation import (
    CORRELATION_ID_HEADER,
    correlation_scope,
    resolve_correlation_id,
)

from .routers import public


def create_app() -> FastAPI:
    """Create the FastAPI app with routes, error handlers and middleware.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Reservas",
        docs_url=None,
        redoc_url=None,
    )

    # Correlation ID middleware
    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        with correlation_scope(cid):
            try:
                response = await call_next(request)
            except Exception as exc:
                # Unhandled errors would otherwise reach ServerErrorMiddleware
                # after the scope has exited.
                response = unexpected_error_response(request, exc)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    install_error_handlers(app)

    # Mount routes
    app.include_router(public.router)
    app.include_router(reservations.router)

    return app
