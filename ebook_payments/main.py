import logging
from time import perf_counter
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ebook_payments.config import Settings
from ebook_payments.errors import InvalidRequest, PaymentServiceError
from ebook_payments.log import configure_logging
from ebook_payments.routes import router
from ebook_payments.security import origin_gate, security_headers
from ebook_payments.stripe_service import PaymentProcessor, StripeProcessor

logger = logging.getLogger("ebook_payments.main")


async def payment_error_handler(request: Request, exc: PaymentServiceError):
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected invalid input on %s: %s", request.url.path, exc.errors())
    return JSONResponse({"detail": InvalidRequest.detail}, status_code=InvalidRequest.status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"detail": "Something broke!"}, status_code=500)


async def access_log(request: Request, call_next):
    """One line per request, like a combined-format access log."""

    start = perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s",
            request.method,
            request.url.path,
            status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "client": client,
                "user_agent": request.headers.get("user-agent", "-"),
                "duration_ms": round((perf_counter() - start) * 1000, 2),
            },
        )


def create_app(settings: Settings, processor: Optional[PaymentProcessor] = None) -> FastAPI:
    app = FastAPI(title="Ebook Payment Service")
    app.state.settings = settings
    app.state.processor = processor or StripeProcessor(settings.stripe_secret_key)

    app.include_router(router)

    app.add_exception_handler(PaymentServiceError, payment_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Last added runs first: access log, security headers, origin gate, then CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins + [origin + "/" for origin in settings.allowed_origins],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.middleware("http")(origin_gate)
    app.middleware("http")(security_headers)
    app.middleware("http")(access_log)

    return app


settings = Settings.from_env()
configure_logging(settings.service_name, settings.log_level)
app = create_app(settings)


def run():
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
