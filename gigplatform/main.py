"""
main.py

Application entrypoint for the Gig Platform API.
- Initializes structured logging
- Sets up FastAPI application and middlewares
- Registers domain error handling and all API routers
- Integrates rate limiting via SlowAPI
- Adds common security headers
- Configures CORS
- Wires gig allocation e-mails to the event dispatcher
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from gigplatform.admin.routes import router as admin_router
from gigplatform.catalog.routes import router as catalog_router
from gigplatform.core.config import settings
from gigplatform.core.exceptions import register_exception_handlers
from gigplatform.core.limiter import limiter
from gigplatform.core.logging import init_logging
from gigplatform.gig.routes import router as gig_router
from gigplatform.notifications.email import handle_gig_allocated
from gigplatform.notifications.events import GigAllocated, dispatcher
from gigplatform.rating.routes import router as rating_router
from gigplatform.verification.routes import router as profile_router

init_logging()
logger = logging.getLogger(__name__)


# -----------------------------
# Lifespan
# -----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    dispatcher.subscribe(GigAllocated, handle_gig_allocated)
    logger.info(f"[APP] {settings.APP_NAME} started")
    yield
    await dispatcher.drain()
    logger.info(f"[APP] {settings.APP_NAME} stopped, pending notifications delivered")


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

# -----------------------------
# Middleware Configuration
# -----------------------------
app.state.limiter = limiter


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    return _rate_limit_exceeded_handler(request, exc)  # type: ignore[arg-type]


app.add_exception_handler(429, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
register_exception_handlers(app)


# -----------------------------
# Security Headers Middleware
# -----------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add common security headers to responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(admin_router)
app.include_router(profile_router)
app.include_router(catalog_router)
app.include_router(gig_router)
app.include_router(rating_router)


# -----------------------------
# Root Endpoint
# -----------------------------
@app.get("/", response_class=HTMLResponse)
async def home() -> Any:
    return f"""
    <html>
        <head>
            <title>{settings.APP_NAME}</title>
        </head>
        <body style="font-family: Arial, sans-serif; text-align: center; padding-top: 50px;">
            <h1>{settings.APP_NAME}</h1>
            <p>Post gigs, verify providers and track work from allocation to completion.</p>
        </body>
    </html>
    """
