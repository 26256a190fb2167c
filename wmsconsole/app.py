"""
Kiaan WMS Console main application.

Assembles config, session store, navigation guard, auth routes and screens.
The console serves one operator session, owned by `app.state.session_store`.
"""

import asyncio
import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from wmsconsole.auth import AuthApiClient
from wmsconsole.auth.routes import auth_router
from wmsconsole.config import DatabaseManager, Settings, db_manager, settings as default_settings
from wmsconsole.guard import NavigationGuard
from wmsconsole.screens import screens_router
from wmsconsole.session import (
    InMemorySessionPersistence,
    MongoSessionPersistence,
    SessionStore,
    hydrate_session,
)
from wmsconsole.utils import AuthenticationFailure, Logger, error_response, success_response

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path

        logger.info(f"--> {method} {path}")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.error(f"    Exception: {exc}")
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Session persistence ──────────────────────────────────────────
async def _open_persistence(settings: Settings, database: DatabaseManager):
    if settings.session_backend != "mongodb":
        return InMemorySessionPersistence()
    try:
        collection = await database.session_collection(settings)
    except Exception:
        # start signed out; the session lives in memory until the next restart
        logger.exception("Session database unavailable, falling back to in-memory sessions")
        return InMemorySessionPersistence()
    return MongoSessionPersistence(collection, settings.session_storage_key)


# ── App factory ──────────────────────────────────────────────────
def create_app(
    settings: Optional[Settings] = None,
    auth_client=None,
    persistence=None,
    database: Optional[DatabaseManager] = None,
) -> FastAPI:
    settings = settings or default_settings
    database = database or db_manager

    auth_client = auth_client or AuthApiClient(
        base_url=settings.api_base_url,
        timeout=settings.auth_request_timeout,
    )
    store = SessionStore(auth_client, persistence)
    guard = NavigationGuard(login_path=settings.login_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        backend = store.persistence
        if backend is None:
            backend = await _open_persistence(settings, database)
            store.persistence = backend

        hydration = hydrate_session(store, backend, settings.discard_expired_tokens)
        if settings.background_hydration:
            app.state.hydration = asyncio.create_task(hydration)
        else:
            await hydration
        yield

        task = getattr(app.state, "hydration", None)
        if task is not None and not task.done():
            task.cancel()
        if hasattr(auth_client, "close"):
            await auth_client.close()
        database.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role-based warehouse management console",
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_store = store
    app.state.guard = guard

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── Exception handlers ───────────────────────────────────
    @app.exception_handler(AuthenticationFailure)
    async def authentication_failure_handler(request: Request, exc: AuthenticationFailure):
        return error_response(exc.message, code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {
                    "code": 500,
                    "message": str(exc) if settings.debug else "Internal server error",
                },
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    # ── Public routes ────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "session_hydrated": store.state.has_hydrated,
        }

    @app.get(settings.landing_path)
    async def landing():
        return success_response(data={"app": settings.app_name, "login": settings.login_path})

    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])

    # ── Protected screens (catch-all last) ───────────────────
    app.include_router(screens_router, tags=["Screens"])

    return app
