"""
Declarative guard decorator for screen handlers.

Usage:
    @router.get("/companies")
    @protected(allowed_roles=["super_admin"])
    async def companies(request: Request):
        ...

The guard reads the session store and guard kept on `request.app.state`.
"""

from functools import wraps
from typing import Iterable, Optional

from fastapi import HTTPException, status
from fastapi.responses import RedirectResponse
from starlette.requests import Request

from wmsconsole.guard import GuardState
from wmsconsole.utils import error_response


def _find_request(args, kwargs) -> Request:
    request: Request | None = kwargs.get("request")
    if request is None:
        for arg in args:
            if isinstance(arg, Request):
                request = arg
                break
    if request is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Request object not found in handler",
        )
    return request


def protected(allowed_roles: Optional[Iterable[str]] = None):
    """
    Run the navigation guard on the requested path before the handler.

    Must be applied AFTER the route decorator.
    """
    roles = tuple(allowed_roles) if allowed_roles else None

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            store = request.app.state.session_store
            guard = request.app.state.guard
            path = request.url.path

            decision = guard.evaluate(store.state, path, roles)

            if decision.is_waiting:
                return error_response(
                    "Session is still loading",
                    code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    headers={"Retry-After": "1"},
                )

            if decision.state is GuardState.UNAUTHORIZED and decision.redirect_to == path:
                # landing page itself is off limits; redirecting would loop
                return error_response(
                    "You do not have access to this screen",
                    code=status.HTTP_403_FORBIDDEN,
                )

            if decision.redirect_to:
                return RedirectResponse(decision.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
