from typing import Optional

from fastapi import APIRouter, Query, Request

from wmsconsole.rbac import (
    format_role,
    get_accessible_routes,
    get_default_route_for_role,
    get_role_features,
)
from wmsconsole.utils import error_response, is_local_path, success_response
from .schemas import LoginRequest, RegisterRequest

auth_router = APIRouter()


def _store(request: Request):
    return request.app.state.session_store


def _session_payload(request: Request) -> dict:
    state = _store(request).state
    user = state.user
    payload = {
        "is_authenticated": state.is_authenticated,
        "has_hydrated": state.has_hydrated,
        "is_loading": state.is_loading,
        "error": state.error,
        "user": user.model_dump(mode="json") if user else None,
    }
    if user is not None:
        payload["role_label"] = format_role(user.role)
        payload["default_route"] = get_default_route_for_role(user.role)
        payload["accessible_routes"] = get_accessible_routes(user.role, request.app.state.guard.table)
        payload["features"] = sorted(get_role_features(user.role))
    return payload


@auth_router.get("/login")
async def login_screen(request: Request, redirect: Optional[str] = Query(None)):
    """Login entry point; echoes back where the operator will land."""
    return success_response(
        data={"redirect": redirect if is_local_path(redirect) else None},
        message="Sign in required",
    )


@auth_router.post("/login")
async def login(
    request: Request,
    body: LoginRequest,
    redirect: Optional[str] = Query(None),
):
    """Sign in through the WMS auth API and start the console session."""
    store = _store(request)
    committed = await store.login(body.email, body.password)
    user = store.state.user
    if not committed or user is None:
        # superseded by a newer sign-in or sign-out while waiting
        return error_response("Login superseded by a newer request", code=409)

    target = redirect if is_local_path(redirect) else get_default_route_for_role(user.role)
    data = _session_payload(request)
    data["redirect_to"] = target
    return success_response(data=data, message="Login successful")


@auth_router.post("/register")
async def register(request: Request, body: RegisterRequest):
    store = _store(request)
    signed_in = await store.register(body.email, body.password, body.name)
    if signed_in and store.state.user is not None:
        data = _session_payload(request)
        data["redirect_to"] = get_default_route_for_role(store.state.user.role)
        return success_response(data=data, message="Registration successful", code=201)
    return success_response(
        data={"redirect_to": request.app.state.settings.login_path},
        message="Registration successful, please sign in",
        code=201,
    )


@auth_router.get("/forgot-password")
async def forgot_password():
    return success_response(message="Contact your administrator to reset your password")


@auth_router.post("/logout")
async def logout(request: Request):
    await _store(request).logout()
    return success_response(
        data={"redirect_to": request.app.state.settings.login_path},
        message="Signed out",
    )


@auth_router.get("/session")
async def current_session(request: Request):
    return success_response(data=_session_payload(request))
