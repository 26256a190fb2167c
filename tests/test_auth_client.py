import asyncio
import json

import httpx
import pytest

from wmsconsole.auth import AuthApiClient
from wmsconsole.auth.client import UNREACHABLE_MESSAGE
from wmsconsole.utils import AuthenticationFailure


def _client(handler) -> AuthApiClient:
    return AuthApiClient(base_url="http://wms.test/", transport=httpx.MockTransport(handler))


def _run(client: AuthApiClient, coro):
    async def go():
        try:
            return await coro
        finally:
            await client.close()

    return asyncio.run(go())


def test_login_posts_trimmed_credentials():
    captured = {}

    def handler(request: httpx.Request):
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "token": "jwt",
                "user": {"id": 2, "email": "wm@wms.test", "role": "Warehouse-Manager", "companyId": 7},
            },
        )

    client = _client(handler)
    result = _run(client, client.login("  wm@wms.test  ", "secret"))

    assert captured["url"] == "http://wms.test/auth/login"
    assert captured["body"] == {"email": "wm@wms.test", "password": "secret"}
    assert result.token == "jwt"
    assert result.user.role == "warehouse_manager"
    assert result.user.company_id == 7


def test_login_rejected_uses_server_message():
    client = _client(lambda request: httpx.Response(401, json={"success": False, "message": "Invalid email or password"}))
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.login("a@wms.test", "x"))
    assert excinfo.value.message == "Invalid email or password"


def test_login_error_without_body_uses_default_message():
    client = _client(lambda request: httpx.Response(500, text="<html>oops</html>"))
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.login("a@wms.test", "x"))
    assert excinfo.value.message == "Invalid email or password"


@pytest.mark.parametrize(
    "body",
    [
        {"success": True, "user": {"id": 1, "role": "viewer"}},
        {"success": True, "token": "jwt"},
        {"success": False, "user": {"id": 1, "role": "viewer"}, "token": "jwt"},
        {},
    ],
)
def test_login_response_missing_fields_is_a_failure(body):
    client = _client(lambda request: httpx.Response(200, json=body))
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.login("a@wms.test", "x"))
    assert excinfo.value.message == "Login failed"


def test_unreachable_service():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.login("a@wms.test", "x"))
    assert excinfo.value.message == UNREACHABLE_MESSAGE


def test_register_may_return_no_session():
    def handler(request: httpx.Request):
        assert request.url.path == "/auth/register"
        assert json.loads(request.content)["name"] == "New"
        return httpx.Response(201, json={"success": True})

    client = _client(handler)
    result = _run(client, client.register("n@wms.test", "pw", "New"))
    assert result.user is None
    assert result.token is None


def test_register_failure_message():
    client = _client(lambda request: httpx.Response(409, json={"message": "Email already registered"}))
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.register("n@wms.test", "pw", "New"))
    assert excinfo.value.message == "Email already registered"


@pytest.mark.parametrize("role", [5, ["picker"], {"name": "picker"}])
def test_login_with_malformed_role_is_a_failure(role):
    client = _client(
        lambda request: httpx.Response(200, json={"success": True, "user": {"id": 1, "role": role}, "token": "t"})
    )
    with pytest.raises(AuthenticationFailure) as excinfo:
        _run(client, client.login("a@wms.test", "x"))
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Login failed"
