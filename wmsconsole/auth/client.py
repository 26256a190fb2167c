"""
HTTP client for the remote WMS authentication API.

    POST /auth/login     {email, password}        -> {success, user, token}
    POST /auth/register  {email, password, name}  -> {success, user?, token?}

Every failure surfaces as AuthenticationFailure with a readable message.
Nothing is retried here; retrying is up to the caller.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from wmsconsole.utils import AuthenticationFailure, Logger
from .schemas import AuthResult

logger = Logger("auth.client")

UNREACHABLE_MESSAGE = "Unable to reach the authentication service"


class AuthApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: Dict[str, Any], default_error: str) -> Dict[str, Any]:
        try:
            resp = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.error(f"POST {path} failed: {exc}")
            raise AuthenticationFailure(UNREACHABLE_MESSAGE) from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.is_error:
            logger.warning(f"POST {path} -> {resp.status_code}")
            raise AuthenticationFailure(data.get("message") or default_error)
        return data

    def _parse(self, data: Dict[str, Any], default_error: str) -> AuthResult:
        try:
            return AuthResult.model_validate(data)
        except ValidationError as exc:
            raise AuthenticationFailure(data.get("message") or default_error) from exc

    async def login(self, email: str, password: str) -> AuthResult:
        """Exchange credentials for a user + token, or raise AuthenticationFailure."""
        data = await self._post(
            "/auth/login",
            {"email": email.strip(), "password": password},
            "Invalid email or password",
        )
        result = self._parse(data, "Login failed")
        if not result.success or result.user is None or not result.token:
            raise AuthenticationFailure(result.message or "Login failed")
        return result

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """
        Create an account. The result may carry no user/token, in which case
        the operator has to sign in separately.
        """
        data = await self._post(
            "/auth/register",
            {"email": email, "password": password, "name": name},
            "Registration failed",
        )
        return self._parse(data, "Registration failed")
