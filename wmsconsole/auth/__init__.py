from .schemas import LoginRequest, RegisterRequest, AuthResult
from .client import AuthApiClient
from .tokens import token_expiry, token_is_expired

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "AuthResult",
    "AuthApiClient",
    "token_expiry",
    "token_is_expired",
]
