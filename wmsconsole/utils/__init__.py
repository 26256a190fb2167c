from .helpers import success_response, error_response, is_local_path
from .logger import Logger
from .exceptions import AuthenticationFailure, RouteTableError

__all__ = [
    "success_response",
    "error_response",
    "is_local_path",
    "Logger",
    "AuthenticationFailure",
    "RouteTableError",
]
