from fastapi import HTTPException, status


class AuthenticationFailure(HTTPException):
    """Bad credentials, a malformed auth response or an unreachable auth API."""

    def __init__(self, detail: str = "Login failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @property
    def message(self) -> str:
        return self.detail


class RouteTableError(ValueError):
    """A route permission table failed validation while loading."""
