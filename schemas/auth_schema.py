from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Untyped so a malformed login fails as bad credentials, not as a schema error
    username: Any = None
    password: Any = None

    def credentials(self) -> tuple[str | None, str | None]:
        username = self.username if isinstance(self.username, str) else None
        password = self.password if isinstance(self.password, str) else None
        return username, password


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class TokenIdentity(BaseModel):
    """Who the bearer token says the caller is."""
    id: str
    username: str
