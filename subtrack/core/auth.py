from dataclasses import dataclass

from fastapi import HTTPException, Request


@dataclass(frozen=True)
class UserSession:
    """The authenticated user on whose behalf the core operates.

    Credential checks happen upstream; the core only needs an identifier to
    key the user's record set.
    """

    user_id: str


def get_current_user(request: Request) -> UserSession:
    """Build the session from the X-User-Id header set by the auth proxy."""
    user_id = request.headers.get("X-User-Id", "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return UserSession(user_id=user_id)
