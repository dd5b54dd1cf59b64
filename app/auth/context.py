"""
Request-scoped caller context.

Services never look up "the current user" on their own: routes turn the
verified JWT claims into a RequestContext and pass it down explicitly.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status

from app.auth.verify import auth_dependency

ADMIN_ROLE = "admin"


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Immutable identity of the caller for one request."""

    user_id: str
    email: str | None = None
    role: str = "authenticated"
    app_role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.app_role == ADMIN_ROLE

    @classmethod
    def from_claims(cls, claims: dict) -> "RequestContext":
        user_id = claims.get("sub")
        if not user_id:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token: missing user ID"
            )

        # Only app_metadata is server-controlled; user_metadata is writable by the user
        app_metadata = claims.get("app_metadata") or {}
        app_role = app_metadata.get("role")

        return cls(
            user_id=str(user_id),
            email=claims.get("email"),
            role=claims.get("role") or "authenticated",
            app_role=app_role,
        )


def get_request_context(claims: dict = Depends(auth_dependency)) -> RequestContext:
    return RequestContext.from_claims(claims)
