"""
Session identity passed explicitly into store and service operations.
"""
from dataclasses import dataclass
from typing import Optional
from app.core.config import settings


@dataclass(frozen=True)
class Identity:
    """
    Who is acting on a request.

    is_mock marks demo, admin and anonymous sessions whose data lives in the
    local fallback store rather than the remote store.
    """
    id: str
    display_name: str
    avatar_url: Optional[str] = None
    is_admin: bool = False
    is_mock: bool = False
    email: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.id == settings.ANONYMOUS_USER_ID

    @property
    def uses_local_store(self) -> bool:
        return self.is_mock


def anonymous_identity() -> Identity:
    """Identity for requests without a token (demo/offline sessions)."""
    return Identity(
        id=settings.ANONYMOUS_USER_ID,
        display_name="Guest",
        is_mock=True,
    )


def demo_identity() -> Identity:
    return Identity(
        id=settings.DEMO_USER_ID,
        display_name="Demo User",
        is_mock=True,
        email=settings.DEMO_EMAIL,
    )


def admin_identity() -> Identity:
    return Identity(
        id=settings.ADMIN_USER_ID,
        display_name="Admin User",
        is_admin=True,
        is_mock=True,
        email=settings.ADMIN_EMAIL,
    )


def identity_from_claims(claims: dict) -> Optional[Identity]:
    """Rebuild an identity from decoded JWT claims."""
    user_id = claims.get("sub")
    if not user_id:
        return None
    return Identity(
        id=str(user_id),
        display_name=claims.get("name") or "Anonymous",
        avatar_url=claims.get("avatar_url"),
        is_admin=bool(claims.get("is_admin", False)),
        is_mock=bool(claims.get("is_mock", False)),
        email=claims.get("email"),
    )


def identity_claims(identity: Identity) -> dict:
    """Claims written into the access token for an identity."""
    return {
        "sub": identity.id,
        "name": identity.display_name,
        "avatar_url": identity.avatar_url,
        "is_admin": identity.is_admin,
        "is_mock": identity.is_mock,
        "email": identity.email,
    }
