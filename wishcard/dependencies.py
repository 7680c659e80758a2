"""Access-gating dependencies for protected routes.

Both the user token check and the admin key check resolve to a
``Principal`` or reject the request.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from wishcard.services import admin, auth


@dataclass(frozen=True)
class Principal:
    role: str
    user_id: Optional[int] = None


def _extract_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    # The header carries the bare token; a "Bearer " prefix is tolerated
    scheme, _, rest = raw.partition(" ")
    if scheme.lower() == "bearer" and rest.strip():
        return rest.strip()
    return raw


async def get_current_user(authorization: Optional[str] = Header(default=None)) -> Principal:
    user_id = auth.verify_token(_extract_token(authorization))
    return Principal(role="user", user_id=user_id)


async def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> Principal:
    admin.verify_admin_key(x_admin_key)
    return Principal(role="admin")
