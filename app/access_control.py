"""
Per-studio authorization. resolve_grant() decides the admin bypass; get_studio_grant()
only short-circuits admins to avoid a permission query. Routers ask for a Grant and call
require_view / require_control on it.
"""
from typing import NamedTuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.permission import UserStudioPermission
from app.models.user import User, UserRole
from app.repositories import permission_repository


class Grant(NamedTuple):
    can_view: bool
    can_control: bool


FULL_ACCESS = Grant(can_view=True, can_control=True)
NO_ACCESS = Grant(can_view=False, can_control=False)


def resolve_grant(role: str, permission: UserStudioPermission | None) -> Grant:
    """Effective rights on one studio from the caller's role and their explicit permission row."""
    if role == UserRole.ADMIN.value:
        return FULL_ACCESS
    if permission is None:
        return NO_ACCESS
    return Grant(
        can_view=bool(permission.can_view),
        can_control=bool(permission.can_control),
    )


def get_studio_grant(db: Session, user: User, studio_id: str) -> Grant:
    # same result resolve_grant gives admins; skips the permission query
    if user.is_admin:
        return FULL_ACCESS
    permission = permission_repository.get_permission(db, user.id, studio_id)
    return resolve_grant(user.role, permission)


def require_view(grant: Grant, detail: str = "No access to this studio") -> None:
    if not grant.can_view:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def require_control(grant: Grant, detail: str = "No control access to this studio") -> None:
    if not grant.can_control:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
