"""
User↔studio grants. At most one row per (user_id, studio_id): grant is an upsert,
revoke deletes the row.
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models.permission import UserStudioPermission


def get_permission(db: Session, user_id: str, studio_id: str) -> UserStudioPermission | None:
    return (
        db.query(UserStudioPermission)
        .filter(
            UserStudioPermission.user_id == user_id,
            UserStudioPermission.studio_id == studio_id,
        )
        .first()
    )


def list_permissions(
    db: Session,
    user_id: str | None = None,
    studio_id: str | None = None,
) -> list[UserStudioPermission]:
    q = db.query(UserStudioPermission).options(selectinload(UserStudioPermission.studio))
    if user_id:
        q = q.filter(UserStudioPermission.user_id == user_id)
    if studio_id:
        q = q.filter(UserStudioPermission.studio_id == studio_id)
    return q.order_by(UserStudioPermission.created_at.asc()).all()


def set_permission(
    db: Session,
    user_id: str,
    studio_id: str,
    can_view: bool,
    can_control: bool,
) -> UserStudioPermission:
    """Insert or overwrite the grant. Concurrent writers end up last-write-wins."""
    permission = get_permission(db, user_id, studio_id)
    if permission is None:
        permission = UserStudioPermission(
            user_id=user_id,
            studio_id=studio_id,
            can_view=can_view,
            can_control=can_control,
        )
        db.add(permission)
        try:
            db.commit()
        except IntegrityError:
            # Another request inserted the same pair first; overwrite its flags
            db.rollback()
            permission = get_permission(db, user_id, studio_id)
            if permission is None:
                raise
            permission.can_view = can_view
            permission.can_control = can_control
            db.commit()
    else:
        permission.can_view = can_view
        permission.can_control = can_control
        db.commit()
    db.refresh(permission)
    return permission


def remove_permission(db: Session, user_id: str, studio_id: str) -> bool:
    """Delete the grant. Returns False when there was nothing to delete."""
    deleted = (
        db.query(UserStudioPermission)
        .filter(
            UserStudioPermission.user_id == user_id,
            UserStudioPermission.studio_id == studio_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0
