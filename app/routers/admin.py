"""
Admin CRUD for users, studios, streams and studio permissions.
Every route requires the admin role. Deletes are soft (is_active=False).
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.auth import get_current_user_admin
from app.database import get_db
from app.models.user import User
from app.repositories import permission_repository, studio_repository, user_repository
from app.schemas.permission import PermissionGrant, PermissionResponse, PermissionWithStudioResponse
from app.schemas.stream import StreamCreate, StreamResponse, StreamUpdate
from app.schemas.studio import (
    StudioCreate,
    StudioResponse,
    StudioUpdate,
    StudioWithStreamsResponse,
)
from app.schemas.user import UserCreate, UserResponse, UserUpdate, UserWithPermissionsResponse
from app.services.catalog_service import attach_streams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = user_repository.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _get_studio_or_404(db: Session, studio_id: str):
    studio = studio_repository.get_studio(db, studio_id)
    if not studio:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Studio not found")
    return studio


def _get_stream_or_404(db: Session, stream_id: str):
    stream = studio_repository.get_stream(db, stream_id)
    if not stream:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stream not found")
    return stream


# ---------- Users ----------


@router.get("/users", response_model=list[UserWithPermissionsResponse])
def list_users(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """All users, including deactivated ones, with their studio permissions."""
    return user_repository.list_users(db)


@router.get("/users/{user_id}", response_model=UserWithPermissionsResponse)
def get_user(
    user_id: str,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    user = user_repository.get_user_with_permissions(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    user = user_repository.create_user(db, body)
    logger.info("Admin %s created user %s (%s)", admin.id, user.id, user.role)
    return user


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UserUpdate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    user = _get_user_or_404(db, user_id)
    user = user_repository.update_user(db, user, body)
    logger.info("Admin %s updated user %s", admin.id, user.id)
    return user


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Deactivate the account. The row and its history stay in the database."""
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    user = _get_user_or_404(db, user_id)
    user_repository.deactivate_user(db, user)
    logger.info("Admin %s deactivated user %s", admin.id, user.id)
    return {"message": "User deleted successfully"}


# ---------- Studios ----------


@router.get("/studios", response_model=list[StudioResponse])
def list_studios(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    return studio_repository.list_studios(db, include_inactive=True)


@router.get("/studios-with-streams", response_model=list[StudioWithStreamsResponse])
def list_studios_with_streams(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    studios = studio_repository.list_studios(db, include_inactive=True)
    return attach_streams(db, studios, include_inactive=True)


@router.post("/studios", response_model=StudioResponse, status_code=status.HTTP_201_CREATED)
def create_studio(
    body: StudioCreate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    studio = studio_repository.create_studio(db, body)
    logger.info("Admin %s created studio %s", admin.id, studio.id)
    return studio


@router.patch("/studios/{studio_id}", response_model=StudioResponse)
def update_studio(
    studio_id: str,
    body: StudioUpdate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    studio = _get_studio_or_404(db, studio_id)
    studio = studio_repository.update_studio(db, studio, body)
    logger.info("Admin %s updated studio %s", admin.id, studio.id)
    return studio


@router.delete("/studios/{studio_id}")
def delete_studio(
    studio_id: str,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    studio = _get_studio_or_404(db, studio_id)
    studio_repository.update_studio(db, studio, StudioUpdate(is_active=False))
    logger.info("Admin %s deactivated studio %s", admin.id, studio.id)
    return {"message": "Studio deleted successfully"}


# ---------- Streams ----------


@router.get("/streams/{stream_id}", response_model=StreamResponse)
def get_stream(
    stream_id: str,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    return _get_stream_or_404(db, stream_id)


@router.post("/streams", response_model=StreamResponse, status_code=status.HTTP_201_CREATED)
def create_stream(
    body: StreamCreate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    _get_studio_or_404(db, body.studio_id)
    stream = studio_repository.create_stream(db, body)
    logger.info("Admin %s created stream %s in studio %s", admin.id, stream.id, stream.studio_id)
    return stream


@router.patch("/streams/{stream_id}", response_model=StreamResponse)
def update_stream(
    stream_id: str,
    body: StreamUpdate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    stream = _get_stream_or_404(db, stream_id)
    if body.studio_id is not None:
        _get_studio_or_404(db, body.studio_id)
    stream = studio_repository.update_stream(db, stream, body)
    logger.info("Admin %s updated stream %s", admin.id, stream.id)
    return stream


@router.delete("/streams/{stream_id}")
def delete_stream(
    stream_id: str,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Instead of hard delete, deactivate the stream."""
    stream = _get_stream_or_404(db, stream_id)
    studio_repository.update_stream(db, stream, StreamUpdate(is_active=False))
    logger.info("Admin %s deactivated stream %s", admin.id, stream.id)
    return {"message": "Stream deleted successfully"}


# ---------- Permissions ----------


@router.get("/permissions", response_model=list[PermissionWithStudioResponse])
def list_permissions(
    user_id: str | None = None,
    studio_id: str | None = None,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """List grants. Optional ?user_id= and ?studio_id= filters."""
    return permission_repository.list_permissions(db, user_id=user_id, studio_id=studio_id)


@router.post("/permissions", response_model=PermissionResponse, status_code=status.HTTP_201_CREATED)
def grant_permission(
    body: PermissionGrant,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Upsert: granting an existing (user, studio) pair overwrites its flags."""
    _get_user_or_404(db, body.user_id)
    _get_studio_or_404(db, body.studio_id)
    permission = permission_repository.set_permission(
        db,
        user_id=body.user_id,
        studio_id=body.studio_id,
        can_view=body.can_view,
        can_control=body.can_control,
    )
    logger.info(
        "Admin %s set permission user=%s studio=%s view=%s control=%s",
        admin.id, body.user_id, body.studio_id, body.can_view, body.can_control,
    )
    return permission


@router.delete("/permissions/{user_id}/{studio_id}")
def revoke_permission(
    user_id: str,
    studio_id: str,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    if not permission_repository.remove_permission(db, user_id, studio_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Permission not found")
    logger.info("Admin %s revoked permission user=%s studio=%s", admin.id, user_id, studio_id)
    return {"message": "Permission removed successfully"}
