"""
Studios and their streams. Listing helpers return active rows only unless
include_inactive is set (admin views keep deactivated rows visible).
"""
from sqlalchemy.orm import Session

from app.models.permission import UserStudioPermission
from app.models.stream import Stream
from app.models.studio import Studio
from app.schemas.stream import StreamCreate, StreamUpdate
from app.schemas.studio import StudioCreate, StudioUpdate


def get_studio(db: Session, studio_id: str) -> Studio | None:
    return db.query(Studio).filter(Studio.id == studio_id).first()


def list_studios(db: Session, include_inactive: bool = False) -> list[Studio]:
    q = db.query(Studio)
    if not include_inactive:
        q = q.filter(Studio.is_active.is_(True))
    return q.order_by(Studio.name.asc()).all()


def list_viewable_studios(db: Session, user_id: str) -> list[Studio]:
    """Active studios the user holds an explicit can_view grant on, by name."""
    return (
        db.query(Studio)
        .join(UserStudioPermission, UserStudioPermission.studio_id == Studio.id)
        .filter(
            UserStudioPermission.user_id == user_id,
            UserStudioPermission.can_view.is_(True),
            Studio.is_active.is_(True),
        )
        .order_by(Studio.name.asc())
        .all()
    )


def list_streams_by_studio(
    db: Session, studio_id: str, include_inactive: bool = False
) -> list[Stream]:
    q = db.query(Stream).filter(Stream.studio_id == studio_id)
    if not include_inactive:
        q = q.filter(Stream.is_active.is_(True))
    return q.order_by(Stream.name.asc()).all()


def create_studio(db: Session, data: StudioCreate) -> Studio:
    studio = Studio(**data.model_dump())
    db.add(studio)
    db.commit()
    db.refresh(studio)
    return studio


def update_studio(db: Session, studio: Studio, data: StudioUpdate) -> Studio:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(studio, field, value)
    db.commit()
    db.refresh(studio)
    return studio


def get_stream(db: Session, stream_id: str) -> Stream | None:
    return db.query(Stream).filter(Stream.id == stream_id).first()


def create_stream(db: Session, data: StreamCreate) -> Stream:
    values = data.model_dump()
    values["status"] = data.status.value
    stream = Stream(**values)
    db.add(stream)
    db.commit()
    db.refresh(stream)
    return stream


def update_stream(db: Session, stream: Stream, data: StreamUpdate) -> Stream:
    changes = data.model_dump(exclude_unset=True)
    if changes.get("status") is not None:
        changes["status"] = data.status.value
    for field, value in changes.items():
        setattr(stream, field, value)
    db.commit()
    db.refresh(stream)
    return stream


def set_stream_status(db: Session, stream: Stream, status: str) -> Stream:
    stream.status = status
    db.commit()
    db.refresh(stream)
    return stream
