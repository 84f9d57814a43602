"""
Studio/stream retrieval for dashboard users, filtered by the caller's grants.
Admin-only listings live in the admin router and reuse studio_with_streams().
"""
import logging
from collections import defaultdict

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.access_control import get_studio_grant, require_control, require_view
from app.models.stream import Stream
from app.models.studio import Studio
from app.models.user import User
from app.repositories import studio_repository
from app.schemas.stream import StreamResponse
from app.schemas.studio import StudioResponse, StudioWithStreamsResponse

logger = logging.getLogger(__name__)


def studio_with_streams(studio: Studio, streams: list[Stream]) -> StudioWithStreamsResponse:
    base = StudioResponse.model_validate(studio)
    return StudioWithStreamsResponse(
        **base.model_dump(),
        streams=[StreamResponse.model_validate(s) for s in streams],
    )


def attach_streams(
    db: Session, studios: list[Studio], include_inactive: bool = False
) -> list[StudioWithStreamsResponse]:
    """Load streams for all studios in one query; streams sorted by name per studio."""
    if not studios:
        return []
    q = db.query(Stream).filter(Stream.studio_id.in_([s.id for s in studios]))
    if not include_inactive:
        q = q.filter(Stream.is_active.is_(True))
    by_studio: dict[str, list[Stream]] = defaultdict(list)
    for stream in q.order_by(Stream.name.asc()).all():
        by_studio[stream.studio_id].append(stream)
    return [studio_with_streams(s, by_studio.get(s.id, [])) for s in studios]


def list_user_studios(db: Session, user: User) -> list[StudioWithStreamsResponse]:
    if user.is_admin:
        studios = studio_repository.list_studios(db)
    else:
        studios = studio_repository.list_viewable_studios(db, user.id)
    return attach_streams(db, studios)


def get_studio(db: Session, user: User, studio_id: str) -> StudioWithStreamsResponse:
    # Grant before existence: non-admins get 403 for unknown ids too
    require_view(get_studio_grant(db, user, studio_id))
    studio = studio_repository.get_studio(db, studio_id)
    if not studio or not studio.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Studio not found")
    return studio_with_streams(studio, studio_repository.list_streams_by_studio(db, studio.id))


def _get_visible_stream(db: Session, stream_id: str) -> Stream:
    """Stream whose own row and owning studio are both active, else 404."""
    stream = studio_repository.get_stream(db, stream_id)
    if not stream or not stream.is_active or not stream.studio.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stream not found")
    return stream


def get_stream(db: Session, user: User, stream_id: str) -> Stream:
    stream = _get_visible_stream(db, stream_id)
    require_view(get_studio_grant(db, user, stream.studio_id), detail="No access to this stream")
    return stream


def update_stream_status(db: Session, user: User, stream_id: str, new_status: str) -> Stream:
    """Any status may follow any other; setting the current status again is a no-op success."""
    stream = _get_visible_stream(db, stream_id)
    require_control(
        get_studio_grant(db, user, stream.studio_id),
        detail="No control access to this stream",
    )
    previous = stream.status
    stream = studio_repository.set_stream_status(db, stream, new_status)
    logger.info(
        "Stream %s status %s -> %s by user %s", stream.id, previous, new_status, user.id
    )
    return stream
