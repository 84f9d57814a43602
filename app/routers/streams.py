from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.stream import StreamResponse, StreamStatusUpdate
from app.services import catalog_service

router = APIRouter(prefix="/api/streams", tags=["streams"])


@router.get("/{stream_id}", response_model=StreamResponse)
def get_stream(
    stream_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog_service.get_stream(db, user, stream_id)


@router.patch("/{stream_id}/status")
def update_stream_status(
    stream_id: str,
    body: StreamStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Requires control grant on the stream's studio (or admin)."""
    stream = catalog_service.update_stream_status(db, user, stream_id, body.status.value)
    return {"message": "Stream status updated", "id": stream.id, "status": stream.status}
