from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.studio import StudioWithStreamsResponse
from app.services import catalog_service

router = APIRouter(prefix="/api/studios", tags=["studios"])


@router.get("", response_model=list[StudioWithStreamsResponse])
def list_studios(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Studios the caller may view, by name, each with its active streams."""
    return catalog_service.list_user_studios(db, user)


@router.get("/{studio_id}", response_model=StudioWithStreamsResponse)
def get_studio(
    studio_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog_service.get_studio(db, user, studio_id)
