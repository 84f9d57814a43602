import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User
from app.auth import (
    INVALID_CREDENTIALS_MESSAGE,
    authenticate_user,
    create_access_token,
    get_current_user,
    verify_password,
)
from app.repositories import user_repository
from app.schemas.user import (
    MIN_PASSWORD_LENGTH,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PublicUserResponse,
    UserWithPermissionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Login with username and password. Same error for unknown user and wrong password."""
    user = authenticate_user(db, body.username, body.password)
    if not user:
        logger.info("Failed login for username=%s", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_MESSAGE,
        )
    token = create_access_token(user.id)
    logger.info("User %s logged in", user.id)
    return LoginResponse(token=token, user=PublicUserResponse.model_validate(user))


@router.get("/user", response_model=UserWithPermissionsResponse)
def get_me(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Current user's profile with studio permissions."""
    return user_repository.get_user_with_permissions(db, user.id)


@router.put("/change-password")
def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not verify_password(body.current_password, user.password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    if len(body.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    user_repository.set_password(db, user, body.new_password)
    logger.info("User %s changed password", user.id)
    return {"message": "Password updated successfully"}
