"""
User persistence. Passwords are hashed here so plaintext never reaches the table.
Deletion is soft: users are deactivated, never removed.
"""
from sqlalchemy.orm import Session, selectinload

from app.auth import hash_password
from app.models.permission import UserStudioPermission
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_user_with_permissions(db: Session, user_id: str) -> User | None:
    return (
        db.query(User)
        .options(selectinload(User.permissions).selectinload(UserStudioPermission.studio))
        .filter(User.id == user_id)
        .first()
    )


def list_users(db: Session) -> list[User]:
    return (
        db.query(User)
        .options(selectinload(User.permissions).selectinload(UserStudioPermission.studio))
        .order_by(User.created_at.desc())
        .all()
    )


def create_user(db: Session, data: UserCreate) -> User:
    values = data.model_dump(exclude={"password"})
    values["role"] = data.role.value
    user = User(**values, password=hash_password(data.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    changes = data.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    if password:
        user.password = hash_password(password)
    if changes.get("role") is not None:
        changes["role"] = data.role.value
    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def set_password(db: Session, user: User, new_password: str) -> None:
    user.password = hash_password(new_password)
    db.commit()


def deactivate_user(db: Session, user: User) -> User:
    user.is_active = False
    db.commit()
    db.refresh(user)
    return user
