"""
Seed demo data: python -m app.seed
Create only an admin account: python -m app.seed --admin-only --username admin --password secret

Safe to run repeatedly; rows that already exist (users by username, studios by
name, streams by name, grants by user/studio) are left untouched, including
grants an admin has since edited. Missing demo rows are created.
"""
import argparse
import logging

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.stream import Stream, StreamStatus
from app.models.studio import Studio
from app.models.user import User, UserRole
from app.repositories import permission_repository, studio_repository, user_repository
from app.schemas.stream import StreamCreate
from app.schemas.studio import StudioCreate
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)

DEMO_STUDIOS = [
    ("SoCal", "Southern California", "Main studio facility in Southern California", "#FEDC97"),
    ("Plex", "Plexus Studios", "Secondary production facility", "#7C9885"),
    ("Irving", "Irving, Texas", "Texas regional studio", "#B5B682"),
    ("Nashville", "Nashville, Tennessee", "Music City production center", "#28666E"),
]

# (name suffix, description, url suffix, resolution, fps, status)
DEMO_STREAMS = [
    ("Main Camera", "Primary camera feed", "main", "1080p", 30, StreamStatus.ONLINE),
    ("Wide Shot", "Wide angle studio view", "wide", "1080p", 30, StreamStatus.ONLINE),
    ("Close Up", "Close-up camera feed", "close", "720p", 30, StreamStatus.ONLINE),
    ("Overhead", "Overhead camera view", "overhead", "720p", 24, StreamStatus.OFFLINE),
]

STREAM_BASE_URL = "webrtc://stream.obtv.com/live"


def ensure_user(db: Session, data: UserCreate) -> User:
    user = user_repository.get_user_by_username(db, data.username)
    if user:
        logger.info("User %s already exists, skipping", data.username)
        return user
    user = user_repository.create_user(db, data)
    logger.info("Created %s user %s", user.role, user.username)
    return user


def ensure_permission(db: Session, user: User, studio: Studio, can_control: bool) -> None:
    if permission_repository.get_permission(db, user.id, studio.id):
        return
    permission_repository.set_permission(db, user.id, studio.id, can_view=True, can_control=can_control)


def ensure_studio(db: Session, name: str, location: str, description: str, color: str) -> Studio:
    studio = db.query(Studio).filter(Studio.name == name).first()
    if studio:
        return studio
    return studio_repository.create_studio(
        db,
        StudioCreate(name=name, location=location, description=description, color_code=color),
    )


def ensure_streams(db: Session, studio: Studio) -> int:
    created = 0
    for suffix, description, url_suffix, resolution, fps, status in DEMO_STREAMS:
        name = f"{studio.name} {suffix}"
        exists = (
            db.query(Stream)
            .filter(Stream.studio_id == studio.id, Stream.name == name)
            .first()
        )
        if exists:
            continue
        studio_repository.create_stream(
            db,
            StreamCreate(
                studio_id=studio.id,
                name=name,
                description=description,
                stream_url=f"{STREAM_BASE_URL}/{studio.name.lower()}_{url_suffix}",
                resolution=resolution,
                fps=fps,
                status=status,
            ),
        )
        created += 1
    return created


def seed(db: Session) -> None:
    admin = ensure_user(
        db,
        UserCreate(
            username="admin", email="admin@obtv.com", password="admin123",
            first_name="Admin", last_name="User", role=UserRole.ADMIN,
        ),
    )

    studios = [ensure_studio(db, *row) for row in DEMO_STUDIOS]
    streams_created = sum(ensure_streams(db, s) for s in studios)
    logger.info("Studios: %d, new streams: %d", len(studios), streams_created)

    for studio in studios:
        ensure_permission(db, admin, studio, can_control=True)

    operator = ensure_user(
        db,
        UserCreate(
            username="operator", email="operator@obtv.com", password="operator123",
            first_name="Studio", last_name="Operator", role=UserRole.OPERATOR,
        ),
    )
    for studio in studios[:2]:
        ensure_permission(db, operator, studio, can_control=True)

    viewer = ensure_user(
        db,
        UserCreate(
            username="viewer", email="viewer@obtv.com", password="viewer123",
            first_name="Content", last_name="Viewer", role=UserRole.VIEWER,
        ),
    )
    ensure_permission(db, viewer, studios[0], can_control=False)


def create_admin(db: Session, username: str, password: str, email: str | None) -> User:
    return ensure_user(
        db,
        UserCreate(
            username=username, email=email, password=password,
            first_name="Admin", last_name="User", role=UserRole.ADMIN,
        ),
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the studio dashboard database")
    parser.add_argument("--admin-only", action="store_true", help="only create an admin account")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin123")
    parser.add_argument("--email", default="admin@obtv.com")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    db = SessionLocal()
    try:
        if args.admin_only:
            create_admin(db, args.username, args.password, args.email)
        else:
            seed(db)
        logger.info("Database seeded successfully")
    finally:
        db.close()


if __name__ == "__main__":
    main()
