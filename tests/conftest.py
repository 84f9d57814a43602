import os

# Settings are read once at import; configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.auth import create_access_token, hash_password  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Stream, Studio, User, UserRole, UserStudioPermission  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(
        username: str,
        password: str = "secret123",
        role: UserRole = UserRole.VIEWER,
        is_active: bool = True,
    ) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password=hash_password(password),
            role=role.value,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_studio(db):
    def _make_studio(name: str, is_active: bool = True) -> Studio:
        studio = Studio(name=name, location=f"{name} HQ", color_code="#28666E", is_active=is_active)
        db.add(studio)
        db.commit()
        db.refresh(studio)
        return studio

    return _make_studio


@pytest.fixture
def make_stream(db):
    def _make_stream(studio: Studio, name: str, is_active: bool = True, status: str = "offline") -> Stream:
        stream = Stream(
            studio_id=studio.id,
            name=name,
            stream_url=f"webrtc://stream.example.com/live/{name.lower().replace(' ', '_')}",
            status=status,
            is_active=is_active,
        )
        db.add(stream)
        db.commit()
        db.refresh(stream)
        return stream

    return _make_stream


@pytest.fixture
def grant(db):
    def _grant(user: User, studio: Studio, can_view: bool = True, can_control: bool = False):
        permission = UserStudioPermission(
            user_id=user.id,
            studio_id=studio.id,
            can_view=can_view,
            can_control=can_control,
        )
        db.add(permission)
        db.commit()
        return permission

    return _grant


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def admin(make_user):
    return make_user("admin", password="admin123", role=UserRole.ADMIN)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)
