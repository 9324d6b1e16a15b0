"""Builders shared by the test modules: settings, in-memory databases, API clients."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, User, UserRole, UserStatus

TEST_SECRET = "unit-test-secret-0123456789abcdefghijklmnop"
ADMIN_CODE = "let-me-in"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests; bcrypt at its minimum cost keeps hashing fast."""
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory SQLite database shared by every session of the factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    db: Session,
    email: str,
    password: str = "secret1",
    role: UserRole = UserRole.USER,
    status: UserStatus = UserStatus.ACTIVE,
    name: str = "Test User",
) -> User:
    """Insert a user directly, bypassing the issuer."""
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password, 4),
        role=role,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_client(settings: Settings) -> tuple[TestClient, sessionmaker[Session]]:
    """TestClient wired to an isolated database and the given settings."""
    session_factory = make_session_factory()

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app), session_factory


def reset_overrides() -> None:
    app.dependency_overrides.clear()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
