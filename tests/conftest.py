from datetime import datetime, timedelta, UTC

import pytest
from sqlalchemy.orm import Session

from boardcore.db.database import SessionLocal, engine
from boardcore.db import models
from boardcore.utils.settings import refresh_settings_cache

# Fixed reference instant for every time-window test
NOW = datetime(2026, 3, 31, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory resets per process)."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Empty all tables between tests without dropping metadata."""
    with engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def user_factory(db_session: Session):
    def _create(username: str, join_date=None, last_login=None, roles=()):
        user = models.User(
            username=username,
            password="x",
            join_date=join_date or NOW - timedelta(days=1000),
            last_login=last_login,
        )
        user.roles.extend(roles)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def role_factory(db_session: Session):
    def _create(name: str):
        role = models.Role(name=name)
        db_session.add(role)
        db_session.commit()
        db_session.refresh(role)
        return role
    return _create


@pytest.fixture
def reply_factory(db_session: Session):
    def _create(topic_id: int, posted_date: datetime, mods_only: bool = False, username: str = "poster", body: str = "text"):
        reply = models.Reply(
            topic_id=topic_id,
            posted_date=posted_date,
            mods_only=mods_only,
            username=username,
            body=body,
        )
        db_session.add(reply)
        db_session.commit()
        db_session.refresh(reply)
        return reply
    return _create
