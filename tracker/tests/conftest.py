import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tracker.core.config import get_settings
from tracker.db.base import Base
from tracker.api.deps import get_db
from tracker.core.security import create_access_token, hash_password
from tracker.models import User, UserRole, Subject, SchoolClass, Student


@pytest.fixture(scope="session")
def db_engine(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
    get_settings.cache_clear()
    settings = get_settings()
    engine = create_engine(settings.database_url, connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture()
def db_session(db_engine):
    session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = session_local()
    try:
        yield db
    finally:
        db.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        db.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from tracker.main import app

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def seed_data(db_session):
    teacher = User(
        full_name="Maria Santos",
        email="maria@example.com",
        password_hash=hash_password("teacher123"),
        role=UserRole.teacher,
    )
    other_teacher = User(
        full_name="Jose Reyes",
        email="jose@example.com",
        password_hash=hash_password("teacher123"),
        role=UserRole.teacher,
    )
    db_session.add_all([teacher, other_teacher])
    db_session.flush()

    subject = Subject(id="s1", name="Math", code="MTH1", owner_id=teacher.id)
    db_session.add(subject)
    db_session.flush()

    school_class = SchoolClass(name="Grade 7 - Rizal", year_level=7, subject_id=subject.id, owner_id=teacher.id)
    student = Student(family_name="Cruz", first_name="Ana", year_level=7, external_id="LRN-001", owner_id=teacher.id)
    db_session.add_all([school_class, student])
    db_session.commit()
    return {
        "teacher": teacher,
        "other": other_teacher,
        "subject": subject,
        "class": school_class,
        "student": student,
    }


@pytest.fixture()
def owner_headers(seed_data):
    return auth_headers(seed_data["teacher"])


@pytest.fixture()
def other_headers(seed_data):
    return auth_headers(seed_data["other"])
