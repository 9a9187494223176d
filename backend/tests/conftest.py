# tests/conftest.py
import os
import shutil
import tempfile
from pathlib import Path

# Configure the app before it is imported
_TEST_STORAGE = tempfile.mkdtemp(prefix="projectmanager-test-")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["STORAGE_PATH"] = _TEST_STORAGE
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projectmanager.auth.passwords import hash_password
from projectmanager.config import settings
from projectmanager.database import Base, get_db
from projectmanager.main import app
from projectmanager.models import Comment, Company, Document, Project, User

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

PASSWORD = "secret-password"


@pytest.fixture
def engine():
    """Create a fresh in-memory database for each test"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Creates a new database session for a test"""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    Path(temp_dir, "uploads").mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original_storage = settings.STORAGE_PATH
    original_uploads = settings.UPLOADS_PATH
    original_mode = settings.DOCUMENT_STORAGE
    original_max_bytes = settings.MAX_UPLOAD_BYTES

    # Override settings
    settings.STORAGE_PATH = temp_storage_dir
    settings.UPLOADS_PATH = temp_storage_dir / "uploads"

    yield

    # Restore settings
    settings.STORAGE_PATH = original_storage
    settings.UPLOADS_PATH = original_uploads
    settings.DOCUMENT_STORAGE = original_mode
    settings.MAX_UPLOAD_BYTES = original_max_bytes


@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def password():
    """Plain-text password of the user fixtures"""
    return PASSWORD


@pytest.fixture
def token_service():
    return app.state.token_service


def _create_user(db_session, username, roles):
    user = User(
        username=username,
        email=f"{username}@example.com",
        password=hash_password(PASSWORD, rounds=4),
        roles=roles
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def regular_user(db_session):
    return _create_user(db_session, "regular", ["user"])


@pytest.fixture
def admin_user(db_session):
    return _create_user(db_session, "admin", ["user", "admin"])


@pytest.fixture
def admin_only_user(db_session):
    """Holds "admin" but not "user"""
    return _create_user(db_session, "adminonly", ["admin"])


def _headers(token_service, user):
    token = token_service.issue(user.id, user.username, user.roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(token_service, regular_user):
    return _headers(token_service, regular_user)


@pytest.fixture
def admin_headers(token_service, admin_user):
    return _headers(token_service, admin_user)


@pytest.fixture
def admin_only_headers(token_service, admin_only_user):
    return _headers(token_service, admin_only_user)


@pytest.fixture
def sample_company(db_session):
    """Create a sample company"""
    company = Company(
        name="Acme Engineering",
        business_id="1234567-8",
        industry="Construction",
        address=[{"address_name": "HQ", "street": "Main St 1", "zip": "00100", "city": "Helsinki"}]
    )
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company


@pytest.fixture
def sample_project(db_session, sample_company, regular_user):
    """Create a sample project with the regular user as member"""
    project = Project(
        title="Alpha Bridge",
        description="Bridge renovation",
        project_type="infrastructure",
        project_code="P-001",
        company_id=sample_company.id,
        users=[regular_user]
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def sample_document(db_session, sample_project, temp_storage_dir):
    """Create a sample document with a file on disk"""
    file_path = temp_storage_dir / "uploads" / "sample.pdf"
    file_path.write_bytes(b"%PDF-1.4 sample")

    document = Document(
        project_id=sample_project.id,
        description="Structural drawings",
        file_name="sample.pdf",
        file_path="uploads/sample.pdf",
        file_type="application/pdf",
        file_size=file_path.stat().st_size
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document


@pytest.fixture
def sample_comment(db_session, sample_project, sample_document, regular_user):
    """Create a sample comment by the regular user on the sample document"""
    comment = Comment(
        title="Review",
        body="Looks good to me",
        author_id=regular_user.id,
        project_id=sample_project.id,
        document_id=sample_document.id
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_STORAGE, ignore_errors=True)
