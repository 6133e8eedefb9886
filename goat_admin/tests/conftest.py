import logging
from datetime import datetime, timedelta, timezone
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlmodel import SQLModel

from goat_admin.database import (
    DatabaseError,
    create_tables,
    drop_database,
    get_db_session,
)
from goat_admin.main import app
from goat_admin.models import ContactMessage
from goat_admin.services.storage import ImageFileStore, get_image_store

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def fresh_test_database():
    """Start the run from empty tables, whatever a previous run left behind."""
    drop_database()
    create_tables()
    yield


@pytest.fixture(autouse=True)
def cleanup_test_database():
    """Cleanup test database after each test."""
    yield

    try:
        with get_db_session() as session:
            for table in reversed(SQLModel.metadata.sorted_tables):
                session.execute(table.delete())
    except DatabaseError as e:
        logger.error(f"Failed to cleanup test database: {e.original_error}")


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def image_store(upload_dir):
    return ImageFileStore(upload_dir)


@pytest.fixture
def client(image_store):
    app.dependency_overrides[get_image_store] = lambda: image_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_upload(upload_dir):
    """Write files into the upload directory and return their locators."""

    def _make_upload(*names: str) -> list[str]:
        locators = []
        for name in names:
            path = upload_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\xff\xd8\xff" + name.encode())
            locators.append(f"/uploads/{name}")
        return locators

    return _make_upload


@pytest.fixture
def image_bytes():
    """Encode a tiny real image, e.g. `image_bytes("PNG")`."""

    def _image_bytes(image_format: str = "JPEG") -> bytes:
        buffer = BytesIO()
        Image.new("RGB", (2, 2), color=(120, 90, 60)).save(buffer, format=image_format)
        return buffer.getvalue()

    return _image_bytes


@pytest.fixture
def goat_payload():
    """Provide a valid goat payload as the dashboard submits it."""
    return {
        "name": "Daisy",
        "breed": "Nubian",
        "age": "2 years",
        "weight": "45 kg",
        "price": 350,
        "gender": "Female",
        "color": "Brown",
        "description": "Friendly doe, good milker",
        "isAvailable": True,
    }


@pytest.fixture
def create_sample_messages():
    """Provide sample contact messages for testing."""
    now = datetime.now(timezone.utc)
    messages = [
        ContactMessage(
            name="Sarah Johnson",
            email="sarah@example.com",
            subject="Wholesale pricing",
            message="Do you offer bulk pricing for restaurants?",
            created_at=now - timedelta(days=2),
        ),
        ContactMessage(
            name="Tom Baker",
            email="tom@example.com",
            subject=None,
            message="Can we visit the farm on Saturday?",
            created_at=now - timedelta(days=1),
        ),
    ]

    with get_db_session() as session:
        for message in messages:
            session.add(message)
        session.commit()
        ids = [message.id for message in messages]

    return ids
