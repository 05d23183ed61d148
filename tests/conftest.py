"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from sweethome.schemas.entry import AudioInfo
from sweethome.services.entry import EntryService, get_entry_service
from sweethome.services.store import JsonEntryStore
from sweethome.services.upload import UploadReceiver


@pytest.fixture(name="db_path")
def db_path_fixture(tmp_path):
    """Path of the JSON document backing the store."""
    return tmp_path / "db.json"


@pytest.fixture(name="upload_dir")
def upload_dir_fixture(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(name="service")
def service_fixture(db_path, upload_dir) -> EntryService:
    """Entry service backed by a fresh JSON store under tmp_path."""
    return EntryService(JsonEntryStore(db_path), UploadReceiver(upload_dir))


@pytest.fixture(name="client")
def client_fixture(service: EntryService):
    """Create a test client with the entry service overridden and rate limiting disabled."""
    from main import app
    from sweethome.rate_limit import limiter

    app.dependency_overrides[get_entry_service] = lambda: service
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="make_audio")
def make_audio_fixture():
    """Build the AudioInfo the upload receiver would produce for a filename."""

    def _make(original_name: str = "park.wav") -> AudioInfo:
        return AudioInfo(
            filename=f"1700000000000_{original_name}",
            original_name=original_name,
            content_type="audio/wav",
            local_path=f"uploads/1700000000000_{original_name}",
        )

    return _make
