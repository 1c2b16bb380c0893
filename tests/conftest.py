import pytest
from fastapi.testclient import TestClient

from conference_api.app.core.config import Settings
from conference_api.app.main import create_app
from conference_api.app.storage import JsonFileRecordStore, SQLiteRecordStore

from .helpers import ADMIN_EMAIL, ADMIN_PASSWORD, SECRET_KEY



@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_key=SECRET_KEY,
        storage_backend="json",
        data_dir=str(tmp_path / "data"),
        database_url=str(tmp_path / "conference.db"),
        pages_dir=str(tmp_path / "public"),
        backup_dir=str(tmp_path / "backups"),
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        seed_sample_data=False,
        super_admin_static_token="",
    )


@pytest.fixture(params=["json", "sqlite"])
def store(request, tmp_path):
    """Every file-based backend, initialised on a temporary directory."""
    if request.param == "json":
        record_store = JsonFileRecordStore(tmp_path / "data")
    else:
        record_store = SQLiteRecordStore(tmp_path / "conference.db")
    record_store.init()
    yield record_store
    record_store.close()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which seeds the admin user.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
