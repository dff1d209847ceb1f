# tests/conftest.py
"""
Pytest configuration and fixtures for the DocCenter test suite.
"""

import os

# Keep the module-level engine off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.config import Settings, get_settings
from app.connectors.download.client import FileDownloader
from app.database import get_session
from app.api.webhook_routes import get_downloader

TOKEN = "s3cret-token"
CLIENT_FOLDER = "ACME LTDA - 12.345.678_0001-99"
PDF_BYTES = b"%PDF-1.4\n" + b"0123456789" * 300


@pytest.fixture
def engine():
    """In-memory SQLite shared across sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client_base(tmp_path_factory):
    """Client folder tree with a single existing month folder."""
    base = tmp_path_factory.mktemp("clients") / "PASTAS DE CLIENTES"
    (base / CLIENT_FOLDER / "2025" / "Fiscal" / "Março").mkdir(parents=True)
    (base / "OUTRO CLIENTE - 98.765.432_0001-10").mkdir()
    return base


@pytest.fixture
def test_settings(client_base):
    return Settings(
        _env_file=None,
        client_base_path=str(client_base),
        webhook_token=TOKEN,
        database_url="sqlite://",
    )


@pytest.fixture
def source():
    """Fake document server; tests tweak status/content and read calls."""
    state = {"status_code": 200, "content": PDF_BYTES, "calls": []}

    def handler(request: httpx.Request) -> httpx.Response:
        state["calls"].append(str(request.url))
        return httpx.Response(state["status_code"], content=state["content"])

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
def downloader(test_settings, source):
    return FileDownloader(test_settings, transport=source["transport"])


@pytest.fixture
def sample_payload():
    """Delivery webhook pointing at the existing March/Fiscal folder."""
    return {
        "CNPJ": "12.345.678/0001-99",
        "MESANO": "032025",
        "GRUPO": "Fiscal",
        "URL_ARQUIVO": "http://x/doc.pdf",
        "CODIGOEMPRESA": "01",
        "CODIGOFILIAL": "02",
        "TIPO": "NF",
        "ASSUNTO": "Janeiro",
    }


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def test_client(test_settings, engine, source):
    """FastAPI test client wired to the fixtures above."""
    from app.main import app

    def override_session():
        with Session(engine) as session:
            yield session

    async def override_downloader():
        downloader = FileDownloader(test_settings, transport=source["transport"])
        try:
            yield downloader
        finally:
            await downloader.close()

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_downloader] = override_downloader
    yield TestClient(app)
    app.dependency_overrides.clear()
