"""Shared pytest fixtures for MockupAI Studio tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from mockupstudio.core.config import MockupStudioConfig
from mockupstudio.core.data_uri import build_data_uri
from mockupstudio.ui.models import SessionState


def make_image_bytes(fmt: str, size: tuple[int, int] = (8, 8)) -> bytes:
    """Encode a small solid-colour image in the given Pillow format."""
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 40, 40)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> MockupStudioConfig:
    """Create a test configuration with a dummy key and a minimal template.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        MockupStudioConfig instance for testing
    """
    templates_dir = temp_dir / "templates"
    templates_dir.mkdir()
    (templates_dir / "index.html").write_text(
        "<html><head><title>MockupAI Studio</title></head><body></body></html>",
        encoding="utf-8",
    )

    return MockupStudioConfig(
        _env_file=None,
        api_key="test-key",
        edit_model="gemini-test-image",
        generation_model="imagen-test",
        templates_dir=templates_dir,
    )


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def webp_bytes() -> bytes:
    return make_image_bytes("WEBP")


@pytest.fixture
def gif_bytes() -> bytes:
    return make_image_bytes("GIF")


@pytest.fixture
def png_data_uri(png_bytes: bytes) -> str:
    return build_data_uri(png_bytes, "image/png")


@pytest.fixture
def jpeg_data_uri(jpeg_bytes: bytes) -> str:
    return build_data_uri(jpeg_bytes, "image/jpeg")


@pytest.fixture
def fake_generation_client(png_data_uri: str, jpeg_data_uri: str) -> Mock:
    """A stand-in for GenerationClient with successful async methods.

    ``edit_image_with_prompt`` returns a PNG data URI and
    ``generate_from_text`` a JPEG one, like the real client.
    """
    client = Mock()
    client.edit_image_with_prompt = AsyncMock(return_value=png_data_uri)
    client.generate_from_text = AsyncMock(return_value=jpeg_data_uri)
    return client


@pytest.fixture
def session_state() -> SessionState:
    """Create a fresh session state for testing."""
    return SessionState()


@pytest.fixture
def uploaded_state(session_state: SessionState, png_data_uri: str) -> SessionState:
    """Session state with a PNG logo already uploaded."""
    from mockupstudio.ui.state import upload_image

    return upload_image(session_state, png_data_uri)


@pytest.fixture
def test_client(monkeypatch, test_config, fake_generation_client):
    """FastAPI TestClient with the generation client replaced by a fake.

    The lifespan runs, so ``app.state.sessions`` is a fresh SessionStore.
    """
    from fastapi.testclient import TestClient

    from mockupstudio.api import main as main_module

    monkeypatch.setattr(main_module, "config", test_config)
    monkeypatch.setattr(main_module, "GenerationClient", lambda cfg: fake_generation_client)

    with TestClient(main_module.app) as client:
        yield client
