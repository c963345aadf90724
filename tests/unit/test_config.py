"""Unit tests for configuration management."""

import pytest
from pydantic import ValidationError

from mockupstudio.core.config import API_KEY_ENV_VARS, MockupStudioConfig


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every API key variable so tests see only what they set."""
    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestMockupStudioConfig:
    """Tests for MockupStudioConfig class."""

    def test_default_values(self, clean_env):
        """Test that default configuration values are set correctly."""
        cfg = MockupStudioConfig(_env_file=None)

        assert cfg.api_key is None
        assert cfg.edit_model == "gemini-2.5-flash-image"
        assert cfg.generation_model == "imagen-4.0-generate-001"
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 7860
        assert cfg.max_sessions == 256
        assert (cfg.templates_dir / "index.html").exists()

    def test_api_key_by_field_name(self, clean_env):
        cfg = MockupStudioConfig(_env_file=None, api_key="abc123")
        assert cfg.require_api_key() == "abc123"

    @pytest.mark.parametrize("env_name", API_KEY_ENV_VARS)
    def test_api_key_from_environment(self, clean_env, env_name):
        """Each accepted variable name should supply the key."""
        clean_env.setenv(env_name, "from-env")
        cfg = MockupStudioConfig(_env_file=None)
        assert cfg.require_api_key() == "from-env"

    def test_missing_api_key_raises(self, clean_env):
        cfg = MockupStudioConfig(_env_file=None)
        with pytest.raises(RuntimeError, match="MOCKUPSTUDIO_API_KEY"):
            cfg.require_api_key()

    def test_blank_api_key_raises(self, clean_env):
        cfg = MockupStudioConfig(_env_file=None, api_key="   ")
        with pytest.raises(RuntimeError):
            cfg.require_api_key()

    def test_api_key_not_in_repr(self, clean_env):
        """The secret should never leak through repr()."""
        cfg = MockupStudioConfig(_env_file=None, api_key="super-secret")
        assert "super-secret" not in repr(cfg)

    def test_prefixed_env_override(self, clean_env):
        clean_env.setenv("MOCKUPSTUDIO_EDIT_MODEL", "gemini-other-image")
        clean_env.setenv("MOCKUPSTUDIO_SERVER_PORT", "9000")
        cfg = MockupStudioConfig(_env_file=None)
        assert cfg.edit_model == "gemini-other-image"
        assert cfg.server_port == 9000

    def test_server_port_bounds(self, clean_env):
        with pytest.raises(ValidationError):
            MockupStudioConfig(_env_file=None, server_port=80)
        with pytest.raises(ValidationError):
            MockupStudioConfig(_env_file=None, server_port=70000)
