"""Unit tests for input validation."""

import io

import pytest
from PIL import Image

from mockupstudio.core.data_uri import build_data_uri, parse_data_uri
from mockupstudio.ui.models import SessionState
from mockupstudio.ui.validation import (
    SessionBusy,
    ValidationFailure,
    validate_generation_ready,
    validate_mockup_ready,
    validate_not_busy,
    validate_preset_id,
    validate_prompt_content,
    validate_uploaded_image,
)


class TestValidateUploadedImage:
    """Tests for validate_uploaded_image."""

    def test_png_upload(self, png_data_uri):
        upload = validate_uploaded_image(png_data_uri)
        assert upload.mime_type == "image/png"
        assert upload.data_uri == png_data_uri

    def test_jpeg_upload(self, jpeg_data_uri):
        assert validate_uploaded_image(jpeg_data_uri).mime_type == "image/jpeg"

    def test_webp_upload(self, webp_bytes):
        uri = build_data_uri(webp_bytes, "image/webp")
        assert validate_uploaded_image(uri).mime_type == "image/webp"

    def test_mislabelled_upload_uses_detected_type(self, jpeg_bytes):
        """A JPEG declared as PNG is stored as JPEG."""
        uri = build_data_uri(jpeg_bytes, "image/png")

        upload = validate_uploaded_image(uri)

        assert upload.mime_type == "image/jpeg"
        assert parse_data_uri(upload.data_uri) == ("image/jpeg", jpeg_bytes)

    def test_gif_rejected(self, gif_bytes):
        uri = build_data_uri(gif_bytes, "image/gif")
        with pytest.raises(ValidationFailure, match="Unsupported image type"):
            validate_uploaded_image(uri)

    def test_non_image_rejected(self):
        uri = build_data_uri(b"just some text", "image/png")
        with pytest.raises(ValidationFailure, match="not a readable image"):
            validate_uploaded_image(uri)

    def test_empty_payload_rejected(self):
        with pytest.raises(ValidationFailure, match="empty"):
            validate_uploaded_image("data:image/png;base64,")

    def test_not_a_data_uri_rejected(self):
        with pytest.raises(ValidationFailure, match="Invalid upload"):
            validate_uploaded_image("C:\\logo.png")

    def test_multi_picture_jpeg_accepted_as_jpeg(self):
        """Camera MPO files are JPEGs and keep their image/jpeg label."""
        buf = io.BytesIO()
        first = Image.new("RGB", (8, 8), color=(10, 120, 200))
        second = Image.new("RGB", (8, 8), color=(200, 120, 10))
        first.save(buf, format="MPO", save_all=True, append_images=[second])
        uri = build_data_uri(buf.getvalue(), "image/jpeg")

        upload = validate_uploaded_image(uri)

        assert upload.mime_type == "image/jpeg"
        assert upload.data_uri == uri

    def test_oversized_dimensions_rejected(self, monkeypatch, png_data_uri):
        """Pillow's decompression bomb guard becomes a validation error."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

        with pytest.raises(ValidationFailure, match="too large"):
            validate_uploaded_image(png_data_uri)


class TestPreconditions:
    """Tests for submission precondition checks."""

    def test_not_busy_passes(self):
        validate_not_busy(SessionState())

    def test_busy_raises_session_busy(self):
        with pytest.raises(SessionBusy):
            validate_not_busy(SessionState(busy=True))

    def test_session_busy_is_validation_failure(self):
        assert issubclass(SessionBusy, ValidationFailure)

    def test_mockup_requires_upload(self):
        with pytest.raises(ValidationFailure, match="upload"):
            validate_mockup_ready(SessionState())

    def test_mockup_ready_with_upload(self, uploaded_state):
        validate_mockup_ready(uploaded_state)

    def test_mockup_busy_checked_first(self):
        with pytest.raises(SessionBusy):
            validate_mockup_ready(SessionState(busy=True))

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_generation_requires_prompt(self, prompt):
        with pytest.raises(ValidationFailure):
            validate_generation_ready(SessionState(prompt=prompt))

    def test_generation_ready(self):
        validate_generation_ready(SessionState(prompt="A red fox"))

    def test_generation_busy(self):
        with pytest.raises(SessionBusy):
            validate_generation_ready(SessionState(prompt="A red fox", busy=True))


class TestPromptAndPreset:
    def test_long_prompt_rejected(self):
        with pytest.raises(ValidationFailure, match="too long"):
            validate_prompt_content("x" * 10001)

    def test_prompt_at_limit_accepted(self):
        validate_prompt_content("x" * 10000)

    def test_known_preset(self):
        validate_preset_id("hoodie")

    def test_unknown_preset(self):
        with pytest.raises(ValidationFailure, match="Unknown preset"):
            validate_preset_id("spaceship")
