"""Validation utilities for MockupAI Studio inputs."""

import io
import logging

from PIL import Image, UnidentifiedImageError

from mockupstudio.core.data_uri import build_data_uri, parse_data_uri
from mockupstudio.core.generation_client import ACCEPTED_IMAGE_TYPES
from mockupstudio.core.presets import get_preset

from .models import SessionState, UploadedImage

logger = logging.getLogger(__name__)

# Multi-picture JPEGs (camera MPO files) are served as plain JPEG.
FORMAT_MIME_OVERRIDES = {"MPO": "image/jpeg"}


class ValidationFailure(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


class SessionBusy(ValidationFailure):
    """A submission was attempted while another request is in flight."""

    pass


def validate_prompt_content(prompt: str, max_length: int = 10000) -> None:
    """Validate prompt text content.

    Args:
        prompt: Prompt text to validate
        max_length: Maximum allowed prompt length

    Raises:
        ValidationFailure: If prompt is too long
    """
    if len(prompt) > max_length:
        raise ValidationFailure(
            f"Prompt is too long ({len(prompt)} characters). Maximum is {max_length} characters."
        )


def validate_preset_id(preset_id: str) -> None:
    """Ensure the preset exists in the catalog.

    Raises:
        ValidationFailure: For unknown preset ids
    """
    if get_preset(preset_id) is None:
        raise ValidationFailure(f"Unknown preset: {preset_id}")


def validate_uploaded_image(data_uri: str) -> UploadedImage:
    """Decode and identify an uploaded image.

    The declared media type of the data URI is not trusted: the bytes are
    opened with Pillow and the detected format decides the MIME type sent to
    the model. Only PNG, JPEG and WEBP are accepted.

    Args:
        data_uri: ``data:<mime>;base64,...`` string read by the browser

    Returns:
        UploadedImage with the detected MIME type

    Raises:
        ValidationFailure: If the payload is not a decodable image of an
            accepted type
    """
    try:
        declared_type, data = parse_data_uri(data_uri)
    except ValueError as e:
        raise ValidationFailure(f"Invalid upload: {e}") from e

    if not data:
        raise ValidationFailure("Uploaded image is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            detected_format = img.format
            img.verify()
    except Image.DecompressionBombError as e:
        raise ValidationFailure("Uploaded image dimensions are too large") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationFailure("Uploaded file is not a readable image") from e

    detected_format = detected_format or ""
    mime_type = FORMAT_MIME_OVERRIDES.get(detected_format) or Image.MIME.get(detected_format, "")
    if mime_type not in ACCEPTED_IMAGE_TYPES:
        raise ValidationFailure(
            f"Unsupported image type: {mime_type or detected_format}. Use PNG, JPEG or WEBP."
        )

    if mime_type != declared_type:
        logger.info(f"Upload declared as {declared_type} but contains {mime_type}")
        data_uri = build_data_uri(data, mime_type)

    return UploadedImage(data_uri=data_uri, mime_type=mime_type)


def validate_not_busy(state: SessionState) -> None:
    """Refuse to start a request while one is in flight.

    Raises:
        SessionBusy: If the session's busy flag is set
    """
    if state.busy:
        raise SessionBusy("A generation request is already in progress")


def validate_mockup_ready(state: SessionState) -> None:
    """Check the preconditions for a mockup submission.

    Raises:
        SessionBusy: If a request is in flight
        ValidationFailure: If no image has been uploaded
    """
    validate_not_busy(state)
    if state.uploaded_image is None:
        raise ValidationFailure("Please upload a logo or design first")
    validate_prompt_content(state.prompt)


def validate_generation_ready(state: SessionState) -> None:
    """Check the preconditions for a text-to-image submission.

    Raises:
        SessionBusy: If a request is in flight
        ValidationFailure: If the prompt is empty
    """
    validate_not_busy(state)
    if not state.prompt or not state.prompt.strip():
        raise ValidationFailure("Please describe the image to generate")
    validate_prompt_content(state.prompt)
