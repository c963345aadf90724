"""Data URI helpers.

Data URIs (``data:<media-type>;base64,<payload>``) are the only image
representation passed between the generation client, the session gallery and
the browser page.
"""

from __future__ import annotations

import base64
import binascii

_DATA_PREFIX = "data:"
_BASE64_MARKER = ";base64"

# Download file extensions per media type.
FILE_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


def build_data_uri(data: bytes | str, media_type: str) -> str:
    """Encode image data as a base64 data URI.

    Args:
        data: Raw image bytes, or a string that is already base64 encoded.
        media_type: MIME type for the prefix, e.g. ``"image/png"``.

    Returns:
        ``data:<media_type>;base64,<payload>``
    """
    if isinstance(data, bytes):
        payload = base64.b64encode(data).decode("ascii")
    else:
        payload = data
    return f"{_DATA_PREFIX}{media_type}{_BASE64_MARKER},{payload}"


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its media type and decoded bytes.

    Args:
        uri: A ``data:<media-type>;base64,<payload>`` string.

    Returns:
        Tuple of ``(media_type, data)``.

    Raises:
        ValueError: If the string is not a base64 data URI or the payload
            does not decode.
    """
    if not uri.startswith(_DATA_PREFIX) or "," not in uri:
        raise ValueError("Not a data URI")

    header, payload = uri[len(_DATA_PREFIX) :].split(",", 1)
    if not header.endswith(_BASE64_MARKER):
        raise ValueError("Only base64 data URIs are supported")

    media_type = header[: -len(_BASE64_MARKER)].strip().lower()
    if not media_type:
        raise ValueError("Data URI has no media type")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e

    return media_type, data


def media_type_of(uri: str) -> str:
    """Return the media type of a data URI without decoding the payload."""
    if not uri.startswith(_DATA_PREFIX) or "," not in uri:
        raise ValueError("Not a data URI")
    header = uri[len(_DATA_PREFIX) :].split(",", 1)[0]
    return header.split(";", 1)[0].strip().lower()


def download_filename(image_id: str, media_type: str) -> str:
    """Build the download name for a gallery image.

    The extension follows the actual encoding, so JPEG results from the
    text-to-image model download as ``.jpg`` rather than ``.png``.
    """
    extension = FILE_EXTENSIONS.get(media_type, "png")
    return f"mockup-ai-{image_id}.{extension}"
