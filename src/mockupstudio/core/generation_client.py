"""Gemini / Imagen request wrapper.

:class:`GenerationClient` is the only module that talks to the remote models.
It exposes two single-shot operations and normalizes both responses into a
data URI string:

- :meth:`GenerationClient.edit_image_with_prompt` sends an uploaded image and
  an instruction to the Gemini image model and asks for an image back. This
  is the logo mockup path.
- :meth:`GenerationClient.generate_from_text` asks the Imagen model for exactly
  one JPEG at a given aspect ratio.

Both operations use the SDK's async surface so the FastAPI event loop is never
blocked. There is no retry, no timeout beyond the transport default and no
streaming. Any remote error, and any response without a usable image, is
raised as :class:`GenerationFailure` with the original exception chained.

Usage
-----
::

    from mockupstudio.core.config import config
    from mockupstudio.core.generation_client import AspectRatio, GenerationClient

    client = GenerationClient(config)
    uri = await client.generate_from_text("a neon city at dusk", AspectRatio.WIDE)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from google import genai
from google.genai import types

from mockupstudio.core.config import MockupStudioConfig
from mockupstudio.core.data_uri import build_data_uri

logger = logging.getLogger(__name__)

ACCEPTED_IMAGE_TYPES: tuple[str, ...] = ("image/png", "image/jpeg", "image/webp")

EDIT_RESULT_MEDIA_TYPE = "image/png"
GENERATION_RESULT_MEDIA_TYPE = "image/jpeg"


class AspectRatio(str, Enum):
    """Width:height ratios accepted by the text-to-image model."""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    WIDE = "16:9"
    TALL = "9:16"


class GenerationFailure(Exception):
    """A generation call errored or returned no usable image."""

    pass


class GenerationClient:
    """Thin async wrapper around ``google.genai.Client``.

    Attributes:
        edit_model: Model id used for image editing.
        generation_model: Model id used for text-to-image.
    """

    def __init__(self, config: MockupStudioConfig, client: Any | None = None) -> None:
        """Initialise the client.

        Args:
            config: Application configuration (API key and model ids).
            client: Pre-built ``genai.Client``. When omitted, one is created from
                the configured API key.

        Raises:
            RuntimeError: If no client is given and no API key is configured.
        """
        self.edit_model = config.edit_model
        self.generation_model = config.generation_model

        if client is None:
            client = genai.Client(api_key=config.require_api_key())
        self._client = client

        logger.info(
            f"GenerationClient ready (edit={self.edit_model}, generation={self.generation_model})"
        )

    async def edit_image_with_prompt(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        """Edit an image according to an instruction.

        Args:
            image_bytes: Raw bytes of the uploaded image.
            mime_type: One of :data:`ACCEPTED_IMAGE_TYPES`.
            prompt: Non-empty instruction describing the edit.

        Returns:
            ``data:image/png;base64,...`` string of the first image part.

        Raises:
            ValueError: If the inputs break the contract above.
            GenerationFailure: If the call errors or no image part comes back.
        """
        if not image_bytes:
            raise ValueError("image_bytes must not be empty")
        if mime_type not in ACCEPTED_IMAGE_TYPES:
            raise ValueError(f"Unsupported image type: {mime_type}")
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.edit_model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    types.Part.from_text(text=prompt),
                ],
                config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
            )
        except Exception as e:
            logger.error(f"Mockup generation failed: {e}")
            raise GenerationFailure(f"Image edit request failed: {e}") from e

        data = _first_inline_image(response)
        if data is None:
            logger.error("Mockup generation failed: no image in response")
            raise GenerationFailure("No image generated in response")

        return build_data_uri(data, EDIT_RESULT_MEDIA_TYPE)

    async def generate_from_text(
        self, prompt: str, aspect_ratio: AspectRatio | str = AspectRatio.SQUARE
    ) -> str:
        """Generate one JPEG image from a text prompt.

        Args:
            prompt: Non-empty description of the image.
            aspect_ratio: One of :class:`AspectRatio` (or its string value).

        Returns:
            ``data:image/jpeg;base64,...`` string.

        Raises:
            ValueError: If the prompt is empty or the ratio is unknown.
            GenerationFailure: If the call errors or returns no image.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")
        aspect_ratio = AspectRatio(aspect_ratio)

        try:
            response = await self._client.aio.models.generate_images(
                model=self.generation_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=GENERATION_RESULT_MEDIA_TYPE,
                    aspect_ratio=aspect_ratio.value,
                ),
            )
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise GenerationFailure(f"Image generation request failed: {e}") from e

        generated = getattr(response, "generated_images", None) or []
        if not generated:
            logger.error("Image generation failed: response contained no images")
            raise GenerationFailure("No image generated")

        image = generated[0].image
        image_bytes = getattr(image, "image_bytes", None) if image is not None else None
        if not image_bytes:
            logger.error("Image generation failed: first image has no bytes")
            raise GenerationFailure("No image generated")

        return build_data_uri(image_bytes, GENERATION_RESULT_MEDIA_TYPE)


def _first_inline_image(response: Any) -> bytes | str | None:
    """Return the first inline image payload of the first candidate, or None."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            return inline_data.data
    return None
