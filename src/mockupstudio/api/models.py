"""Pydantic request models for the MockupAI Studio API.

FastAPI uses these for request validation and OpenAPI documentation.
Enum-typed fields reject unknown values with a 422 before any handler runs.

Models
------
ModeRequest
    Payload for ``PUT /api/sessions/{id}/mode``.
PromptRequest
    Payload for ``PUT /api/sessions/{id}/prompt``.
PresetRequest
    Payload for ``PUT /api/sessions/{id}/preset``.
AspectRatioRequest
    Payload for ``PUT /api/sessions/{id}/aspect-ratio``.
UploadRequest
    Payload for ``POST /api/sessions/{id}/upload``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mockupstudio.core.generation_client import AspectRatio
from mockupstudio.ui.models import AppMode


class ModeRequest(BaseModel):
    """Request body for switching panels.

    Attributes:
        mode: ``"MOCKUP"`` or ``"IMAGE_GEN"``.
    """

    mode: AppMode = Field(
        ...,
        description="Panel to switch to: 'MOCKUP' or 'IMAGE_GEN'.",
    )


class PromptRequest(BaseModel):
    """Request body for setting the free-text prompt.

    Attributes:
        prompt: Free text. Empty means "use the selected preset" in mockup mode.
    """

    prompt: str = Field(
        default="",
        description="Free-text prompt (overrides the preset in mockup mode).",
    )


class PresetRequest(BaseModel):
    """Request body for selecting a mockup preset."""

    preset_id: str = Field(
        ...,
        description="Preset identifier (e.g. 'mug', 'hoodie').",
    )


class AspectRatioRequest(BaseModel):
    """Request body for selecting the text-to-image aspect ratio."""

    aspect_ratio: AspectRatio = Field(
        ...,
        description="One of '1:1', '3:4', '4:3', '16:9', '9:16'.",
    )


class UploadRequest(BaseModel):
    """Request body for uploading the logo/design.

    Attributes:
        data_uri: The file as read by the browser
            (``data:image/png;base64,...``).
    """

    data_uri: str = Field(
        ...,
        min_length=1,
        description="Image encoded as a base64 data URI.",
    )
