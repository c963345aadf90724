"""Core functionality for MockupAI Studio.

- **MockupStudioConfig / config**: Pydantic Settings configuration (MOCKUPSTUDIO_ prefix)
- **GenerationClient**: async wrapper around the Gemini image-edit and Imagen
  text-to-image endpoints, returning data URIs
- **MOCKUP_PRESETS**: static catalog of product mockup instructions
- **data_uri**: encode/decode helpers for the data URI image representation
"""

from mockupstudio.core.config import MockupStudioConfig, config
from mockupstudio.core.generation_client import (
    ACCEPTED_IMAGE_TYPES,
    AspectRatio,
    GenerationClient,
    GenerationFailure,
)
from mockupstudio.core.presets import DEFAULT_PRESET_ID, MOCKUP_PRESETS, MockupPreset, get_preset

__all__ = [
    "ACCEPTED_IMAGE_TYPES",
    "AspectRatio",
    "DEFAULT_PRESET_ID",
    "GenerationClient",
    "GenerationFailure",
    "MOCKUP_PRESETS",
    "MockupPreset",
    "MockupStudioConfig",
    "config",
    "get_preset",
]
