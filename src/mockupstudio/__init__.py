"""MockupAI Studio - logo mockups and text-to-image generation via Gemini."""

__version__ = "0.1.0"

from mockupstudio.core.config import MockupStudioConfig, config
from mockupstudio.core.generation_client import GenerationClient, GenerationFailure

__all__ = [
    "GenerationClient",
    "GenerationFailure",
    "MockupStudioConfig",
    "config",
]
