"""Data models for MockupAI Studio session state and gallery entries."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from mockupstudio.core.data_uri import media_type_of, parse_data_uri
from mockupstudio.core.generation_client import AspectRatio
from mockupstudio.core.presets import DEFAULT_PRESET_ID

logger = logging.getLogger(__name__)


class AppMode(str, Enum):
    """Which panel the session is using."""

    MOCKUP = "MOCKUP"
    IMAGE_GEN = "IMAGE_GEN"


class GalleryKind(str, Enum):
    """Which operation produced a gallery entry."""

    MOCKUP = "mockup"
    GENERATION = "generation"


@dataclass(frozen=True)
class UploadedImage:
    """The logo/design uploaded for mockups.

    Attributes
    ----------
    data_uri : str
        Full ``data:<mime>;base64,...`` string (used for display)
    mime_type : str
        MIME type sent to the image-edit model
    """

    data_uri: str
    mime_type: str

    @property
    def data(self) -> bytes:
        """Decoded image bytes (the data URI prefix stripped)."""
        return parse_data_uri(self.data_uri)[1]


@dataclass(frozen=True)
class GeneratedImage:
    """A completed generation result held in the session gallery.

    The id is derived from the creation time in milliseconds, so two results
    created in the same millisecond share an id.
    """

    id: str
    url: str
    prompt: str
    created_at: float
    kind: GalleryKind

    @classmethod
    def create(cls, url: str, prompt: str, kind: GalleryKind) -> "GeneratedImage":
        """Build an entry stamped with the current time."""
        created_at = time.time()
        return cls(
            id=str(int(created_at * 1000)),
            url=url,
            prompt=prompt,
            created_at=created_at,
            kind=kind,
        )

    @property
    def media_type(self) -> str:
        return media_type_of(self.url)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "prompt": self.prompt,
            "created_at": self.created_at,
            "kind": self.kind.value,
        }


@dataclass
class SessionState:
    """State for one browser session.

    Each session gets its own SessionState, owned by the session store.
    Handlers in :mod:`mockupstudio.ui.state` and :mod:`mockupstudio.ui.handlers`
    take the state plus input and return it.

    Attributes
    ----------
    mode : AppMode
        Active panel (mockup or image generation)
    uploaded_image : UploadedImage | None
        Logo for mockups, if one was uploaded
    prompt : str
        Free-text prompt (overrides the preset in mockup mode)
    selected_preset_id : str
        Preset used when the prompt is empty
    aspect_ratio : AspectRatio
        Ratio for text-to-image requests
    busy : bool
        True while a generation request is in flight
    gallery : list[GeneratedImage]
        Results, most recent first
    """

    mode: AppMode = AppMode.MOCKUP
    uploaded_image: UploadedImage | None = None
    prompt: str = ""
    selected_preset_id: str = DEFAULT_PRESET_ID
    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    busy: bool = False
    gallery: list[GeneratedImage] = field(default_factory=list)

    def find_image(self, image_id: str) -> GeneratedImage | None:
        """Return the newest gallery entry with this id, if any."""
        return next((img for img in self.gallery if img.id == image_id), None)

    def to_dict(self) -> dict:
        """Snapshot for API responses (gallery reduced to a count)."""
        return {
            "mode": self.mode.value,
            "has_upload": self.uploaded_image is not None,
            "upload_mime_type": self.uploaded_image.mime_type if self.uploaded_image else None,
            "prompt": self.prompt,
            "selected_preset_id": self.selected_preset_id,
            "aspect_ratio": self.aspect_ratio.value,
            "busy": self.busy,
            "gallery_count": len(self.gallery),
        }

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"SessionState(mode={self.mode.value}, busy={self.busy}, "
            f"upload={self.uploaded_image is not None}, gallery={len(self.gallery)})"
        )
