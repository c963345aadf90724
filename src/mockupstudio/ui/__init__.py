"""Session state and orchestration for MockupAI Studio.

- models: SessionState, GeneratedImage, UploadedImage and the mode/kind enums
- state: state transitions (mode, prompt, preset, aspect ratio, upload, gallery)
- validation: ValidationFailure and input/precondition checks
- handlers: submit_mockup / submit_generation
"""

from .handlers import SubmissionResult, resolve_mockup_prompt, submit_generation, submit_mockup
from .models import AppMode, GalleryKind, GeneratedImage, SessionState, UploadedImage
from .validation import SessionBusy, ValidationFailure

__all__ = [
    "AppMode",
    "GalleryKind",
    "GeneratedImage",
    "SessionBusy",
    "SessionState",
    "SubmissionResult",
    "UploadedImage",
    "ValidationFailure",
    "resolve_mockup_prompt",
    "submit_generation",
    "submit_mockup",
]
