"""State transitions for MockupAI Studio sessions.

Every function here takes a :class:`SessionState` plus input and returns the
updated state, so transitions can be tested without an HTTP client.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from mockupstudio.core.generation_client import AspectRatio

from .models import AppMode, GeneratedImage, SessionState
from .validation import validate_preset_id, validate_prompt_content, validate_uploaded_image

logger = logging.getLogger(__name__)


def new_session_state() -> SessionState:
    """Create a session in its initial state (mockup mode, mug preset, 1:1)."""
    return SessionState()


def switch_mode(state: SessionState, mode: AppMode | str) -> SessionState:
    """Switch panels.

    The free-text prompt is cleared; the uploaded image and gallery are kept.
    """
    state.mode = AppMode(mode)
    state.prompt = ""
    logger.debug(f"Switched mode to {state.mode.value}")
    return state


def set_prompt(state: SessionState, prompt: str) -> SessionState:
    """Replace the free-text prompt."""
    validate_prompt_content(prompt)
    state.prompt = prompt
    return state


def select_preset(state: SessionState, preset_id: str) -> SessionState:
    """Select a mockup preset and clear the custom prompt.

    Raises:
        ValidationFailure: For unknown preset ids
    """
    validate_preset_id(preset_id)
    state.selected_preset_id = preset_id
    state.prompt = ""
    return state


def select_aspect_ratio(state: SessionState, aspect_ratio: AspectRatio | str) -> SessionState:
    """Select the ratio used for text-to-image requests."""
    state.aspect_ratio = AspectRatio(aspect_ratio)
    return state


def upload_image(state: SessionState, data_uri: str) -> SessionState:
    """Validate an uploaded image and attach it to the session.

    Raises:
        ValidationFailure: If the upload is not an accepted image
    """
    state.uploaded_image = validate_uploaded_image(data_uri)
    logger.info(f"Stored upload ({state.uploaded_image.mime_type})")
    return state


@contextmanager
def request_in_flight(state: SessionState) -> Iterator[SessionState]:
    """Hold the busy flag for the duration of one request.

    The flag is cleared on exit whether the request succeeded, failed or
    raised.
    """
    state.busy = True
    try:
        yield state
    finally:
        state.busy = False


def prepend_to_gallery(state: SessionState, image: GeneratedImage) -> SessionState:
    """Put a new result at the head of the gallery.

    A new list is assigned; existing entries are never modified.
    """
    state.gallery = [image, *state.gallery]
    return state
