"""Submission handlers: the session orchestrator.

Each handler checks its preconditions, holds the session's busy flag while
the single remote call runs, and reports the outcome through a
:class:`SubmissionResult` instead of a blocking alert. Generation failures
are logged and collapsed into one generic message per operation.
"""

import logging
from dataclasses import dataclass
from typing import Any

from mockupstudio.core.generation_client import GenerationFailure
from mockupstudio.core.presets import FALLBACK_MOCKUP_PROMPT, get_preset

from .models import GalleryKind, GeneratedImage, SessionState
from .state import prepend_to_gallery, request_in_flight
from .validation import validate_generation_ready, validate_mockup_ready

logger = logging.getLogger(__name__)

MOCKUP_FAILURE_MESSAGE = "Failed to generate mockup. Please try again."
GENERATION_FAILURE_MESSAGE = "Failed to generate image. Please try again."


@dataclass
class SubmissionResult:
    """Outcome of a submission.

    Exactly one of ``image`` and ``error`` is set.
    """

    state: SessionState
    image: GeneratedImage | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_mockup_prompt(prompt: str, preset_id: str) -> str:
    """Pick the instruction sent with a mockup request.

    A non-empty custom prompt replaces the preset template entirely; it is
    never appended to it.

    Args:
        prompt: Free-text prompt from the session
        preset_id: Selected preset

    Returns:
        The trimmed custom prompt, or the preset template when it is empty
    """
    custom = prompt.strip()
    if custom:
        return custom

    preset = get_preset(preset_id)
    if preset is None:
        logger.warning(f"Unknown preset {preset_id!r}, using fallback prompt")
        return FALLBACK_MOCKUP_PROMPT
    return preset.prompt_template


async def submit_mockup(state: SessionState, client: Any) -> SubmissionResult:
    """Composite the uploaded logo onto a product via the image-edit model.

    Args:
        state: Session state with an uploaded image
        client: GenerationClient (or anything with the same async methods)

    Returns:
        SubmissionResult with the new gallery entry, or the generic error

    Raises:
        SessionBusy: If a request is already in flight
        ValidationFailure: If no image has been uploaded
    """
    validate_mockup_ready(state)

    final_prompt = resolve_mockup_prompt(state.prompt, state.selected_preset_id)
    upload = state.uploaded_image

    with request_in_flight(state):
        logger.info(f"Submitting mockup with prompt: {final_prompt[:80]}")
        try:
            url = await client.edit_image_with_prompt(upload.data, upload.mime_type, final_prompt)
        except GenerationFailure as e:
            logger.error(f"Mockup submission failed: {e}", exc_info=True)
            return SubmissionResult(state=state, error=MOCKUP_FAILURE_MESSAGE)

    image = GeneratedImage.create(url=url, prompt=final_prompt, kind=GalleryKind.MOCKUP)
    prepend_to_gallery(state, image)
    logger.info(f"Mockup {image.id} added to gallery ({len(state.gallery)} items)")
    return SubmissionResult(state=state, image=image)


async def submit_generation(state: SessionState, client: Any) -> SubmissionResult:
    """Generate a new image from the session's prompt and aspect ratio.

    Args:
        state: Session state with a non-empty prompt
        client: GenerationClient (or anything with the same async methods)

    Returns:
        SubmissionResult with the new gallery entry, or the generic error

    Raises:
        SessionBusy: If a request is already in flight
        ValidationFailure: If the prompt is empty
    """
    validate_generation_ready(state)

    prompt = state.prompt

    with request_in_flight(state):
        logger.info(f"Submitting generation ({state.aspect_ratio.value}): {prompt[:80]}")
        try:
            url = await client.generate_from_text(prompt, state.aspect_ratio)
        except GenerationFailure as e:
            logger.error(f"Image generation submission failed: {e}", exc_info=True)
            return SubmissionResult(state=state, error=GENERATION_FAILURE_MESSAGE)

    image = GeneratedImage.create(url=url, prompt=prompt, kind=GalleryKind.GENERATION)
    prepend_to_gallery(state, image)
    logger.info(f"Image {image.id} added to gallery ({len(state.gallery)} items)")
    return SubmissionResult(state=state, image=image)
