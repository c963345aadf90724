"""MockupAI Studio — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The server is a proxy between the browser page and the Gemini API:

- **The credential** is loaded server-side by
  :class:`~mockupstudio.core.config.MockupStudioConfig` and never sent to the
  browser.
- **Generation** is performed by
  :class:`~mockupstudio.core.generation_client.GenerationClient`, created once
  at startup.
- **Session state** (mode, upload, prompt, preset, aspect ratio, busy flag,
  gallery) lives in an in-memory
  :class:`~mockupstudio.api.session_store.SessionStore`.  Nothing is persisted.
- **The HTML page** is served as a raw ``HTMLResponse``; everything dynamic is
  fetched from the API.

Endpoints
---------
========  ================================================  ===========================
Method    Path                                              Purpose
========  ================================================  ===========================
GET       ``/``                                             Serve the main HTML page
GET       ``/api/config``                                   Presets, ratios, modes
POST      ``/api/sessions``                                 Create a session
GET       ``/api/sessions/{id}``                            Session snapshot
DELETE    ``/api/sessions/{id}``                            Discard a session
PUT       ``/api/sessions/{id}/mode``                       Switch mode (clears prompt)
PUT       ``/api/sessions/{id}/prompt``                     Set free-text prompt
PUT       ``/api/sessions/{id}/preset``                     Select preset
PUT       ``/api/sessions/{id}/aspect-ratio``               Select aspect ratio
POST      ``/api/sessions/{id}/upload``                     Upload logo (data URI)
POST      ``/api/sessions/{id}/mockup``                     Generate a mockup
POST      ``/api/sessions/{id}/generate``                   Generate from text
GET       ``/api/sessions/{id}/gallery``                    Paginated gallery
GET       ``/api/sessions/{id}/gallery/{img}/download``     Download an image
========  ================================================  ===========================

Usage
-----
CLI (installed entry point)::

    mockupstudio

Direct invocation::

    python -m mockupstudio.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from mockupstudio import __version__
from mockupstudio.api.models import (
    AspectRatioRequest,
    ModeRequest,
    PresetRequest,
    PromptRequest,
    UploadRequest,
)
from mockupstudio.api.session_store import SessionStore, paginate_gallery
from mockupstudio.core.config import config
from mockupstudio.core.data_uri import download_filename, parse_data_uri
from mockupstudio.core.generation_client import (
    ACCEPTED_IMAGE_TYPES,
    AspectRatio,
    GenerationClient,
)
from mockupstudio.core.presets import DEFAULT_PRESET_ID, MOCKUP_PRESETS
from mockupstudio.ui.handlers import SubmissionResult, submit_generation, submit_mockup
from mockupstudio.ui.models import AppMode, SessionState
from mockupstudio.ui.state import (
    select_aspect_ratio,
    select_preset,
    set_prompt,
    switch_mode,
    upload_image,
)
from mockupstudio.ui.validation import SessionBusy, ValidationFailure

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle — generation client and session store.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Builds the :class:`GenerationClient` (failing fast if the API key is
        missing) and an empty :class:`SessionStore`, both stored on
        ``app.state``.

    On shutdown:
        Drops every session.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    app.state.generation_client = GenerationClient(config)
    app.state.sessions = SessionStore(max_sessions=config.max_sessions)
    logger.info("GenerationClient and SessionStore initialised.")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    app.state.sessions.clear()
    logger.info("Sessions cleared on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="MockupAI Studio",
    description="Logo mockups and text-to-image generation backed by Gemini and Imagen.",
    version=__version__,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _get_session(request: Request, session_id: str) -> SessionState:
    """Look up a session or raise 404."""
    state = request.app.state.sessions.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def _session_response(session_id: str, state: SessionState) -> dict:
    return {"session_id": session_id, **state.to_dict()}


def _submission_response(session_id: str, result: SubmissionResult) -> dict:
    """Turn a SubmissionResult into a response, or raise 502 on failure."""
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return {
        "success": True,
        "image": result.image.to_dict(),
        "session": _session_response(session_id, result.state),
    }


def _validation_http_error(error: ValidationFailure) -> HTTPException:
    status_code = 409 if isinstance(error, SessionBusy) else 400
    return HTTPException(status_code=status_code, detail=str(error))


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the main application HTML page.

    Returns:
        The HTML content of the application page.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = config.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@app.get("/api/config")
async def get_config() -> dict:
    """Return the static catalogs the page needs to render its controls.

    Returns:
        Dictionary with keys ``version``, ``modes``, ``presets``,
        ``default_preset_id``, ``aspect_ratios`` and ``accepted_mime_types``.
    """
    return {
        "version": __version__,
        "modes": [mode.value for mode in AppMode],
        "presets": [preset.to_dict() for preset in MOCKUP_PRESETS],
        "default_preset_id": DEFAULT_PRESET_ID,
        "aspect_ratios": [ratio.value for ratio in AspectRatio],
        "accepted_mime_types": list(ACCEPTED_IMAGE_TYPES),
    }


@app.post("/api/sessions")
async def create_session(request: Request) -> dict:
    """Create a new session in its initial state."""
    session_id, state = request.app.state.sessions.create()
    return _session_response(session_id, state)


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Return a snapshot of the session (gallery reduced to a count)."""
    state = _get_session(request, session_id)
    return _session_response(session_id, state)


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str, request: Request) -> dict:
    """Discard a session and its gallery.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    if not request.app.state.sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"success": True, "deleted": session_id}


@app.put("/api/sessions/{session_id}/mode")
async def put_mode(session_id: str, req: ModeRequest, request: Request) -> dict:
    """Switch between mockup and image generation. Clears the prompt."""
    state = _get_session(request, session_id)
    state = switch_mode(state, req.mode)
    return _session_response(session_id, state)


@app.put("/api/sessions/{session_id}/prompt")
async def put_prompt(session_id: str, req: PromptRequest, request: Request) -> dict:
    """Set the free-text prompt."""
    state = _get_session(request, session_id)
    try:
        state = set_prompt(state, req.prompt)
    except ValidationFailure as e:
        raise _validation_http_error(e) from e
    return _session_response(session_id, state)


@app.put("/api/sessions/{session_id}/preset")
async def put_preset(session_id: str, req: PresetRequest, request: Request) -> dict:
    """Select a mockup preset. Clears the prompt.

    Raises:
        HTTPException: 400 for unknown preset ids.
    """
    state = _get_session(request, session_id)
    try:
        state = select_preset(state, req.preset_id)
    except ValidationFailure as e:
        raise _validation_http_error(e) from e
    return _session_response(session_id, state)


@app.put("/api/sessions/{session_id}/aspect-ratio")
async def put_aspect_ratio(session_id: str, req: AspectRatioRequest, request: Request) -> dict:
    """Select the aspect ratio used for text-to-image requests."""
    state = _get_session(request, session_id)
    state = select_aspect_ratio(state, req.aspect_ratio)
    return _session_response(session_id, state)


@app.post("/api/sessions/{session_id}/upload")
async def post_upload(session_id: str, req: UploadRequest, request: Request) -> dict:
    """Attach an uploaded logo/design to the session.

    Raises:
        HTTPException: 400 if the data URI is not a PNG, JPEG or WEBP image.
    """
    state = _get_session(request, session_id)
    try:
        state = upload_image(state, req.data_uri)
    except ValidationFailure as e:
        raise _validation_http_error(e) from e
    return _session_response(session_id, state)


@app.post("/api/sessions/{session_id}/mockup")
async def post_mockup(session_id: str, request: Request) -> dict:
    """Generate a product mockup from the uploaded image.

    The instruction is the free-text prompt if set, otherwise the selected
    preset's template.

    Returns:
        Dictionary with ``success``, ``image`` (new gallery entry) and
        ``session``.

    Raises:
        HTTPException: 400 without an upload, 409 while busy, 502 if
            generation fails.
    """
    state = _get_session(request, session_id)
    try:
        result = await submit_mockup(state, request.app.state.generation_client)
    except ValidationFailure as e:
        raise _validation_http_error(e) from e
    return _submission_response(session_id, result)


@app.post("/api/sessions/{session_id}/generate")
async def post_generate(session_id: str, request: Request) -> dict:
    """Generate an image from the session's prompt and aspect ratio.

    Raises:
        HTTPException: 400 for an empty prompt, 409 while busy, 502 if
            generation fails.
    """
    state = _get_session(request, session_id)
    try:
        result = await submit_generation(state, request.app.state.generation_client)
    except ValidationFailure as e:
        raise _validation_http_error(e) from e
    return _submission_response(session_id, result)


@app.get("/api/sessions/{session_id}/gallery")
async def get_gallery(
    session_id: str,
    request: Request,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """Return a page of the session gallery, newest first."""
    state = _get_session(request, session_id)
    return paginate_gallery(state.gallery, page, per_page)


@app.get("/api/sessions/{session_id}/gallery/{image_id}/download")
async def download_image(session_id: str, image_id: str, request: Request) -> Response:
    """Return the image bytes as an attachment named ``mockup-ai-<id>.<ext>``.

    Raises:
        HTTPException: 404 if the session or image is not found.
    """
    state = _get_session(request, session_id)
    image = state.find_image(image_id)
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")

    media_type, data = parse_data_uri(image.url)
    filename = download_filename(image.id, media_type)
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~mockupstudio.core.config.config`
    (``MOCKUPSTUDIO_SERVER_HOST`` / ``MOCKUPSTUDIO_SERVER_PORT``).  Defaults
    to ``0.0.0.0:7860``.  The API key is checked before the server starts.

    This function is registered as the ``mockupstudio`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config.require_api_key()

    uvicorn.run(
        "mockupstudio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
