"""In-memory session storage for the MockupAI Studio API.

Sessions live only in process memory. Nothing is written to disk: restarting
the server (like reloading the page in a purely client-side app) discards every
session and its gallery.

Abandoned sessions are bounded by a least-recently-used cap, and the page
deletes its own session when it is unloaded.

The store is used from the single asyncio event loop that runs the FastAPI
app, so it needs no locking.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from mockupstudio.ui.models import GeneratedImage, SessionState
from mockupstudio.ui.state import new_session_state

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns every live :class:`SessionState`, keyed by UUID.

    Sessions are kept in least-recently-used order. When ``max_sessions`` is
    reached, creating a session drops the least recently used idle one. Busy
    sessions are never evicted.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self._sessions: OrderedDict[str, SessionState] = OrderedDict()
        self.max_sessions = max_sessions

    def create(self) -> tuple[str, SessionState]:
        """Create a session in its initial state, evicting if the store is full.

        Returns:
            Tuple of ``(session_id, state)``.
        """
        if self.max_sessions is not None:
            while len(self._sessions) >= self.max_sessions and self._evict_idle():
                pass

        session_id = str(uuid.uuid4())
        state = new_session_state()
        self._sessions[session_id] = state
        logger.info(f"Created session {session_id} ({len(self._sessions)} active)")
        return session_id, state

    def get(self, session_id: str) -> SessionState | None:
        """Return the session and mark it as recently used."""
        state = self._sessions.get(session_id)
        if state is not None:
            self._sessions.move_to_end(session_id)
        return state

    def delete(self, session_id: str) -> bool:
        """Discard a session. Returns False if it did not exist."""
        removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Deleted session {session_id} ({len(self._sessions)} active)")
        return removed

    def clear(self) -> None:
        self._sessions.clear()

    def _evict_idle(self) -> bool:
        for session_id, state in self._sessions.items():
            if not state.busy:
                del self._sessions[session_id]
                logger.info(f"Evicted idle session {session_id}")
                return True
        logger.warning(f"Session limit {self.max_sessions} reached and every session is busy")
        return False

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions


def paginate_gallery(entries: list[GeneratedImage], page: int, per_page: int) -> dict:
    """Paginate gallery entries and clamp the requested page to valid bounds.

    Args:
        entries: Gallery entries, newest first.
        page: Requested one-based page number.
        per_page: Requested items per page (at least 1).

    Returns:
        Dictionary containing ``total``, ``page``, ``per_page``, ``pages``, and
        ``images`` (serialised entries) for the resolved page.
    """
    per_page = max(per_page, 1)
    total = len(entries)
    pages = (total + per_page - 1) // per_page if total > 0 else 1
    resolved_page = min(max(page, 1), pages)

    start = (resolved_page - 1) * per_page
    end = start + per_page

    return {
        "total": total,
        "page": resolved_page,
        "per_page": per_page,
        "pages": pages,
        "images": [entry.to_dict() for entry in entries[start:end]],
    }
