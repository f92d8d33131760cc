"""Session managers held on behalf of API clients.

Each successful upload through the API creates its own SessionManager,
addressed by the session id returned to the client.
"""

import logging
from collections.abc import Callable

from axiom_reader.agent.session_manager import SessionManager

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Owns one SessionManager per API session id."""

    def __init__(self, factory: Callable[[], SessionManager] = SessionManager) -> None:
        self._factory = factory
        self._sessions: dict[str, SessionManager] = {}
        self._document_urls: dict[str, str] = {}

    def create(self) -> SessionManager:
        """Create an unregistered manager; register it once initialized."""
        return self._factory()

    def register(self, manager: SessionManager, document_url: str) -> str:
        session_id = manager.session_id
        if session_id is None:
            raise ValueError("Only active sessions can be registered")
        self._sessions[session_id] = manager
        self._document_urls[session_id] = document_url
        return session_id

    def get(self, session_id: str) -> SessionManager | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> str | None:
        """Reset and forget a session.

        Returns:
            The session's document URL, for the caller to revoke, or None
            if the session was unknown.
        """
        manager = self._sessions.pop(session_id, None)
        if manager is None:
            return None
        manager.reset()
        logger.info(f"Removed session {session_id}")
        return self._document_urls.pop(session_id, None)

    def clear(self) -> None:
        """Reset and forget every session."""
        for manager in self._sessions.values():
            manager.reset()
        self._sessions.clear()
        self._document_urls.clear()

    def __len__(self) -> int:
        return len(self._sessions)


# Module-level singleton instance
_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get or create the global session registry.

    Uses singleton pattern so every request sees the same sessions.

    Returns:
        The SessionRegistry instance.
    """
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry
