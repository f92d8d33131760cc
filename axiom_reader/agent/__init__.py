"""Agno agent logic for the document session.

Handles axiom extraction and grounded conversation with Gemini.

Responsibilities:
    - Session lifecycle (initialize, query, reset)
    - Structured axiom extraction from the uploaded PDF
    - Conversation context seeded with the document text
    - Streaming token generation and upstream error translation

Leverages the Agno framework for model access and conversation history.
Maintains clean separation from the HTTP and UI layers.
"""

from axiom_reader.agent.config import SessionConfig, get_session_config
from axiom_reader.agent.session_manager import SessionManager

__all__ = ["SessionConfig", "SessionManager", "get_session_config"]
