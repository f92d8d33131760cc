"""Pydantic models for the session contract and the HTTP API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Document: Uploaded PDF payload and its extracted text
    - Axiom: One extracted theme (title and definition)
    - Message: Transcript entry
    - ChatRequest / StreamChunk: SSE chat contract
    - SessionCreatedResponse: Result of uploading a document
"""

from axiom_reader.models.schemas import (
    AppState,
    Axiom,
    ChatRequest,
    Document,
    Language,
    Message,
    Role,
    SessionCreatedResponse,
    SessionState,
    StreamChunk,
    StreamStatus,
    View,
)

__all__ = [
    "AppState",
    "Axiom",
    "ChatRequest",
    "Document",
    "Language",
    "Message",
    "Role",
    "SessionCreatedResponse",
    "SessionState",
    "StreamChunk",
    "StreamStatus",
    "View",
]
