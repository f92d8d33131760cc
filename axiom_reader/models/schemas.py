from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Axioms extracted per document
AXIOM_COUNT = 6


class Language(str, Enum):
    """Supported interface and response languages."""

    EN = "EN"
    AR = "AR"

    @property
    def display_name(self) -> str:
        return "Arabic" if self is Language.AR else "English"

    @property
    def is_rtl(self) -> bool:
        return self is Language.AR


class SessionState(str, Enum):
    """Lifecycle of a session manager."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class AppState(str, Enum):
    """What the page is currently showing."""

    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    READY = "ready"
    ERROR = "error"


class View(str, Enum):
    RESEARCH = "research"
    DOCUMENT = "document"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Document(BaseModel):
    """An uploaded PDF, immutable once captured.

    Attributes:
        name: Display name (original filename).
        base64: Base64-encoded file bytes sent to the model.
        pages: Number of pages in the document.
        text: Text extracted locally, used to ground follow-up questions.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    base64: str = Field(..., min_length=1)
    pages: int = Field(default=0, ge=0)
    text: str = ""


class Axiom(BaseModel):
    """One foundational theme extracted from the document.

    Attributes:
        axiom: The conceptual title.
        definition: The explanation, written in the author's register.
    """

    model_config = ConfigDict(frozen=True)

    axiom: str
    definition: str


class Message(BaseModel):
    """A transcript entry. The last assistant entry grows while streaming."""

    role: Role
    content: str = ""


class ChatRequest(BaseModel):
    """Request payload for the chat streaming endpoint.

    Attributes:
        session_id: Session returned by POST /sessions.
        message: User's question.
    """

    session_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class SessionCreatedResponse(BaseModel):
    """Response after a document was uploaded and analyzed.

    Attributes:
        session_id: Identifier to use for chat and reset.
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        language: Language the session answers in.
        axioms: The extracted axioms.
        document_url: Where the uploaded PDF can be previewed.
    """

    session_id: str
    filename: str
    pages: int
    language: Language
    axioms: list[Axiom]
    document_url: str
