"""Gemini-backed document session with axiom extraction and streaming chat.

Core module for the application's intelligence and conversation handling.

Architecture Decisions:

1. **Two agents per session** - Extraction needs a structured-output agent
   that sees the PDF itself; the conversation needs a plain chat agent with
   history. The chat agent is only built once extraction succeeded, so a
   failed initialize never leaves a half-built session behind.

2. **In-memory storage** - Agno's Agent has no default persistence. Without
   storage, every run is stateless. InMemoryDb keeps the conversation for
   the lifetime of the session and disappears with it on reset.

3. **Grounding through additional context** - The text extracted locally
   with pypdf is attached to the chat agent once, so follow-up questions
   never re-send the PDF. Scanned PDFs with no extractable text are the
   exception: the file itself rides along as additional input on each run.

4. **Explicit session object** - One SessionManager per caller (a page
   client or an API session). No module-level singleton holds a session.

5. **Streaming iterator** - Agno returns run events with metadata. We yield
   only content strings, in emission order, and translate provider failures
   into the session error kinds.
"""

import base64
import logging
import uuid
from collections.abc import AsyncIterator

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.exceptions import ModelProviderError
from agno.media import File
from agno.models.google import Gemini
from agno.models.message import Message as AgnoMessage

from axiom_reader.agent.config import SessionConfig, get_session_config
from axiom_reader.agent.prompts import (
    build_attachment_note,
    build_document_context,
    build_extraction_prompt,
    build_instructions,
    build_query,
)
from axiom_reader.errors import (
    AuthenticationRequired,
    RequestInFlight,
    SessionError,
    SessionNotInitialized,
    UpstreamError,
)
from axiom_reader.models.schemas import Axiom, Document, Language, SessionState
from axiom_reader.parsing.axiom_parser import AxiomBatch, parse_axioms
from axiom_reader.parsing.pdf_parser import PDF_MIME_TYPE

logger = logging.getLogger(__name__)

# Agno run event and status names
_CONTENT_EVENT = "RunContent"
_ERROR_EVENT = "RunError"
_ERROR_STATUS = "ERROR"

# Substrings of Gemini error messages that mean the key is missing or bad
_AUTH_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "unauthenticated",
    "permission denied",
    "requested entity was not found",
)
_AUTH_STATUS_CODES = (401, 403)


def classify_upstream_failure(message: str, status_code: int | None = None) -> UpstreamError:
    """Map a provider failure to AuthenticationRequired or UpstreamError."""
    lowered = message.lower()
    if status_code in _AUTH_STATUS_CODES or any(m in lowered for m in _AUTH_MARKERS):
        return AuthenticationRequired(f"API key missing or rejected: {message}")
    return UpstreamError(f"Connection failed: {message}")


def _pdf_file(document: Document) -> File:
    return File(
        content=base64.b64decode(document.base64),
        mime_type=PDF_MIME_TYPE,
        filename=document.name,
    )


def _from_provider_error(error: ModelProviderError) -> UpstreamError:
    message = getattr(error, "message", None) or str(error)
    return classify_upstream_failure(message, getattr(error, "status_code", None))


class SessionManager:
    """A conversation bound to one uploaded document.

    Lifecycle: UNINITIALIZED -> initialize() -> ACTIVE -> reset() ->
    UNINITIALIZED. A failed initialize leaves the manager UNINITIALIZED.
    Only one initialize or query may be in flight at a time.
    """

    def __init__(self, config: SessionConfig | None = None) -> None:
        """Initialize the session manager.

        Args:
            config: Optional session configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_session_config()
        self._agent: Agent | None = None
        self._document: Document | None = None
        self._language: Language | None = None
        self._axioms: list[Axiom] = []
        self._session_id: str | None = None
        self._busy = False
        # Bumped on every reset; streams from an older generation stop
        self._generation = 0

    @property
    def state(self) -> SessionState:
        if self._agent is None:
            return SessionState.UNINITIALIZED
        return SessionState.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def language(self) -> Language | None:
        return self._language

    @property
    def axioms(self) -> list[Axiom]:
        return list(self._axioms)

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def has_api_key(self) -> bool:
        return self._config.has_api_key

    def set_api_key(self, api_key: str) -> None:
        """Replace the credential used for the next initialize."""
        self._config = self._config.model_copy(update={"api_key": api_key.strip()})
        logger.info("API key updated")

    def _create_model(self) -> Gemini:
        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
        )

    def _create_extraction_agent(self, language: Language) -> Agent:
        """Create the one-shot agent that reads the PDF and returns axioms.

        The structured schema is requested upstream, but the raw text is
        kept (parse_response=False) so it can be normalized and validated
        locally.
        """
        return Agent(
            model=self._create_model(),
            instructions=build_instructions(language),
            output_schema=AxiomBatch,
            parse_response=False,
            markdown=False,
        )

    def _create_chat_agent(self, document: Document, language: Language, session_id: str) -> Agent:
        """Create the conversational agent grounded in the document.

        The locally extracted text is the grounding context. A PDF without
        extractable text (a scan) is attached to every run instead, so the
        model reads the pages itself.
        """
        additional_input = None
        if not document.text.strip():
            logger.warning(f"No extractable text in {document.name}; attaching the PDF to each run")
            additional_input = [
                AgnoMessage(
                    role="user",
                    content=build_attachment_note(document.name),
                    files=[_pdf_file(document)],
                )
            ]

        return Agent(
            model=self._create_model(),
            db=InMemoryDb(),
            session_id=session_id,
            instructions=build_instructions(language),
            additional_context=build_document_context(document.name, document.text),
            additional_input=additional_input,
            # History config: replay the last runs so follow-ups keep context
            add_history_to_context=True,
            num_history_runs=self._config.num_history_runs,
            markdown=True,
        )

    async def initialize(self, document: Document, language: Language = Language.EN) -> list[Axiom]:
        """Extract the document's axioms and open a session bound to it.

        Any previous session is discarded first, so histories never merge.

        Args:
            document: The uploaded PDF.
            language: Language for the axioms and all later answers.

        Returns:
            Exactly six axioms.

        Raises:
            AuthenticationRequired: If the API key is missing or rejected.
            UpstreamError: If the model API call fails.
            MalformedResponse: If the extraction cannot be parsed.
            RequestInFlight: If another request is still pending.
        """
        if self._busy:
            raise RequestInFlight("A request is already in progress")

        self.reset()

        if not self._config.has_api_key:
            logger.warning("Initialize attempted without an API key")
            raise AuthenticationRequired("No API key configured")

        generation = self._generation
        self._busy = True
        try:
            extractor = self._create_extraction_agent(language)
            pdf_file = _pdf_file(document)

            logger.info(f"Extracting axioms from {document.name} ({document.pages} pages)")
            try:
                response = await extractor.arun(
                    build_extraction_prompt(language),
                    files=[pdf_file],
                )
            except ModelProviderError as e:
                logger.error(f"Axiom extraction failed: {e}")
                raise _from_provider_error(e) from e
            except Exception as e:
                logger.error(f"Axiom extraction failed: {e}")
                raise classify_upstream_failure(str(e)) from e

            if getattr(response, "status", None) == _ERROR_STATUS:
                logger.error(f"Axiom extraction run errored: {response.content}")
                raise classify_upstream_failure(str(response.content or "Unknown error"))

            axioms = parse_axioms(response.content)

            if generation != self._generation:
                raise SessionNotInitialized("Session was reset during initialization")

            session_id = str(uuid.uuid4())
            self._agent = self._create_chat_agent(document, language, session_id)
            self._session_id = session_id
            self._document = document
            self._language = language
            self._axioms = axioms
            logger.info(f"Session {session_id} active for {document.name}")
            return list(axioms)
        finally:
            if generation == self._generation:
                self._busy = False

    def query(self, text: str) -> AsyncIterator[str]:
        """Ask a question about the bound document.

        Fails before returning if no session is active, so no chunk is ever
        produced for an uninitialized session.

        Args:
            text: The user's question.

        Returns:
            A single-pass async iterator of response fragments. Concatenated
            in order they form the full answer. Iteration may raise
            UpstreamError after some fragments were already produced.

        Raises:
            SessionNotInitialized: If no session is active.
            RequestInFlight: If another request is still pending.
        """
        if self._agent is None:
            logger.error("Query attempted without an active session")
            raise SessionNotInitialized("Session not initialized")
        if self._busy:
            raise RequestInFlight("A request is already in progress")

        return self._stream(self._agent, self._generation, text)

    async def _stream(self, agent: Agent, generation: int, text: str) -> AsyncIterator[str]:
        if self._busy:
            raise RequestInFlight("A request is already in progress")

        self._busy = True
        try:
            try:
                async for event in agent.arun(build_query(text), stream=True):
                    if generation != self._generation:
                        logger.info("Session reset mid-stream; discarding remaining chunks")
                        return

                    kind = getattr(event, "event", None)
                    if kind == _ERROR_EVENT:
                        raise classify_upstream_failure(str(event.content or "Unknown error"))
                    if kind is not None and kind != _CONTENT_EVENT:
                        continue

                    content = getattr(event, "content", None)
                    if isinstance(content, str) and content:
                        yield content
            except SessionError:
                raise
            except ModelProviderError as e:
                logger.error(f"Stream failed: {e}")
                raise _from_provider_error(e) from e
            except Exception as e:
                logger.error(f"Stream failed: {e}")
                raise classify_upstream_failure(str(e)) from e
        finally:
            if generation == self._generation:
                self._busy = False

    def reset(self) -> None:
        """Discard the session and its document. Safe to call any time."""
        if self._agent is not None:
            logger.info(f"Resetting session {self._session_id}")
        self._generation += 1
        self._agent = None
        self._document = None
        self._language = None
        self._axioms = []
        self._session_id = None
        self._busy = False
