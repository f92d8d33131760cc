"""View controller: sequences user actions into session calls.

Holds everything the page renders (state, axioms, transcript, errors) and
has no dependency on NiceGUI, so the interaction contract can be tested
without a browser. The page calls the async actions and re-renders
whenever the on_change callback fires.
"""

import logging
from collections.abc import Awaitable, Callable

from axiom_reader.agent.session_manager import SessionManager
from axiom_reader.api.documents import DocumentUrlRegistry
from axiom_reader.errors import (
    AuthenticationRequired,
    DocumentValidationError,
    SessionError,
    SessionNotInitialized,
)
from axiom_reader.models.schemas import AppState, Axiom, Language, Message, Role, View
from axiom_reader.parsing.pdf_parser import is_pdf_upload, load_document
from axiom_reader.ui.translations import translate

logger = logging.getLogger(__name__)


class ViewController:
    """Page state for one browser client, bound to one SessionManager."""

    def __init__(
        self,
        manager: SessionManager,
        documents: DocumentUrlRegistry,
        language: Language = Language.EN,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.manager = manager
        self.documents = documents
        self.language = language
        self.on_change = on_change

        self.state = AppState.IDLE
        self.view = View.RESEARCH
        self.axioms: list[Axiom] = []
        self.messages: list[Message] = []
        self.file_name = ""
        self.document_url: str | None = None
        self.error = ""
        self.auth_required = not manager.has_api_key
        self.is_sending = False
        # Bumped by new_session; late stream output from an older epoch is dropped
        self._epoch = 0

    def t(self, key: str) -> str:
        return translate(self.language, key)

    @property
    def is_ready(self) -> bool:
        return self.state is AppState.READY

    @property
    def is_working(self) -> bool:
        return self.state in (AppState.UPLOADING, AppState.ANALYZING)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def set_language(self, language: Language) -> None:
        """Switch UI language. Applies to the next session's answers too."""
        self.language = language
        self._notify()

    def toggle_language(self) -> None:
        self.set_language(Language.AR if self.language is Language.EN else Language.EN)

    def set_view(self, view: View) -> None:
        if view is View.DOCUMENT and not self.is_ready:
            return
        self.view = view
        self._notify()

    def submit_api_key(self, api_key: str) -> bool:
        """Apply a key entered by the user. Returns False for a blank key."""
        if not api_key or not api_key.strip():
            return False
        self.manager.set_api_key(api_key)
        self.auth_required = False
        self.error = ""
        self._notify()
        return True

    async def upload(
        self,
        filename: str | None,
        content_type: str | None,
        read: Callable[[], Awaitable[bytes]],
    ) -> None:
        """Validate, read, and analyze an uploaded file.

        Non-PDF input is rejected before anything is read and without
        touching the session manager.
        If new_session runs while the file is being read or analyzed, the
        outcome is dropped and the cleared page is left as it is.
        """
        if self.is_working:
            logger.warning("Upload ignored: another document is being processed")
            return

        if not filename or not is_pdf_upload(filename, content_type):
            self.error = self.t("error_not_pdf")
            self._notify()
            return

        epoch = self._epoch
        previous_state = self.state
        self.error = ""
        self.file_name = filename
        self.state = AppState.UPLOADING
        self._notify()

        try:
            content = await read()
            if epoch != self._epoch:
                return
            document = load_document(filename, content, content_type)
        except DocumentValidationError as e:
            logger.warning(f"Rejected upload {filename}: {e}")
            self.state = previous_state
            self.file_name = ""
            self.error = f"{self.t('error_not_pdf')} {e}"
            self._notify()
            return

        self.documents.revoke_url(self.document_url)
        self.document_url = self.documents.create_url(document)
        self.state = AppState.ANALYZING
        self._notify()

        try:
            axioms = await self.manager.initialize(document, self.language)
        except SessionError as e:
            if epoch != self._epoch:
                logger.info(f"Discarding analysis of {filename}: session was reset")
                return
            logger.error(f"Initialization failed: {e}")
            if isinstance(e, AuthenticationRequired):
                self.auth_required = True
                self._fail(f"{self.t('error_connection')} {self.t('error_reselect_key')}")
            else:
                self._fail(f"{self.t('error_connection')} {e}")
        else:
            if epoch != self._epoch:
                return
            self.axioms = axioms
            self.messages = [Message(role=Role.ASSISTANT, content=self.t("greeting"))]
            self.view = View.RESEARCH
            self.state = AppState.READY
        self._notify()

    def _fail(self, message: str) -> None:
        self.documents.revoke_url(self.document_url)
        self.document_url = None
        self.error = message
        self.state = AppState.ERROR

    async def send_message(self, text: str) -> None:
        """Send a question and render the answer as it streams in.

        A user entry and an empty assistant placeholder are appended first;
        each chunk then extends the placeholder and triggers a re-render.
        """
        text = text.strip()
        if not text or self.is_sending or not self.is_ready:
            return

        epoch = self._epoch
        self.messages.append(Message(role=Role.USER, content=text))
        placeholder = Message(role=Role.ASSISTANT, content="")
        self.messages.append(placeholder)
        self.is_sending = True
        self._notify()

        try:
            async for chunk in self.manager.query(text):
                if epoch != self._epoch:
                    break
                placeholder.content += chunk
                self._notify()
        except SessionNotInitialized as e:
            logger.error(f"Query without an active session: {e}")
            self._append_failure(epoch, placeholder, str(e))
        except SessionError as e:
            logger.warning(f"Query failed after {len(placeholder.content)} characters: {e}")
            self._append_failure(epoch, placeholder, str(e))
        finally:
            if epoch == self._epoch:
                self.is_sending = False
                self._notify()

    def _append_failure(self, epoch: int, placeholder: Message, detail: str) -> None:
        """Keep the partial answer and add an inline failure note."""
        if epoch != self._epoch:
            return
        if not placeholder.content:
            self.messages = [m for m in self.messages if m is not placeholder]
        self.messages.append(
            Message(role=Role.ASSISTANT, content=f"{self.t('error_stream')} {detail}")
        )

    def new_session(self) -> None:
        """Reset the session and return to the upload screen."""
        self.manager.reset()
        self.documents.revoke_url(self.document_url)
        self._epoch += 1
        self.document_url = None
        self.state = AppState.IDLE
        self.view = View.RESEARCH
        self.axioms = []
        self.messages = []
        self.file_name = ""
        self.error = ""
        self.is_sending = False
        self._notify()
