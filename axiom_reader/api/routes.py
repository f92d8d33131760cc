"""Session endpoints: upload a PDF to open a session, delete to reset it.

Handles file upload, validation, axiom extraction, and session bookkeeping.
"""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status

from axiom_reader.api.documents import DocumentUrlRegistry, get_document_registry
from axiom_reader.api.registry import SessionRegistry, get_session_registry
from axiom_reader.errors import (
    AuthenticationRequired,
    DocumentValidationError,
    MalformedResponse,
    SessionError,
    UpstreamError,
)
from axiom_reader.models.schemas import Language, SessionCreatedResponse
from axiom_reader.parsing.pdf_parser import MAX_FILE_SIZE, is_pdf_upload, load_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_file_type(filename: str | None, content_type: str | None) -> str:
    """Validate that the upload is declared as a PDF.

    Args:
        filename: The uploaded filename.
        content_type: The MIME type sent by the client.

    Returns:
        The validated filename.

    Raises:
        HTTPException: 400 if the filename is missing or the type is wrong.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not is_pdf_upload(filename, content_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.

    Returns:
        File content as bytes.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


def _to_http_error(error: SessionError) -> HTTPException:
    """Map a session failure to the HTTP status the client sees."""
    if isinstance(error, AuthenticationRequired):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key missing or invalid. Please provide a valid API key.",
        )
    if isinstance(error, MalformedResponse):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not extract axioms: {error}",
        )
    if isinstance(error, UpstreamError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(error),
        )
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=str(error),
    )


@router.post("", response_model=SessionCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    file: UploadFile,
    language: Language = Form(Language.EN),
    sessions: SessionRegistry = Depends(get_session_registry),
    documents: DocumentUrlRegistry = Depends(get_document_registry),
) -> SessionCreatedResponse:
    """Upload a PDF, extract its axioms, and open a chat session on it.

    Args:
        file: The uploaded PDF file (multipart/form-data).
        language: Language for the axioms and answers.

    Returns:
        SessionCreatedResponse with session id, axioms, and preview URL.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        401: API key missing or rejected.
        413: File exceeds 10MB limit.
        502: Model API failure or unparseable extraction.
    """
    filename = _validate_file_type(file.filename, file.content_type)
    content = await _read_and_validate_size(file)

    try:
        document = load_document(filename, content, file.content_type)
    except DocumentValidationError as e:
        logger.warning(f"Rejected upload {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    manager = sessions.create()
    try:
        axioms = await manager.initialize(document, language)
    except SessionError as e:
        logger.warning(f"Session initialization failed for {filename}: {e}")
        raise _to_http_error(e) from e

    document_url = documents.create_url(document)
    session_id = sessions.register(manager, document_url)
    logger.info(f"Opened session {session_id} for {filename} ({document.pages} pages)")

    return SessionCreatedResponse(
        session_id=session_id,
        filename=filename,
        pages=document.pages,
        language=language,
        axioms=axioms,
        document_url=document_url,
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    sessions: SessionRegistry = Depends(get_session_registry),
    documents: DocumentUrlRegistry = Depends(get_document_registry),
) -> None:
    """Reset a session and release its document. Unknown ids are a no-op."""
    documents.revoke_url(sessions.remove(session_id))
