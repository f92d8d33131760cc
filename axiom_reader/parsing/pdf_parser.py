"""PDF validation and text extraction using pypdf.

Turns an uploaded file into a Document: checks the type, size and header,
opens it with pypdf, and extracts the text used to ground the chat.
"""

import base64
import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from axiom_reader.errors import DocumentValidationError
from axiom_reader.models.schemas import Document

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_MIME_TYPE = "application/pdf"
GENERIC_MIME_TYPES = ("application/octet-stream", "binary/octet-stream")


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Combined text content from all pages.
        pages: Total number of pages in the document.
    """

    text: str
    pages: int = Field(ge=0)


class PDFParseError(DocumentValidationError):
    """Raised when PDF parsing fails."""

    pass


def is_pdf_upload(filename: str | None, content_type: str | None) -> bool:
    """Check the declared type of an upload before reading it.

    A specific MIME type decides on its own; a missing or generic one
    falls back to the extension.
    """
    if not filename:
        return False
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime == PDF_MIME_TYPE:
        return True
    if mime and mime not in GENERIC_MIME_TYPES:
        return False
    return filename.lower().endswith(".pdf")


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text and page count.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue

    text = "\n\n".join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(text=text, pages=pages)


def load_document(
    filename: str | None,
    file_content: bytes | None,
    content_type: str | None = None,
) -> Document:
    """Validate an upload and capture it as a Document.

    Args:
        filename: Original filename.
        file_content: Raw bytes of the file.
        content_type: MIME type declared by the client, if any.

    Returns:
        Document carrying the base64 payload and extracted text.

    Raises:
        DocumentValidationError: If the file is missing or not a PDF.
        PDFParseError: If the PDF is empty, too large, or corrupt.
    """
    if not filename or file_content is None:
        raise DocumentValidationError("No file provided")

    if not is_pdf_upload(filename, content_type):
        raise DocumentValidationError("Only PDF files are accepted")

    pdf_content = parse_pdf(file_content)

    return Document(
        name=filename,
        base64=base64.b64encode(file_content).decode("ascii"),
        pages=pdf_content.pages,
        text=pdf_content.text,
    )
