"""Document and response parsing.

Responsibilities:
    - PDF validation and text extraction with pypdf
    - Capturing uploads as immutable Documents
    - Normalizing and validating the model's axiom extraction

Output feeds the session manager: Documents go upstream, axioms come back.
"""

from axiom_reader.parsing.axiom_parser import AxiomBatch, parse_axioms, strip_code_fences
from axiom_reader.parsing.pdf_parser import (
    MAX_FILE_SIZE,
    PDFContent,
    PDFParseError,
    is_pdf_upload,
    load_document,
    parse_pdf,
)

__all__ = [
    "MAX_FILE_SIZE",
    "AxiomBatch",
    "PDFContent",
    "PDFParseError",
    "is_pdf_upload",
    "load_document",
    "parse_axioms",
    "parse_pdf",
    "strip_code_fences",
]
