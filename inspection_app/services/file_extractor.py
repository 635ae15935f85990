from __future__ import annotations

from io import BytesIO

from docx import Document
from pypdf import PdfReader

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCX_EXTENSION = ".docx"


def extract_pdf_text(data: bytes) -> str:
    reader = PdfReader(BytesIO(data))
    pages = []
    for p in reader.pages:
        pages.append(p.extract_text() or "")
    return "\n".join(pages).strip()


def extract_docx_text(data: bytes) -> str:
    doc = Document(BytesIO(data))
    parts = [p.text for p in doc.paragraphs if p.text and p.text.strip()]
    return "\n".join(parts).strip()


def is_docx(content_type: str, filename: str) -> bool:
    return content_type == DOCX_MEDIA_TYPE or (filename or "").lower().endswith(DOCX_EXTENSION)


def extract_document_text(data: bytes, content_type: str = "", filename: str = "") -> str:
    """
    Pick the extraction path from the declared media type.

    PDF media type goes through pypdf, Word documents (media type or ``.docx``
    name) through python-docx, everything else is decoded as UTF-8 text.
    """
    content_type = (content_type or "").split(";")[0].strip().lower()

    if content_type == PDF_MEDIA_TYPE:
        return extract_pdf_text(data)

    if is_docx(content_type, filename):
        return extract_docx_text(data)

    return data.decode("utf-8", errors="replace")
