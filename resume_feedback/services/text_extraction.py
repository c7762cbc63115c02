import io
import os
import logging

import PyPDF2
import docx

from resume_feedback.core.exceptions import RequestValidationFailed

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".docx", ".txt"}


def validate_filename(filename: str) -> str:
    """Return the lower-cased extension, or raise if the type is not accepted."""
    file_ext = os.path.splitext(filename or "")[1].lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise RequestValidationFailed(
            f"File type {file_ext or '(none)'} not allowed. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )
    return file_ext


def extract_text(data: bytes, file_ext: str) -> str:
    """Extract plain text from an uploaded resume."""
    text = ""
    try:
        if file_ext == ".pdf":
            reader = PyPDF2.PdfReader(io.BytesIO(data))
            for page in reader.pages:
                text += (page.extract_text() or "") + "\n"
        elif file_ext == ".docx":
            document = docx.Document(io.BytesIO(data))
            for paragraph in document.paragraphs:
                text += paragraph.text + "\n"
        elif file_ext == ".txt":
            text = data.decode("utf-8", errors="ignore")
    except Exception as e:
        logger.warning(f"Text extraction failed for {file_ext} upload: {e}")
        raise RequestValidationFailed(f"Could not read {file_ext} file: {e}")

    text = text.strip()
    if not text:
        raise RequestValidationFailed("No text could be extracted from the uploaded file")
    return text
