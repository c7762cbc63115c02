import pytest

from resume_feedback.core.exceptions import RequestValidationFailed
from resume_feedback.services.text_extraction import extract_text, validate_filename


@pytest.mark.parametrize("name, ext", [("cv.PDF", ".pdf"), ("cv.docx", ".docx"), ("notes.txt", ".txt")])
def test_accepted_extensions(name, ext):
    assert validate_filename(name) == ext


@pytest.mark.parametrize("name", ["cv.doc", "cv", "", "photo.png"])
def test_rejected_extensions(name):
    with pytest.raises(RequestValidationFailed):
        validate_filename(name)


def test_plain_text_is_stripped():
    assert extract_text(b"\n  Jane Doe\nEngineer  \n", ".txt") == "Jane Doe\nEngineer"


def test_corrupt_pdf_is_a_validation_error():
    with pytest.raises(RequestValidationFailed, match="Could not read"):
        extract_text(b"definitely not a pdf", ".pdf")
