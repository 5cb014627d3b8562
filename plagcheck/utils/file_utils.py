import io
import logging

from pdfminer.high_level import extract_text as extract_pdf_text
from docx import Document as DocxDocument

from plagcheck.config import ALLOWED_EXTENSIONS, MAX_FILE_WORDS

logger = logging.getLogger("plagcheck.files")


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[1].lower() if "." in (filename or "") else ""


def allowed_file(filename: str) -> bool:
    return file_extension(filename) in ALLOWED_EXTENSIONS


def extract_text_from_file(content_bytes: bytes, filename: str, max_words: int = MAX_FILE_WORDS) -> str:
    """
    Pull plain text out of an uploaded txt, pdf or docx file.
    Raises ValueError when the file cannot be read or is too long.
    """
    ext = file_extension(filename)
    try:
        if ext == "txt":
            text = content_bytes.decode("utf-8", errors="ignore")
        elif ext == "pdf":
            text = extract_pdf_text(io.BytesIO(content_bytes))
        elif ext == "docx":
            doc = DocxDocument(io.BytesIO(content_bytes))
            text = "\n".join(p.text for p in doc.paragraphs)
        else:
            raise ValueError(f"Unsupported file type: {filename}")
    except ValueError:
        raise
    except Exception as e:
        logger.warning(f"Could not read {filename}: {e}")
        raise ValueError(f"Could not read {filename}") from e

    word_count = len(text.split())
    if word_count > max_words:
        raise ValueError(f"File exceeds {max_words} words (found {word_count}).")

    return text
