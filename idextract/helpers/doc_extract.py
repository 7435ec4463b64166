import json
import logging
from typing import Dict

from django.conf import settings

from .exceptions import InvalidTextError
from .normalize import WRAPPED_TEXT_KEY, normalize
from .ocr import extract_text
from .strategies import finalize, get_strategy

# Configure logging
logger = logging.getLogger(__name__)


def extract_details_from_text(text: str, document_type: str) -> Dict[str, str]:
    """
    Turn raw OCR text into the four identity fields for ``document_type``.

    Fields no rule could resolve are returned as ``"Not found"``; an unknown
    document type gives a record where every field is ``"Not found"``.

    Raises:
        InvalidTextError: if ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise InvalidTextError(f"text must be a string, got {type(text).__name__}")

    normalized_text = normalize(text)
    record = get_strategy(document_type).extract(normalized_text)
    record = finalize(record)
    logger.debug(f"Extraction for '{document_type}' completed with result: {record}")
    return record.to_dict()


def _dump_debug_text(text: str) -> None:
    """Write the raw OCR output where IDEXTRACT_DEBUG_DUMP_PATH points, if set."""
    dump_path = settings.IDEXTRACT_DEBUG_DUMP_PATH
    if not dump_path:
        return
    try:
        with open(dump_path, "w", encoding="utf-8") as fh:
            json.dump({WRAPPED_TEXT_KEY: text}, fh, ensure_ascii=False)
        logger.debug(f"Wrote OCR debug dump to {dump_path}")
    except OSError as e:
        logger.warning(f"Could not write OCR debug dump to {dump_path}: {e}")


def extract_document_data(file_content: bytes, document_type: str) -> Dict[str, str]:
    """
    OCR an uploaded image or PDF and extract its identity fields.

    Raises:
        OCRError: if the OCR engine fails.
        UnsupportedFileError: if the bytes are neither an image nor a PDF.
    """
    text = extract_text(file_content)
    logger.debug(f"OCR produced {len(text)} characters for document type '{document_type}'")
    _dump_debug_text(text)
    return extract_details_from_text(text, document_type)
