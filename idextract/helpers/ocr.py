import logging
import os
import tempfile

import filetype
import pytesseract
from django.conf import settings
from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)
from pdfminer.high_level import extract_text as extract_pdf_text
from PIL import Image

from .exceptions import OCRError, UnsupportedFileError

logger = logging.getLogger(__name__)

# Below this many characters a PDF text layer is treated as missing
MIN_PDF_TEXT_LENGTH = 50


def _tesseract_options() -> dict:
    return {
        "lang": settings.IDEXTRACT_TESSERACT_LANG,
        "config": settings.IDEXTRACT_TESSERACT_CONFIG,
    }


def _ocr_image(image: Image.Image) -> str:
    try:
        return pytesseract.image_to_string(image, **_tesseract_options())
    except (pytesseract.TesseractError, OSError) as e:
        raise OCRError(f"Tesseract failed: {e}") from e


def _extract_from_image(file_path: str) -> str:
    """Extract text from an image file using Tesseract."""
    try:
        img = Image.open(file_path)
    except (OSError, Image.DecompressionBombError) as e:
        raise OCRError(f"Could not open image {file_path}: {e}") from e
    logger.debug(f"Opened image file: {file_path}")

    with img:
        text = _ocr_image(img)
    logger.debug(f"Tesseract extracted text (length: {len(text)})")
    return text


def _extract_from_pdf(file_path: str) -> str:
    """Extract text from a PDF file, with OCR fallback when the text layer is thin."""
    text = ""
    try:
        text = extract_pdf_text(file_path)
        logger.debug(f"PDFMiner extracted text (length: {len(text)})")
    except Exception as e:
        logger.warning(f"PDFMiner text extraction failed for file {file_path}: {e}")

    if text and len(text.strip()) >= MIN_PDF_TEXT_LENGTH:
        return text

    logger.info("Performing OCR on PDF pages.")
    try:
        images = convert_from_path(file_path)
    except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError, PDFPopplerTimeoutError) as e:
        raise OCRError(f"Could not rasterize PDF {file_path}: {e}") from e

    ocr_text_parts = []
    for i, image in enumerate(images):
        logger.debug(f"Processing image from PDF page {i + 1}")
        ocr_text_parts.append(_ocr_image(image))
    return "\n".join(ocr_text_parts)


def extract_text(file_content: bytes) -> str:
    """
    Extract text from image or PDF bytes.

    The bytes are written to a temporary file for the OCR tools, and the file
    is removed whatever the outcome.
    """
    kind = filetype.guess(file_content)
    if kind is None or not (kind.mime.startswith('image/') or kind.mime == 'application/pdf'):
        mime = kind.mime if kind else "unknown"
        raise UnsupportedFileError(f"Unsupported file type: {mime}")

    with tempfile.NamedTemporaryFile(delete=False, suffix=f".{kind.extension}") as temp_file:
        temp_file_path = temp_file.name
    try:
        try:
            with open(temp_file_path, "wb") as fh:
                fh.write(file_content)
        except OSError as e:
            raise OCRError(f"Could not write upload to {temp_file_path}: {e}") from e
        if kind.mime == 'application/pdf':
            return _extract_from_pdf(temp_file_path)
        return _extract_from_image(temp_file_path)
    finally:
        if os.path.exists(temp_file_path):
            os.unlink(temp_file_path)
            logger.debug(f"Cleaned up temp file: {temp_file_path}")
