class DocumentExtractionError(Exception):
    """Base exception for document extraction errors."""
    pass


class InvalidTextError(DocumentExtractionError, TypeError):
    """Raised when the text handed to the extractor is not a string."""
    pass


class OCRError(DocumentExtractionError):
    """Raised when the OCR engine fails on an uploaded file."""
    pass


class UnsupportedFileError(DocumentExtractionError):
    """Raised when uploaded bytes are neither an image nor a PDF."""
    pass
