import json
import logging
import re

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')

# Key the upload layer uses when it re-encodes OCR output as JSON
WRAPPED_TEXT_KEY = "extractedText"


def collapse_whitespace(value: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def unwrap_json_text(raw: str) -> str:
    """
    Return the ``extractedText`` value when ``raw`` is an accidental JSON
    re-encoding of the OCR output, otherwise ``raw`` unchanged.

    Anything that does not parse as a JSON object carrying a string
    ``extractedText`` is treated as plain text.
    """
    if not raw.startswith('{'):
        return raw
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Text looks like JSON but could not be parsed, using it as plain text: {e}")
        return raw

    unwrapped = payload.get(WRAPPED_TEXT_KEY) if isinstance(payload, dict) else None
    if not isinstance(unwrapped, str):
        logger.warning(f"JSON text has no string '{WRAPPED_TEXT_KEY}' field, using it as plain text")
        return raw
    return unwrapped


def normalize(raw: str) -> str:
    """
    Unwrap JSON-encoded OCR output and collapse it into one canonical line.

    Wrapping is peeled until the text no longer parses as a wrapped payload,
    so ``normalize(normalize(s)) == normalize(s)`` for every string.
    """
    text = collapse_whitespace(raw)
    while True:
        unwrapped = unwrap_json_text(text)
        if unwrapped == text:
            return text
        logger.debug("Unwrapped JSON-encoded OCR text")
        text = collapse_whitespace(unwrapped)
