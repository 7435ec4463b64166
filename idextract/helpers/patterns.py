"""
Per-document-type field extraction rules.

Each rule binds one record field to a compiled pattern, a match mode and the
cleanup steps applied to the raw match. Rules are built once at import time
and never mutated, so they are safe to share across requests.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Optional, Tuple

from idextract.models import DocumentTypes

logger = logging.getLogger(__name__)


class MatchMode(Enum):
    FIRST_GROUP = auto()   # capture group of the first match
    WHOLE_MATCH = auto()   # full text of the first match
    ALL_MATCHES = auto()   # every match, one picked by position


def strip_all_whitespace(value: str) -> str:
    return re.sub(r'\s+', '', value)


@dataclass(frozen=True)
class PatternRule:
    """Binding of a record field to a pattern and its post-match cleanup."""
    field: str
    pattern: re.Pattern
    mode: MatchMode = MatchMode.FIRST_GROUP
    group: int = 1
    position: int = 0
    min_matches: int = 1
    cleanup: Tuple[Callable[[str], str], ...] = (str.strip,)

    def _raw_match(self, text: str) -> Optional[str]:
        if self.mode is MatchMode.ALL_MATCHES:
            matches = [m.group(0) for m in self.pattern.finditer(text)]
            if len(matches) < self.min_matches:
                return None
            return matches[self.position]

        match = self.pattern.search(text)
        if not match:
            return None
        if self.mode is MatchMode.WHOLE_MATCH:
            return match.group(0)
        return match.group(self.group)

    def apply(self, text: str) -> Optional[str]:
        """Return the cleaned value for this rule's field, or None when nothing matched."""
        value = self._raw_match(text)
        if not value:
            return None
        for step in self.cleanup:
            value = step(value)
        logger.debug(f"Rule for '{self.field}' matched: {value!r}")
        return value


# Driving licence labels are matched case-insensitively
_DL_FLAGS = re.IGNORECASE

DRIVING_LICENSE_RULES: Tuple[PatternRule, ...] = (
    # Name up to a relationship marker (S/O, D/O, W/O) or end of text
    PatternRule(
        field="name",
        pattern=re.compile(r'Name\s*©?\s*([A-Z][A-Za-z\s]+?)(?=\s*(?:S/|D/|W/|$))', _DL_FLAGS),
    ),
    # Everything after the number label up to the DOI label or end of text
    PatternRule(
        field="document_number",
        pattern=re.compile(r"(?:DL\s+NO|License\s+No)\s*©?\s*'?([^:]+?)(?=\s+DOI|\s*$)", _DL_FLAGS),
    ),
    PatternRule(
        field="expiration_date",
        pattern=re.compile(
            r'(?:Valid upto|Valid Till|Validity|Expiry)\s*:?\s*(\d{2}-\d{2}-\d{4}|\d{2}-\d{2}\s*-\d{4})',
            _DL_FLAGS,
        ),
        cleanup=(str.strip, strip_all_whitespace),
    ),
    PatternRule(
        field="date_of_birth",
        pattern=re.compile(r'(?:DOB|Date of Birth)\s*:?\s*(\d{2}-\d{2}-\d{4})', _DL_FLAGS),
    ),
)

# DD/MM/YYYY anywhere in the passport text
_PASSPORT_DATE_RE = re.compile(r'\d{2}/\d{2}/\d{4}')

PASSPORT_RULES: Tuple[PatternRule, ...] = (
    # One letter followed by 7-8 digits
    PatternRule(
        field="document_number",
        pattern=re.compile(r'[A-Z][0-9]{7,8}', re.IGNORECASE),
        mode=MatchMode.WHOLE_MATCH,
        cleanup=(str.strip, str.upper),
    ),
    # Passport dates carry no usable labels after OCR: the first date in
    # reading order is taken as birth and the last one as expiry.
    PatternRule(
        field="date_of_birth",
        pattern=_PASSPORT_DATE_RE,
        mode=MatchMode.ALL_MATCHES,
        position=0,
        min_matches=2,
    ),
    PatternRule(
        field="expiration_date",
        pattern=_PASSPORT_DATE_RE,
        mode=MatchMode.ALL_MATCHES,
        position=-1,
        min_matches=2,
    ),
)

PATTERN_CATALOG: Dict[str, Tuple[PatternRule, ...]] = {
    DocumentTypes.DRIVING_LICENSE.value: DRIVING_LICENSE_RULES,
    DocumentTypes.PASSPORT.value: PASSPORT_RULES,
}


def rules_for(document_type) -> Tuple[PatternRule, ...]:
    """Ordered rules for ``document_type``; empty for unrecognised types."""
    return PATTERN_CATALOG.get(str(document_type), ())
