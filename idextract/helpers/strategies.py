from abc import ABC, abstractmethod
import logging
from dataclasses import dataclass, fields
from typing import Dict, Optional, Tuple

from idextract.models import DocumentTypes, NOT_FOUND
from .mrz import resolve_name
from .normalize import collapse_whitespace
from .patterns import PatternRule, rules_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """Best-effort identity fields read from one document."""
    name: str = NOT_FOUND
    document_number: str = NOT_FOUND
    expiration_date: str = NOT_FOUND
    date_of_birth: str = NOT_FOUND

    def to_dict(self) -> Dict[str, str]:
        """Wire representation, keys in their fixed order."""
        return {
            "name": self.name,
            "documentNumber": self.document_number,
            "expirationDate": self.expiration_date,
            "dateOfBirth": self.date_of_birth,
        }

    def __str__(self) -> str:
        return (f"ExtractionResult(name={self.name}, document_number={self.document_number}, "
                f"expiration_date={self.expiration_date}, date_of_birth={self.date_of_birth})")


class DocumentExtractionStrategy(ABC):
    """Abstract base class for per-document-type extraction strategies."""

    document_type: Optional[str] = None

    def rules(self) -> Tuple[PatternRule, ...]:
        return rules_for(self.document_type)

    def _apply_rules(self, text: str) -> Dict[str, str]:
        """Run every catalog rule; the first rule to match a field wins."""
        found: Dict[str, str] = {}
        for rule in self.rules():
            if rule.field in found:
                continue
            value = rule.apply(text)
            if value is not None:
                found[rule.field] = value
        return found

    @abstractmethod
    def extract(self, text: str) -> ExtractionResult:
        """Extract document fields from normalized text."""
        pass


class DrivingLicenseStrategy(DocumentExtractionStrategy):
    """Label-driven extraction for driving licences."""

    document_type = DocumentTypes.DRIVING_LICENSE

    def extract(self, text: str) -> ExtractionResult:
        logger.debug("Using DrivingLicenseStrategy for extraction")
        return ExtractionResult(**self._apply_rules(text))


class PassportStrategy(DocumentExtractionStrategy):
    """
    Passports: number and dates come from the catalog, the name from the
    MRZ line with an all-caps heuristic as fallback.
    """

    document_type = DocumentTypes.PASSPORT

    def extract(self, text: str) -> ExtractionResult:
        logger.debug("Using PassportStrategy for extraction")
        found = self._apply_rules(text)
        name = resolve_name(text)
        if name:
            found["name"] = name
        return ExtractionResult(**found)


class UnknownDocumentStrategy(DocumentExtractionStrategy):
    """Used for document types without rules: every field stays at its default."""

    def extract(self, text: str) -> ExtractionResult:
        return ExtractionResult()


# Strategy registry
STRATEGY_REGISTRY: Dict[str, type[DocumentExtractionStrategy]] = {
    DocumentTypes.DRIVING_LICENSE.value: DrivingLicenseStrategy,
    DocumentTypes.PASSPORT.value: PassportStrategy,
}


def get_strategy(doc_type: str) -> DocumentExtractionStrategy:
    """
    Get the strategy for a document type.

    Args:
        doc_type: The declared document type (e.g. 'driving_license', 'passport')

    Returns:
        An instance of the matching strategy, or UnknownDocumentStrategy for
        types without rules.
    """
    strategy_cls = STRATEGY_REGISTRY.get(str(doc_type))
    if strategy_cls is None:
        logger.debug(f"get_strategy: No strategy for '{doc_type}', every field keeps its default.")
        return UnknownDocumentStrategy()
    return strategy_cls()


def finalize(record: ExtractionResult) -> ExtractionResult:
    """Collapse whitespace in every field; runs last for every document type."""
    return ExtractionResult(**{
        f.name: collapse_whitespace(getattr(record, f.name)) for f in fields(record)
    })
