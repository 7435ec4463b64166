import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import regex as re

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MRZMatch:
    """Name parts read from a passport machine-readable zone."""
    surname: str
    given_names: str

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.given_names}".strip()


def _clean_mrz_part(part: str) -> str:
    """Turn MRZ filler characters into spaces."""
    return part.replace('<', ' ').strip()


class NameResolver(ABC):
    """One way of reading the holder's name out of normalized passport text."""

    @abstractmethod
    def resolve(self, text: str) -> Optional[str]:
        """Return the name, or None so the next resolver gets a turn."""
        pass


class MRZNameResolver(NameResolver):
    """Reads the name from the first MRZ line (``P<`` + country + SURNAME<<GIVEN)."""

    _MRZ_NAME_RE = re.compile(r'P<[A-Z]{3}([A-Z]+)<<([A-Z]+)')

    def parse(self, text: str) -> Optional[MRZMatch]:
        match = self._MRZ_NAME_RE.search(text)
        if not match:
            return None
        return MRZMatch(
            surname=_clean_mrz_part(match.group(1)),
            given_names=_clean_mrz_part(match.group(2)),
        )

    def resolve(self, text: str) -> Optional[str]:
        mrz = self.parse(text)
        if mrz is None:
            logger.debug("MRZNameResolver: no MRZ name line found")
            return None
        logger.debug(f"MRZNameResolver: surname={mrz.surname!r} given_names={mrz.given_names!r}")
        return mrz.full_name


class CapitalizedWordsNameResolver(NameResolver):
    """
    Lower-confidence fallback: the first run of two or three all-caps words
    that is not a field label's value and not country/document boilerplate.
    """

    # Labels whose values are never the holder's name
    EXCLUDED_PRECEDING = ("Valid", "Signature", "Authority", "Place", "Date", "Passport", "No")
    # Tokens that mark the run as part of a document header
    EXCLUDED_FOLLOWING = ("INDIA", "PASSPORT", "REPUBLIC")

    _CAPS_RUN_RE = re.compile(
        r'(?<!(?:' + '|'.join(EXCLUDED_PRECEDING) + r')\s+)'
        r'[A-Z][A-Z]+(?:\s+[A-Z][A-Z]+){1,2}'
        r'(?!\s+(?:' + '|'.join(EXCLUDED_FOLLOWING) + r'))'
    )

    def resolve(self, text: str) -> Optional[str]:
        match = self._CAPS_RUN_RE.search(text)
        if not match:
            logger.debug("CapitalizedWordsNameResolver: no all-caps name candidate")
            return None
        logger.debug(f"CapitalizedWordsNameResolver: picked {match.group(0)!r}")
        return match.group(0).strip()


# Tried in order; the heuristic only runs when the MRZ line is missing
PASSPORT_NAME_RESOLVERS: Sequence[NameResolver] = (
    MRZNameResolver(),
    CapitalizedWordsNameResolver(),
)


def resolve_name(text: str, resolvers: Sequence[NameResolver] = PASSPORT_NAME_RESOLVERS) -> Optional[str]:
    """Return the first name any resolver produces, or None."""
    for resolver in resolvers:
        name = resolver.resolve(text)
        if name:
            return name
    return None
