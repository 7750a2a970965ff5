import logging
import math
from typing import Dict, Iterator, List, Optional

from .dates import epoch_seconds, parse_end_date
from .models import CanonicalDocument, RawCandidate

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24
DEFAULT_PROXIMITY_DAYS = 4


class Deduplicator:
    """
    Keeps one canonical document per weekly edition.

    A candidate is admitted only if no already-admitted document is dated
    within `proximity_days` of it. The first document offered for a window
    wins; later ones are dropped without touching the existing entry.
    """

    def __init__(self, proximity_days: float = DEFAULT_PROXIMITY_DAYS):
        if not math.isfinite(proximity_days) or proximity_days <= 0:
            raise ValueError(f"proximity_days must be positive, got {proximity_days}")
        self.proximity_days = proximity_days
        self._documents: Dict[int, CanonicalDocument] = {}

    def is_near_existing(self, key: int) -> bool:
        if key in self._documents:
            return True
        for existing in self._documents:
            if abs(existing - key) / SECONDS_PER_DAY < self.proximity_days:
                return True
        return False

    def offer(self, candidate: RawCandidate) -> Optional[CanonicalDocument]:
        """Returns the new canonical document, or None if the candidate was dropped."""
        end_date = parse_end_date(candidate.label)
        if end_date is None:
            logger.warning(f"No date found in label, skipping: {candidate.label!r}")
            return None

        key = epoch_seconds(end_date)
        if self.is_near_existing(key):
            logger.debug(f"Duplicate edition {end_date.isoformat()}: {candidate.label!r}")
            return None

        doc = CanonicalDocument(
            label=candidate.label,
            link=candidate.link,
            date=end_date,
            key=key,
        )
        self._documents[key] = doc
        return doc

    @property
    def documents(self) -> List[CanonicalDocument]:
        return list(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[CanonicalDocument]:
        return iter(self.documents)
