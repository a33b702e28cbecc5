"""
Duplicate Transaction Detector Module

Scores parsed invoice transactions against transactions the user already
has, so likely duplicates can be reviewed before import.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from .invoice_parsers.base import ParsedTransaction
from .settings import DeduplicationSettings

logger = logging.getLogger(__name__)


class MatchType(Enum):
    """Confidence band of a match."""
    EXACT = "exact"  # Score of 100
    HIGH_CONFIDENCE = "high_confidence"  # 90 and above
    LIKELY = "likely"  # 80 and above
    POSSIBLE = "possible"  # Below 80, only with a lowered threshold

    @classmethod
    def from_score(cls, score: int) -> "MatchType":
        if score == 100:
            return cls.EXACT
        if score >= 90:
            return cls.HIGH_CONFIDENCE
        if score >= 80:
            return cls.LIKELY
        return cls.POSSIBLE


@dataclass(frozen=True)
class ExistingTransaction:
    """A transaction already stored for the user."""

    id: str
    amount: Decimal
    transaction_date: date
    description: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExistingTransaction":
        """Build from a stored row; accepts ISO date strings, timestamps and float amounts."""
        txn_date = data["transaction_date"]
        if isinstance(txn_date, str):
            txn_date = date.fromisoformat(txn_date[:10])
        elif isinstance(txn_date, datetime):
            txn_date = txn_date.date()

        return cls(
            id=str(data["id"]),
            amount=Decimal(str(data["amount"])),
            transaction_date=txn_date,
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class MatchScore:
    """Best existing match for one imported transaction."""

    imported_index: int
    existing_id: str
    score: int
    match_type: MatchType

    def to_dict(self) -> dict:
        return {
            "imported_index": self.imported_index,
            "existing_id": self.existing_id,
            "score": self.score,
            "match_type": self.match_type.value,
        }


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning a into b."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity between 0 and 1 based on edit distance."""
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a.lower(), b.lower()) / max_length


def _normalize_description(description: str) -> str:
    return re.sub(r"\s+", " ", description).strip()


def existing_window(
    transactions: Iterable[ParsedTransaction],
    padding_days: int = 5
) -> tuple[date, date] | None:
    """Date range to load existing transactions for.

    Args:
        transactions: Parsed invoice transactions
        padding_days: Days added before the first and after the last date

    Returns:
        (start, end) inclusive, or None when there are no transactions
    """
    dates = [t.date for t in transactions]
    if not dates:
        return None

    padding = timedelta(days=padding_days)
    return min(dates) - padding, max(dates) + padding


class DuplicateDetector:
    """Scores imported transactions against existing ones.

    Each imported transaction independently keeps its best-scoring
    existing transaction; the same existing transaction may be the best
    match for several imported ones.
    """

    def __init__(self, settings: DeduplicationSettings | None = None):
        """Initialize the duplicate detector.

        Args:
            settings: Score weights, tolerances and default threshold
        """
        self.settings = settings or DeduplicationSettings()

    def find_duplicates(
        self,
        imported: list[ParsedTransaction],
        existing: list[ExistingTransaction],
        threshold: int | None = None
    ) -> list[MatchScore]:
        """Find the best existing match for each imported transaction.

        Args:
            imported: Transactions parsed from the invoice
            existing: Stored transactions for the same period
            threshold: Minimum score (0-100); settings default when None

        Returns:
            One MatchScore per imported transaction that cleared the threshold
        """
        if threshold is None:
            threshold = self.settings.threshold

        matches = []

        for index, txn in enumerate(imported):
            best: MatchScore | None = None

            for candidate in existing:
                score = self.score(txn, candidate)
                if score is None or score < threshold:
                    continue
                if best is None or score > best.score:
                    best = MatchScore(
                        imported_index=index,
                        existing_id=candidate.id,
                        score=score,
                        match_type=MatchType.from_score(score),
                    )

            if best:
                matches.append(best)

        logger.info(f"Checked {len(imported)} imported against {len(existing)} existing: {len(matches)} matches")
        return matches

    def score(self, txn: ParsedTransaction, candidate: ExistingTransaction) -> int | None:
        """Score one pair from 0 to 100.

        Args:
            txn: Imported transaction
            candidate: Existing transaction

        Returns:
            Score, or None when the amounts differ (never the same charge)
        """
        settings = self.settings

        # 1. Amount is a hard requirement
        if abs(txn.amount - candidate.amount) >= settings.amount_tolerance:
            return None
        score = settings.amount_points

        # 2. Date proximity
        day_diff = abs((txn.date - candidate.transaction_date).days)
        if day_diff == 0:
            score += settings.exact_date_points
        elif day_diff <= settings.date_tolerance_days:
            score += settings.near_date_points

        # 3. Description similarity, rounded half up
        desc_similarity = similarity(
            _normalize_description(txn.description),
            _normalize_description(candidate.description),
        )
        score += math.floor(desc_similarity * settings.description_points + 0.5)

        return score


def find_duplicates(
    imported: list[ParsedTransaction],
    existing: list[ExistingTransaction],
    threshold: int = 80
) -> list[MatchScore]:
    """Convenience function using the default weights.

    Args:
        imported: Transactions parsed from the invoice
        existing: Stored transactions for the same period
        threshold: Minimum score (0-100)

    Returns:
        List of MatchScore
    """
    return DuplicateDetector().find_duplicates(imported, existing, threshold)
