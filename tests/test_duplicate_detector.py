"""
Duplicate Detector Tests

Tests for edit distance, similarity and duplicate scoring.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from invoice_processor.duplicate_detector import (
    DuplicateDetector,
    ExistingTransaction,
    MatchScore,
    MatchType,
    existing_window,
    find_duplicates,
    levenshtein_distance,
    similarity,
)
from invoice_processor.invoice_parsers import ParsedTransaction
from invoice_processor.settings import DeduplicationSettings


def txn(day: str, description: str, amount: str) -> ParsedTransaction:
    return ParsedTransaction(date=date.fromisoformat(day), description=description, amount=Decimal(amount))


def existing_txn(id: str, day: str, description: str, amount: str) -> ExistingTransaction:
    return ExistingTransaction(
        id=id,
        amount=Decimal(amount),
        transaction_date=date.fromisoformat(day),
        description=description,
    )


class TestLevenshteinDistance:
    """Tests for edit distance."""

    def test_identical_strings(self):
        assert levenshtein_distance("test", "test") == 0

    @pytest.mark.parametrize("a,b,expected", [
        ("kitten", "sitting", 3),
        ("Saturday", "Sunday", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("flaw", "lawn", 2),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected


class TestSimilarity:
    """Tests for string similarity."""

    def test_identical(self):
        assert similarity("Uber Trip", "Uber Trip") == 1.0

    def test_case_insensitive(self):
        assert similarity("Netflix", "netflix") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_similar_strings(self):
        assert similarity("Uber Trip", "Uber Trip SP") == pytest.approx(0.75)


class TestMatchType:
    """Tests for score bands."""

    @pytest.mark.parametrize("score,expected", [
        (100, MatchType.EXACT),
        (95, MatchType.HIGH_CONFIDENCE),
        (90, MatchType.HIGH_CONFIDENCE),
        (84, MatchType.LIKELY),
        (80, MatchType.LIKELY),
        (70, MatchType.POSSIBLE),
    ])
    def test_from_score(self, score, expected):
        assert MatchType.from_score(score) == expected


class TestFindDuplicates:
    """Tests for find_duplicates."""

    @pytest.fixture
    def imported(self):
        return [
            txn("2023-10-15", "Uber Trip", "15.90"),
            txn("2023-10-20", "Netflix", "55.90"),
            txn("2023-10-25", "Padaria Doce", "20.00"),
            txn("2023-10-28", "Amazon", "100.00"),
        ]

    @pytest.fixture
    def existing(self):
        return [
            existing_txn("1", "2023-10-15", "Uber Trip Sao Paulo", "15.90"),
            existing_txn("2", "2023-10-20", "Netflix", "55.90"),
            existing_txn("3", "2023-10-28", "Amazon", "99.00"),
        ]

    def test_exact_duplicate(self, imported, existing):
        results = find_duplicates(imported, existing)
        netflix = next(r for r in results if r.imported_index == 1)

        assert netflix == MatchScore(imported_index=1, existing_id="2", score=100, match_type=MatchType.EXACT)

    def test_fuzzy_duplicate(self, imported, existing):
        results = find_duplicates(imported, existing)
        uber = next(r for r in results if r.imported_index == 0)

        assert uber.existing_id == "1"
        assert uber.score > 80
        assert uber.score == 84
        assert uber.match_type == MatchType.LIKELY

    def test_amount_mismatch_never_matches(self, imported, existing):
        results = find_duplicates(imported, existing)

        assert all(r.imported_index != 3 for r in results)

    def test_unique_transaction_not_matched(self, imported, existing):
        results = find_duplicates(imported, existing)

        assert all(r.imported_index != 2 for r in results)

    def test_amount_within_tolerance(self):
        results = find_duplicates(
            [txn("2023-10-20", "Netflix", "55.91")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results[0].score == 100
        assert results[0].match_type == MatchType.EXACT

    def test_amount_at_tolerance_is_rejected(self):
        results = find_duplicates(
            [txn("2023-10-20", "Netflix", "55.95")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results == []

    def test_date_within_two_days(self):
        results = find_duplicates(
            [txn("2023-10-22", "Netflix", "55.90")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results[0].score == 90
        assert results[0].match_type == MatchType.HIGH_CONFIDENCE

    def test_distant_date_below_threshold(self):
        results = find_duplicates(
            [txn("2023-10-25", "Netflix", "55.90")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results == []

    def test_lowered_threshold_gives_possible(self):
        results = find_duplicates(
            [txn("2023-10-25", "Netflix", "55.90")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
            threshold=50,
        )

        assert results[0].score == 70
        assert results[0].match_type == MatchType.POSSIBLE

    def test_whitespace_normalized(self):
        results = find_duplicates(
            [txn("2023-10-20", "  Uber   Trip ", "15.90")],
            [existing_txn("1", "2023-10-20", "Uber Trip", "15.90")],
        )

        assert results[0].score == 100

    def test_best_candidate_wins(self):
        results = find_duplicates(
            [txn("2023-10-20", "Spotify", "19.90")],
            [
                existing_txn("a", "2023-10-21", "Spotify", "19.90"),
                existing_txn("b", "2023-10-20", "Spotify", "19.90"),
                existing_txn("c", "2023-10-20", "Spotify Premium", "19.90"),
            ],
        )

        assert len(results) == 1
        assert results[0].existing_id == "b"

    def test_tie_keeps_first_candidate(self):
        results = find_duplicates(
            [txn("2023-10-20", "Spotify", "19.90")],
            [
                existing_txn("a", "2023-10-20", "Spotify", "19.90"),
                existing_txn("b", "2023-10-20", "Spotify", "19.90"),
            ],
        )

        assert results[0].existing_id == "a"

    def test_existing_may_match_several_imported(self):
        results = find_duplicates(
            [txn("2023-10-20", "Spotify", "19.90"), txn("2023-10-20", "Spotify", "19.90")],
            [existing_txn("a", "2023-10-20", "Spotify", "19.90")],
        )

        assert [(r.imported_index, r.existing_id) for r in results] == [(0, "a"), (1, "a")]

    def test_empty_inputs(self):
        assert find_duplicates([], []) == []
        assert find_duplicates([txn("2023-10-20", "Spotify", "19.90")], []) == []


class TestDuplicateDetectorSettings:
    """Tests for configurable weights."""

    def test_custom_date_tolerance(self):
        detector = DuplicateDetector(DeduplicationSettings(date_tolerance_days=5))

        results = detector.find_duplicates(
            [txn("2023-10-25", "Netflix", "55.90")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results[0].score == 90

    def test_default_threshold_from_settings(self):
        detector = DuplicateDetector(DeduplicationSettings(threshold=95))

        results = detector.find_duplicates(
            [txn("2023-10-22", "Netflix", "55.90")],
            [existing_txn("2", "2023-10-20", "Netflix", "55.90")],
        )

        assert results == []

    def test_score_returns_none_on_amount_mismatch(self):
        detector = DuplicateDetector()

        assert detector.score(
            txn("2023-10-20", "Amazon", "100.00"),
            existing_txn("3", "2023-10-20", "Amazon", "99.00"),
        ) is None


class TestExistingTransaction:
    """Tests for ExistingTransaction.from_dict."""

    def test_from_stored_row(self):
        row = {
            "id": 42,
            "amount": 15.9,
            "transaction_date": "2023-10-15T00:00:00",
            "description": None,
        }

        existing = ExistingTransaction.from_dict(row)

        assert existing.id == "42"
        assert existing.amount == Decimal("15.9")
        assert existing.transaction_date == date(2023, 10, 15)
        assert existing.description == ""

    def test_timestamp_row_is_scored(self):
        row = {
            "id": 7,
            "amount": 15.9,
            "transaction_date": datetime(2023, 10, 15, 14, 30),
            "description": "Uber",
        }

        existing = ExistingTransaction.from_dict(row)
        results = find_duplicates([txn("2023-10-15", "Uber", "15.90")], [existing])

        assert existing.transaction_date == date(2023, 10, 15)
        assert results[0].existing_id == "7"
        assert results[0].score == 100

    def test_to_dict(self):
        match = MatchScore(imported_index=0, existing_id="1", score=84, match_type=MatchType.LIKELY)

        assert match.to_dict() == {
            "imported_index": 0,
            "existing_id": "1",
            "score": 84,
            "match_type": "likely",
        }


class TestExistingWindow:
    """Tests for the existing-transaction lookup window."""

    def test_window_padding(self):
        window = existing_window([
            txn("2023-10-15", "Uber", "10.00"),
            txn("2023-10-02", "Padaria", "5.00"),
        ])

        assert window == (date(2023, 9, 27), date(2023, 10, 20))

    def test_empty(self):
        assert existing_window([]) is None
