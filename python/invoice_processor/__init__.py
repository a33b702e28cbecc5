"""
Invoice Processor Module

Parses credit card invoice text into transactions and statement metadata,
and flags likely duplicates against existing transactions.
"""

from .duplicate_detector import (
    DuplicateDetector,
    ExistingTransaction,
    MatchScore,
    MatchType,
    existing_window,
    find_duplicates,
    levenshtein_distance,
    similarity,
)
from .invoice_parsers import (
    BANK_PARSERS,
    BaseInvoiceParser,
    DefaultParser,
    InvoiceMetadata,
    ParsedTransaction,
    ParseResult,
    detect_bank,
    parse_invoice_text,
)
from .settings import DeduplicationSettings, ImportSettings, ParserSettings, load_settings

__all__ = [
    # Parsing
    "BANK_PARSERS",
    "BaseInvoiceParser",
    "DefaultParser",
    "InvoiceMetadata",
    "ParsedTransaction",
    "ParseResult",
    "detect_bank",
    "parse_invoice_text",
    # Duplicate Detection
    "DuplicateDetector",
    "ExistingTransaction",
    "MatchScore",
    "MatchType",
    "existing_window",
    "find_duplicates",
    "levenshtein_distance",
    "similarity",
    # Settings
    "DeduplicationSettings",
    "ImportSettings",
    "ParserSettings",
    "load_settings",
]
