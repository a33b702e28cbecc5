"""
Invoices API Routes

Endpoints for parsing invoice text and checking parsed transactions
against existing ones.
"""

import datetime
from decimal import Decimal
from functools import lru_cache

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from invoice_processor import (
    DefaultParser,
    DuplicateDetector,
    ExistingTransaction,
    ImportSettings,
    ParsedTransaction,
    existing_window,
    load_settings,
    parse_invoice_text,
)

router = APIRouter(prefix="/invoices", tags=["invoices"])


class Transaction(BaseModel):
    """Parsed invoice transaction."""

    date: datetime.date
    description: str
    amount: float = Field(gt=0)


class ExistingTransactionInput(BaseModel):
    """Stored transaction to compare against."""

    id: str
    amount: float
    transaction_date: datetime.date
    description: str = ""


class ParseRequest(BaseModel):
    """Invoice text extracted from all pages."""

    text: str


class ParseResponse(BaseModel):
    """Parsed invoice."""

    transactions: list[Transaction]
    total_amount: float | None
    due_date: datetime.date | None
    minimum_payment: float | None
    bank_name: str | None
    bank_code: str | None
    raw_text: str
    errors: list[str]


class DuplicatesRequest(BaseModel):
    """Imported transactions and the existing transactions for the period."""

    imported: list[Transaction]
    existing: list[ExistingTransactionInput]
    threshold: int | None = Field(None, ge=0, le=100)


class MatchItem(BaseModel):
    """Best existing match for one imported transaction."""

    imported_index: int
    existing_id: str
    score: int
    match_type: str


class DuplicatesResponse(BaseModel):
    """Duplicate check result."""

    matches: list[MatchItem]
    # Range the caller should load existing transactions for
    window_start: datetime.date | None
    window_end: datetime.date | None


@lru_cache
def get_settings() -> ImportSettings:
    """Settings are read once per process."""
    return load_settings()


@router.post("/parse", response_model=ParseResponse)
def parse_invoice(
    request: ParseRequest,
    settings: ImportSettings = Depends(get_settings),
) -> ParseResponse:
    """Parse invoice text into transactions and metadata.

    Args:
        request: Extracted invoice text
        settings: Import settings

    Returns:
        Parsed transactions and statement metadata
    """
    result = parse_invoice_text(request.text, fallback=DefaultParser(settings.parser))
    return ParseResponse(**result.to_dict())


@router.post("/duplicates", response_model=DuplicatesResponse)
def check_duplicates(
    request: DuplicatesRequest,
    settings: ImportSettings = Depends(get_settings),
) -> DuplicatesResponse:
    """Score imported transactions against existing ones.

    Args:
        request: Imported and existing transactions
        settings: Import settings

    Returns:
        Best match per imported transaction above the threshold
    """
    imported = [
        ParsedTransaction(
            date=t.date,
            description=t.description.strip(),
            amount=Decimal(str(t.amount)),
        )
        for t in request.imported
    ]
    existing = [ExistingTransaction.from_dict(e.model_dump()) for e in request.existing]

    detector = DuplicateDetector(settings.deduplication)
    matches = detector.find_duplicates(imported, existing, request.threshold)

    window = existing_window(imported)
    window_start, window_end = window if window else (None, None)

    return DuplicatesResponse(
        matches=[MatchItem(**m.to_dict()) for m in matches],
        window_start=window_start,
        window_end=window_end,
    )
