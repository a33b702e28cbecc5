"""
Base Invoice Parser Module

Abstract base classes and result types for bank-specific invoice parsers.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from .matchers import (
    AMOUNT_TOKEN,
    build_date,
    clean_metadata_amount,
    month_number,
    parse_brl_amount,
    parse_slash_date,
)

logger = logging.getLogger(__name__)


# Installment markers such as "01/10" or "PARC 02/12"
INSTALLMENT_REGEX = re.compile(r"(?:\bPARC(?:ELA)?\.?\s*)?\b\d{2}/\d{2}\b", re.IGNORECASE)

MINIMUM_PAYMENT_REGEX = re.compile(
    rf"(?:Pagamento\s+m[íi]nimo|Valor\s+m[íi]nimo)[\s\S]{{0,20}}?(?:R\$\s*)?({AMOUNT_TOKEN})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedTransaction:
    """A single transaction extracted from an invoice."""

    date: date
    description: str
    amount: Decimal

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
        }


@dataclass
class InvoiceMetadata:
    """Statement-level fields. None means the field was not found."""

    total_amount: Decimal | None = None
    due_date: date | None = None
    minimum_payment: Decimal | None = None
    bank_name: str | None = None


@dataclass
class ParseResult:
    """Result of parsing an invoice text."""

    raw_text: str
    transactions: list[ParsedTransaction] = field(default_factory=list)
    total_amount: Decimal | None = None
    due_date: date | None = None
    minimum_payment: Decimal | None = None
    bank_name: str | None = None
    bank_code: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    @property
    def transactions_total(self) -> Decimal:
        return sum((t.amount for t in self.transactions), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactions": [t.to_dict() for t in self.transactions],
            "total_amount": float(self.total_amount) if self.total_amount is not None else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "minimum_payment": float(self.minimum_payment) if self.minimum_payment is not None else None,
            "bank_name": self.bank_name,
            "bank_code": self.bank_code,
            "raw_text": self.raw_text,
            "errors": list(self.errors),
        }


class BaseInvoiceParser(ABC):
    """Abstract base class for invoice parsers.

    Parsers are stateless: every method works only on the text passed in,
    so a single instance can be shared across threads.
    """

    BANK_NAME: str | None = None
    BANK_CODE: str = "unknown"

    # Metadata is searched near the document boundaries only
    METADATA_HEADER_LINES = 50
    METADATA_FOOTER_LINES = 50

    DETECT_PATTERN: re.Pattern | None = None
    DUE_DATE_PATTERN: re.Pattern | None = None
    TOTAL_PATTERN: re.Pattern | None = None
    MINIMUM_PAYMENT_PATTERN: re.Pattern | None = MINIMUM_PAYMENT_REGEX

    @property
    def metadata_header_lines(self) -> int:
        return self.METADATA_HEADER_LINES

    @property
    def metadata_footer_lines(self) -> int:
        return self.METADATA_FOOTER_LINES

    def detect_bank(self, text: str) -> bool:
        """Check whether the text was issued by this parser's bank."""
        if self.DETECT_PATTERN is None:
            return False
        return self.DETECT_PATTERN.search(text) is not None

    @abstractmethod
    def parse_transactions(self, text: str) -> list[ParsedTransaction]:
        """Extract transactions from the invoice text.

        Args:
            text: Full invoice text

        Returns:
            Transactions in document order
        """
        pass

    def parse_metadata(self, text: str) -> InvoiceMetadata:
        """Extract due date, total and minimum payment.

        Args:
            text: Full invoice text

        Returns:
            InvoiceMetadata with the fields that were found
        """
        window = self._metadata_window(text)

        return InvoiceMetadata(
            total_amount=self._extract_amount(self.TOTAL_PATTERN, window),
            due_date=self._extract_due_date(window),
            minimum_payment=self._extract_amount(self.MINIMUM_PAYMENT_PATTERN, window),
            bank_name=self.BANK_NAME,
        )

    def parse(self, text: str) -> ParseResult:
        """Run both extraction steps and combine them into a ParseResult."""
        result = ParseResult(raw_text=text, bank_code=self.BANK_CODE)

        result.transactions = self.parse_transactions(text)

        metadata = self.parse_metadata(text)
        result.total_amount = metadata.total_amount
        result.due_date = metadata.due_date
        result.minimum_payment = metadata.minimum_payment
        result.bank_name = self.BANK_NAME

        return result

    def _metadata_window(self, text: str) -> str:
        """Concatenate the first and last lines of the document."""
        lines = text.split("\n")
        head = lines[:self.metadata_header_lines]
        tail = lines[-self.metadata_footer_lines:] if self.metadata_footer_lines else []
        return "\n".join(head) + "\n" + "\n".join(tail)

    def _extract_amount(self, pattern: re.Pattern | None, window: str) -> Decimal | None:
        if pattern is None:
            return None

        match = pattern.search(window)
        if not match:
            return None

        try:
            return clean_metadata_amount(parse_brl_amount(match.group(1)))
        except ValueError:
            return None

    def _extract_due_date(self, window: str) -> date | None:
        if self.DUE_DATE_PATTERN is None:
            return None

        match = self.DUE_DATE_PATTERN.search(window)
        if not match:
            return None

        return parse_slash_date(match.group(1))


class SingleLineInvoiceParser(BaseInvoiceParser):
    """Parser for issuers that print one transaction per line.

    Subclasses declare TRANSACTION_PATTERN with named groups ``day``,
    ``month`` (number or abbreviation), optional ``year``, ``description``
    and ``amount``.
    """

    TRANSACTION_PATTERN: re.Pattern
    SKIP_PATTERN: re.Pattern | None = None
    DESCRIPTION_SKIP_PATTERN: re.Pattern | None = None

    def parse_transactions(self, text: str) -> list[ParsedTransaction]:
        transactions = []

        for line in text.split("\n"):
            line = line.strip()
            if not line:
                continue

            # Balances, payments and carried-over totals are not purchases
            if self.SKIP_PATTERN is not None and self.SKIP_PATTERN.search(line):
                continue

            transaction = self._parse_line(line)
            if transaction:
                transactions.append(transaction)

        logger.debug(f"{self.BANK_CODE}: extracted {len(transactions)} transactions")
        return transactions

    def _parse_line(self, line: str) -> ParsedTransaction | None:
        """Parse one physical line, or return None if it is not a transaction."""
        match = self.TRANSACTION_PATTERN.match(line)
        if not match:
            return None

        fields = match.groupdict()
        description = fields["description"].strip()

        if self.DESCRIPTION_SKIP_PATTERN is not None and self.DESCRIPTION_SKIP_PATTERN.search(description):
            return None

        description = self._clean_description(description)
        if not description:
            return None

        month = fields["month"]
        if not month.isdigit():
            month = month_number(month)
            if month is None:
                return None

        txn_date = build_date(fields["day"], month, fields.get("year"))
        if txn_date is None:
            return None

        try:
            amount = parse_brl_amount(fields["amount"])
        except ValueError:
            return None

        if amount <= 0:
            logger.debug(f"{self.BANK_CODE}: dropping non-positive amount in line: {line}")
            return None

        return ParsedTransaction(date=txn_date, description=description, amount=amount)

    def _clean_description(self, description: str) -> str:
        """Remove installment markers and collapse whitespace."""
        cleaned = INSTALLMENT_REGEX.sub(" ", description)
        return " ".join(cleaned.split())
