"""
Default Invoice Parser

Fallback parser used when no bank-specific parser recognizes the text.
Tolerates layouts where one transaction is split across several lines
(date, masked card number, description and amount each on its own line),
which is what text extraction produces for several issuers.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..settings import ParserSettings
from .base import BaseInvoiceParser, InvoiceMetadata, ParsedTransaction
from .matchers import (
    AMOUNT_REGEX,
    AMOUNT_TOKEN,
    MONTH_NAME_DATE_REGEX,
    MONTH_NAMES,
    SLASH_DATE_REGEX,
    build_date,
    infer_due_year,
    month_number,
    parse_brl_amount,
)

logger = logging.getLogger(__name__)


# •••• 8658 / **** **** **** 8658, also the mojibake form of the bullet
CARD_MARKER_REGEX = re.compile(r"^(?:[•●·*]|â€¢){2,}(?:\s+(?:[•●·*]|â€¢)+)*\s*\d{4}\b")

LEADING_ARTIFACT_REGEX = re.compile(r"^(?:[-–—•●·]|â€¢)+\s*")

HEADER_REGEX = re.compile(r"TOTAL|PAGAMENTO|SALDO|FATURA\s+ANTERIOR", re.IGNORECASE)


@dataclass
class DateToken:
    """A date found at the start of a line."""

    value: date
    text: str


class DefaultParser(BaseInvoiceParser):
    """Issuer-agnostic parser with multi-line lookahead."""

    BANK_CODE = "default"

    DUE_DATE_PATTERN = re.compile(
        rf"(?:Data\s+de\s+vencimento|Vencimento|Vence\s+em)[:\s]*"
        rf"(\d{{2}}/\d{{2}}(?:/\d{{4}}|/\d{{2}})?|\d{{2}}\s+(?:{MONTH_NAMES})\b)",
        re.IGNORECASE,
    )
    TOTAL_PATTERN = re.compile(
        rf"(?:Total\s+da\s+fatura|Total\s+desta\s+fatura|Valor\s+total|Total\s+a\s+pagar|Total)"
        rf"[:\s]*(?:R\$\s*)?({AMOUNT_TOKEN})",
        re.IGNORECASE,
    )

    def __init__(self, settings: ParserSettings | None = None):
        """Initialize the parser.

        Args:
            settings: Lookahead and metadata window sizes
        """
        self.settings = settings or ParserSettings()

    @property
    def metadata_header_lines(self) -> int:
        return self.settings.metadata_header_lines

    @property
    def metadata_footer_lines(self) -> int:
        return self.settings.metadata_footer_lines

    def detect_bank(self, text: str) -> bool:
        """The fallback accepts any text."""
        return True

    def parse_transactions(self, text: str) -> list[ParsedTransaction]:
        """Extract transactions, joining fragmented lines.

        Args:
            text: Full invoice text

        Returns:
            Transactions in document order
        """
        transactions = []
        lines = [line.strip() for line in text.split("\n")]
        lookahead = self.settings.lookahead_lines

        i = 0
        while i < len(lines):
            line = lines[i]
            date_token = self._match_date(line)
            if date_token is None:
                i += 1
                continue

            rest = line[len(date_token.text):]
            amount_match = self._last_amount(rest)
            end = i

            if amount_match is None:
                # Look ahead for the line carrying this transaction's amount
                for j in range(i + 1, min(i + 1 + lookahead, len(lines))):
                    candidate = lines[j]
                    if not candidate or CARD_MARKER_REGEX.match(candidate):
                        continue
                    if self._match_date(candidate) is not None:
                        logger.debug(f"Abandoning candidate at line {i}: next date found at line {j}")
                        break

                    amount_match = self._last_amount(candidate)
                    if amount_match is not None:
                        end = j
                        break

            if amount_match is None:
                i += 1
                continue

            consumed = [rest] + lines[i + 1:end + 1]

            # The amount token is stripped from the last consumed line only
            last = consumed[-1]
            consumed[-1] = last[:amount_match.start()] + last[amount_match.end():]

            transaction = self._build_transaction(date_token, consumed, amount_match.group(1))
            if transaction:
                transactions.append(transaction)

            i = end + 1

        logger.debug(f"default: extracted {len(transactions)} transactions")
        return transactions

    def parse_metadata(self, text: str) -> InvoiceMetadata:
        metadata = super().parse_metadata(text)
        metadata.bank_name = None
        return metadata

    def _match_date(self, line: str) -> DateToken | None:
        """Return the date token at the start of the line, if any."""
        match = SLASH_DATE_REGEX.match(line)
        if match:
            day, month, year = match.groups()
            value = build_date(day, month, year)
            return DateToken(value=value, text=match.group(0)) if value else None

        match = MONTH_NAME_DATE_REGEX.match(line)
        if match:
            value = build_date(match.group(1), month_number(match.group(2)))
            return DateToken(value=value, text=match.group(0)) if value else None

        return None

    def _last_amount(self, line: str) -> re.Match | None:
        matches = list(AMOUNT_REGEX.finditer(line))
        return matches[-1] if matches else None

    def _build_transaction(
        self,
        date_token: DateToken,
        consumed: list[str],
        amount_str: str
    ) -> ParsedTransaction | None:
        """Assemble a transaction from the consumed lines.

        Args:
            date_token: Date found at the start of the first line
            consumed: Lines with the date and amount tokens already removed
            amount_str: Amount token text

        Returns:
            ParsedTransaction, or None if the pieces do not form one
        """
        parts = []
        for part in consumed:
            part = CARD_MARKER_REGEX.sub("", part.strip()).strip()
            if part:
                parts.append(part)

        description = " ".join(" ".join(parts).split())
        description = LEADING_ARTIFACT_REGEX.sub("", description).strip()

        if HEADER_REGEX.search(description) or description.upper() == "FATURA":
            return None

        try:
            amount = parse_brl_amount(amount_str)
        except ValueError:
            return None

        if len(description) <= 2 or amount <= Decimal("0"):
            return None

        return ParsedTransaction(date=date_token.value, description=description, amount=amount)

    def _extract_due_date(self, window: str) -> date | None:
        match = self.DUE_DATE_PATTERN.search(window)
        if not match:
            return None

        value = match.group(1)
        slash = SLASH_DATE_REGEX.match(value)
        if slash:
            day, month, year = slash.groups()
        else:
            day, month_token = value.split()
            month = month_number(month_token)
            year = None

        month = int(month)
        if year is None:
            year = infer_due_year(month)

        return build_date(day, month, year)
