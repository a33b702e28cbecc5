"""
Bank-specific parsers for credit card invoice text.
"""

import logging

from .base import (
    BaseInvoiceParser,
    InvoiceMetadata,
    ParsedTransaction,
    ParseResult,
    SingleLineInvoiceParser,
)
from .itau import ItauParser
from .bradesco import BradescoParser
from .santander import SantanderParser
from .inter import InterParser
from .c6 import C6Parser
from .btg import BTGParser
from .default import DefaultParser

logger = logging.getLogger(__name__)

# Detection order matters: the first parser that recognizes the text wins
BANK_PARSERS: tuple[BaseInvoiceParser, ...] = (
    ItauParser(),
    BradescoParser(),
    SantanderParser(),
    InterParser(),
    C6Parser(),
    BTGParser(),
)


def detect_bank(
    text: str,
    parsers: tuple[BaseInvoiceParser, ...] = BANK_PARSERS
) -> BaseInvoiceParser | None:
    """Return the first parser whose detector accepts the text."""
    for parser in parsers:
        if parser.detect_bank(text):
            return parser
    return None


def parse_invoice_text(
    text: str,
    parsers: tuple[BaseInvoiceParser, ...] = BANK_PARSERS,
    fallback: BaseInvoiceParser | None = None
) -> ParseResult:
    """Detect the issuing bank and parse the invoice text.

    Args:
        text: Text extracted from all invoice pages
        parsers: Bank parsers in priority order
        fallback: Parser used when no bank parser matches

    Returns:
        ParseResult; never raises for malformed text
    """
    parser = detect_bank(text, parsers)
    if parser is None:
        parser = fallback or DefaultParser()
        logger.info("No bank detected, using default parser")
    else:
        logger.info(f"Detected bank: {parser.BANK_NAME}")

    try:
        return parser.parse(text)
    except Exception as e:
        logger.error(f"Failed to parse invoice with {parser.BANK_CODE} parser: {e}")
        return ParseResult(
            raw_text=text,
            bank_name=parser.BANK_NAME,
            bank_code=parser.BANK_CODE,
            errors=[f"Parse error: {e}"],
        )


__all__ = [
    "BaseInvoiceParser",
    "SingleLineInvoiceParser",
    "InvoiceMetadata",
    "ParsedTransaction",
    "ParseResult",
    "ItauParser",
    "BradescoParser",
    "SantanderParser",
    "InterParser",
    "C6Parser",
    "BTGParser",
    "DefaultParser",
    "BANK_PARSERS",
    "detect_bank",
    "parse_invoice_text",
]
