"""
Bradesco Invoice Parser

Parses Bradesco and Bradescard credit card invoices.
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class BradescoParser(SingleLineInvoiceParser):
    """Parser for Bradesco invoices."""

    BANK_NAME = "Bradesco"
    BANK_CODE = "bradesco"

    DETECT_PATTERN = re.compile(r"bradesco|bradescard", re.IGNORECASE)

    # 10/06/2026 LOJAS RENNER 150,00 or 10/06 LOJAS RENNER 150,00
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})/(?P<month>\d{{2}})(?:/(?P<year>\d{{4}}))?\s+"
        rf"(?P<description>.+?)\s+(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO|ANTERIOR|PAGAMENTO|ENCARGOS|IOF", re.IGNORECASE)

    DUE_DATE_PATTERN = re.compile(r"vencimento\s+(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    TOTAL_PATTERN = re.compile(
        rf"(?:Total(?: desta)? fatura|Valor total)[\s\S]{{0,20}}?(?:R\$\s*)?({AMOUNT_TOKEN})",
        re.IGNORECASE,
    )
