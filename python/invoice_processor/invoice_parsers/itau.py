"""
Itaú Invoice Parser

Parses Itaú / Itaucard credit card invoices.
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class ItauParser(SingleLineInvoiceParser):
    """Parser for Itaú invoices."""

    BANK_NAME = "Itaú"
    BANK_CODE = "itau"

    DETECT_PATTERN = re.compile(r"itaú|itau|iuclick", re.IGNORECASE)

    # 05/01 IFOOD OSASCO BR 96,15
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})/(?P<month>\d{{2}})\s+(?P<description>.+?)\s+(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO ANTERIOR|PAGAMENTO|CRÉDITOS|DÉBITOS", re.IGNORECASE)

    # Column headers and wrapped date columns
    DESCRIPTION_SKIP_PATTERN = re.compile(r"^\d{2}/\d{2}|^DATA$")

    DUE_DATE_PATTERN = re.compile(
        r"(?:Vencimento|Vence|Data de vencimento)[\s\S]{0,30}?(\d{2}/\d{2}/\d{4})",
        re.IGNORECASE,
    )
    # Itaú often prints the total at the end of the document
    TOTAL_PATTERN = re.compile(
        rf"(?:Total(?: da fatura)?|Saldo desta fatura|Valor total)[\s\S]{{0,20}}?(?:R\$\s*)?({AMOUNT_TOKEN})",
        re.IGNORECASE,
    )
