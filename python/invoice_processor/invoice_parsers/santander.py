"""
Santander Invoice Parser

Parses Santander credit card invoices, which print dates as "15 JAN".
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class SantanderParser(SingleLineInvoiceParser):
    """Parser for Santander invoices."""

    BANK_NAME = "Santander"
    BANK_CODE = "santander"

    DETECT_PATTERN = re.compile(r"santander|getnet", re.IGNORECASE)

    # 15 JAN UBER DO BRASIL 15,90
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})\s+(?P<month>[A-Za-z]{{3}})\s+(?P<description>.+?)\s+(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO|PAGAMENTO", re.IGNORECASE)

    DUE_DATE_PATTERN = re.compile(r"vencimento[:\s]*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    TOTAL_PATTERN = re.compile(rf"total\s+da\s+fatura[:\s]*R\$\s*({AMOUNT_TOKEN})", re.IGNORECASE)
