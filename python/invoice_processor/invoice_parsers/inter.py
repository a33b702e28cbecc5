"""
Inter Invoice Parser

Parses Banco Inter credit card invoices.
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class InterParser(SingleLineInvoiceParser):
    """Parser for Banco Inter invoices."""

    BANK_NAME = "Inter"
    BANK_CODE = "inter"

    DETECT_PATTERN = re.compile(r"banco\s+inter\b|\binter\s+mastercard", re.IGNORECASE)

    # 05/04 - UBER *TRIP R$ 15,90
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})/(?P<month>\d{{2}})\s+(?:-\s+)?(?P<description>.+?)\s+(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO|PAGAMENTO", re.IGNORECASE)

    DUE_DATE_PATTERN = re.compile(r"vencimento[:\s]*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    TOTAL_PATTERN = re.compile(rf"valor\s+total[:\s]*R\$\s*({AMOUNT_TOKEN})", re.IGNORECASE)
