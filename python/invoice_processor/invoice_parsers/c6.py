"""
C6 Bank Invoice Parser
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class C6Parser(SingleLineInvoiceParser):
    """Parser for C6 Bank invoices."""

    BANK_NAME = "C6 Bank"
    BANK_CODE = "c6"

    DETECT_PATTERN = re.compile(r"c6\s*bank", re.IGNORECASE)

    # 10/05 UBER BR 12,90
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})/(?P<month>\d{{2}})\s+(?P<description>.+?)\s+(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO|PAGAMENTO", re.IGNORECASE)

    DUE_DATE_PATTERN = re.compile(r"vencimento[:\s]*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    TOTAL_PATTERN = re.compile(rf"total\s+da\s+fatura[:\s]*R\$\s*({AMOUNT_TOKEN})", re.IGNORECASE)
