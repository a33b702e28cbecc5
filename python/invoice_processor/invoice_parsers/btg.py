"""
BTG Pactual Invoice Parser

Parses BTG Pactual credit card invoices, which may print an installment
column between the description and the amount.
"""

import re

from .base import SingleLineInvoiceParser
from .matchers import AMOUNT_TOKEN


class BTGParser(SingleLineInvoiceParser):
    """Parser for BTG Pactual invoices."""

    BANK_NAME = "BTG Pactual"
    BANK_CODE = "btg"

    DETECT_PATTERN = re.compile(r"btg\s*pactual|btg\s*banking", re.IGNORECASE)

    # 10/05 UBER BR 01/01 12,90
    TRANSACTION_PATTERN = re.compile(
        rf"^(?P<day>\d{{2}})/(?P<month>\d{{2}})\s+(?P<description>.+?)\s+"
        rf"(?:(?P<installment>\d{{2}}/\d{{2}})\s+)?(?:R\$\s*)?(?P<amount>{AMOUNT_TOKEN})$"
    )
    SKIP_PATTERN = re.compile(r"SALDO|PAGAMENTO", re.IGNORECASE)

    DUE_DATE_PATTERN = re.compile(r"vencimento[:\s]*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
    TOTAL_PATTERN = re.compile(rf"valor\s+total[:\s]*R\$\s*({AMOUNT_TOKEN})", re.IGNORECASE)
