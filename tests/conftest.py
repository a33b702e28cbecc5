"""
Pytest configuration and fixtures for invoice import tests.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

sys.path.insert(0, str(PROJECT_ROOT / "python"))

FROZEN_TODAY = date(2026, 3, 10)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_dir() -> Path:
    """Return the config directory path."""
    return PROJECT_ROOT / "config"


@pytest.fixture
def frozen_today() -> Generator[date, None, None]:
    """Freeze the date used to infer missing years."""
    with patch(
        "invoice_processor.invoice_parsers.matchers.current_date",
        return_value=FROZEN_TODAY,
    ):
        yield FROZEN_TODAY


@pytest.fixture
def itau_text() -> str:
    return """
Itaú Cartões
Sua fatura chegou
Vencimento 15/05/2026
Total da fatura R$ 1.250,55

Lançamentos
10/05 IFOOD OSASCO BR 50,00
12/05 UBER *TRIP SAO PAULO 25,90
"""


@pytest.fixture
def bradesco_text() -> str:
    return """
Bradescard
Vencimento 20/06/2026
Total desta fatura R$ 3.500,00

DETALHAMENTO
10/06/2026 LOJAS RENNER 150,00
15/06/2026 POSTO IPIRANGA 200,50
"""


@pytest.fixture
def santander_text() -> str:
    return """
SANTANDER
Vencimento 15/01/2026
Total da fatura R$ 1.234,56

Lançamentos
10 JAN UBER DO BRASIL 15,90
12 FEV NETFLIX ASSINATURA 55,90
"""


@pytest.fixture
def inter_text() -> str:
    return """
Banco Inter
Vencimento 10/05/2026
Valor total R$ 980,50

Transações
05/04 - UBER *TRIP R$ 15,90
07/04 - IFOOD *PEDIDO R$ 45,00
"""


@pytest.fixture
def c6_text() -> str:
    return """
C6 BANK
Vencimento 10/06/2026
Total da fatura R$ 2.500,00

Lançamentos
10/05 UBER DO BRASIL 15,90
12/05 NETFLIX.COM 55,90
"""


@pytest.fixture
def btg_text() -> str:
    return """
BTG Pactual
Vencimento 15/07/2026
Valor total R$ 5.000,00

Extrato
10/06 RESTAURANTE TOP 01/01 150,00
12/06 SUPERMERCADO 300,50
"""


@pytest.fixture
def bank_samples(itau_text, bradesco_text, santander_text, inter_text, c6_text, btg_text) -> dict[str, str]:
    """Sample invoice text keyed by bank code."""
    return {
        "itau": itau_text,
        "bradesco": bradesco_text,
        "santander": santander_text,
        "inter": inter_text,
        "c6": c6_text,
        "btg": btg_text,
    }


@pytest.fixture
def fragmented_text() -> str:
    """Invoice text where each field of a transaction sits on its own line."""
    return """
        30 DEZ

        •••• 8658

        Braz Luis de Mesquita

        R$ 26,28

        04 JAN

        •••• 8658

        Nalvaaørs Restaurante

        R$ 44,00
        """


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Keep a developer's config override out of the tests."""
    monkeypatch.delenv("INVOICE_IMPORT_CONFIG", raising=False)
    yield
