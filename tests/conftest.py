import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_extractor.main import app

HDFC_STATEMENT = """\
HDFC Bank Credit Card Statement
Statement for HDFC Bank Regalia Credit Card
Name : JOHN DOE
Card No: 4321 56XX XXXX 7890
Billing Cycle From 16/02/2024 To 15/03/2024
Payment Due Date Total Dues Minimum Amount Due
04/04/2024 83,794.00 4,190.00
"""

SBI_STATEMENT = """\
SBI Card Statement
Name: ANITA DESAI
Card No: XXXX XXXX XXXX 2345
Statement Period: 05/02/2024 to 04/03/2024
Payment Due Date: 24/03/2024
Total Amount Due: Rs. 45,210.75
Minimum Amount Due: Rs. 2,260.55
"""

ICICI_STATEMENT = """\
ICICI Bank Credit Card Statement
Cardholder: Vikram Singh
Card ending in 6789
Billing Period: 10/01/2024 - 09/02/2024
Due Date: 29/02/2024
Total Balance: 18,900.00
Min Due: 945.00
"""

AXIS_STATEMENT = """\
Flipkart Axis Bank Credit Card Statement
Name: Priya Sharma
Card No: 534567******9876
PAYMENT SUMMARY
Statement Period Payment Due Date
16/02/2024 - 15/03/2024 04/04/2024
Total Payment Due Minimum Payment Due
15,564.03 Dr 1,320.00 Dr
ACCOUNT SUMMARY
"""

KOTAK_STATEMENT = """\
Kotak Mahindra Bank Credit Card Statement
Name: RAHUL VERMA
Statement Period: 01/03/2024 - 31/03/2024
PAYMENT SUMMARY
Card No: XXXX XXXX XXXX 4455
Total Amount Due: Rs. 23,450.50
Minimum Amount Due: Rs. 1,172.50
Payment Due Date: 20/04/2024
"""

UNSUPPORTED_STATEMENT = """\
JPMorgan Chase Sapphire Statement
Account ending in 1234
New Balance: $1,200.00
"""


@pytest.fixture
def hdfc_statement() -> str:
    return HDFC_STATEMENT


@pytest.fixture
def sbi_statement() -> str:
    return SBI_STATEMENT


@pytest.fixture
def icici_statement() -> str:
    return ICICI_STATEMENT


@pytest.fixture
def axis_statement() -> str:
    return AXIS_STATEMENT


@pytest.fixture
def kotak_statement() -> str:
    return KOTAK_STATEMENT


@pytest.fixture
def unsupported_statement() -> str:
    return UNSUPPORTED_STATEMENT


@pytest.fixture
async def client():
    """Provide an HTTP client bound to the ASGI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
