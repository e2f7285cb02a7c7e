import os
import sys

# Keep tests off the network and away from a developer's .env OCR key
os.environ.setdefault("OCR_SPACE_API_KEY", "")
os.environ.setdefault("OCR_LOCAL_ENABLED", "false")


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so `warrant`, `services` and `settings` resolve
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


import pytest


SAMPLE_WARRANT = """\
Augusta Warrant 42 03/15/2024
Vendor Jrnl Check Month Description Account Amount Encumbrance

12345 ACME SUPPLY CO
1001 24567 03 Office supplies 150.00 20.00
E 1-2-34
GENERAL GOVT - ADMIN / Supplies
Invoice Total 150.00
23456 BOB'S PLUMBING & HEATING
1002 24568 03 Boiler repair
FUND 1 / GENERAL FUND
G 2-10-05 1,250.50 0.00
Vendor Total 1,250.50
34567 CITY OF AUGUSTA
1003 24569 03 Sewer fee E 3-4-56 75.25 0.00
Warrant Total 1,475.75
WE CERTIFY THE ABOVE
TREASURER
"""

LOW_SIGNAL_WARRANT = """\
Augusta Warrant 7 04/01/2025
12345 ACME SUPPLY CO
Road salt delivery 24501 2,500.00
Sand 300.00
Vendor Total 2,800.00
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_WARRANT


@pytest.fixture
def low_signal_text() -> str:
    return LOW_SIGNAL_WARRANT


class FakeExtractor:
    """Stands in for TextExtractor; returns canned text or raises."""

    def __init__(self, text: str = "", error: Exception | None = None, source: str = "text_layer") -> None:
        self.text = text
        self.error = error
        self.source = source
        self.calls = []

    def extract(self, content: bytes, filename=None):
        from services.text_extraction import ExtractedText

        self.calls.append((content, filename))
        if self.error is not None:
            raise self.error
        return ExtractedText(text=self.text, source=self.source, pages_count=1)


@pytest.fixture
def fake_extractor_factory():
    return FakeExtractor
