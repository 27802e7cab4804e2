"""Field extraction for credit card statement text.

This package turns statement text into structured records using a
layered architecture:
- GenericStrategy handles patterns shared by most issuers
- Provider refinements override only what's different
- ExtractionOrchestrator detects the provider and dispatches
"""

from statement_extractor.parsers.billing_cycle import find_statement_date, infer_billing_cycle
from statement_extractor.parsers.detector import ProviderDetector
from statement_extractor.parsers.factory import (
    ExtractionOrchestrator,
    extract_statement,
    get_orchestrator,
)
from statement_extractor.parsers.generic import GenericStrategy
from statement_extractor.parsers.normalizers import parse_amount, parse_date

__all__ = [
    "ProviderDetector",
    "GenericStrategy",
    "ExtractionOrchestrator",
    "get_orchestrator",
    "extract_statement",
    "find_statement_date",
    "infer_billing_cycle",
    "parse_amount",
    "parse_date",
]
