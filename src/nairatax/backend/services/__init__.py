"""Service-layer helpers for the NairaTax backend."""

from .calculation_service import calculate_business_analysis, calculate_personal_tax
from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "build_calculation_response",
    "calculate_business_analysis",
    "calculate_personal_tax",
    "parse_calculation_payload",
]
