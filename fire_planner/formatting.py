"""Indian-numbering display helpers. Engine values stay plain floats."""
from __future__ import annotations

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000
RUPEE = "₹"


def format_currency(amount: float) -> str:
    if amount >= CRORE:
        return f"{RUPEE}{amount / CRORE:.2f} Cr"
    if amount >= LAKH:
        return f"{RUPEE}{amount / LAKH:.2f} L"
    if amount >= THOUSAND:
        return f"{RUPEE}{amount / THOUSAND:.0f}K"
    return f"{RUPEE}{amount:.0f}"


def format_percent(value: float, digits: int = 2) -> str:
    return f"{value:.{digits}f}%"
