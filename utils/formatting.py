"""Output formatting utilities for the burn dashboard.

Provides reusable functions for:
- Formatting USD and Canton Coin (CC) amounts
- Percentages and counts
- Shortening long party identifiers for chart labels
"""

from typing import Optional


def format_usd(value: Optional[float], precision: int = 2) -> str:
    """Format a USD amount for display.

    Args:
        value: Amount in US dollars (can be None)
        precision: Decimal places (default: 2)

    Returns:
        Formatted string like "$1,234.50"

    Examples:
        format_usd(1234.5) -> "$1,234.50"
        format_usd(0) -> "$0.00"
        format_usd(None) -> "-"
    """
    if value is None:
        return "-"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{precision}f}"


def format_cc(value: Optional[float], precision: int = 2) -> str:
    """Format a Canton Coin amount for display.

    Examples:
        format_cc(1234.5) -> "1,234.50 CC"
        format_cc(None) -> "-"
    """
    if value is None:
        return "-"
    return f"{value:,.{precision}f} CC"


def format_percent(value: Optional[float], precision: int = 1) -> str:
    """Format a percentage for display.

    Args:
        value: Percentage value (0.0 to 100.0)
        precision: Decimal places (default: 1)

    Returns:
        Formatted string like "42.5%"

    Examples:
        format_percent(42.5) -> "42.5%"
        format_percent(0) -> "0.0%"
        format_percent(None) -> "-"
    """
    if value is None:
        return "-"
    return f"{value:.{precision}f}%"


def format_count(value: Optional[int]) -> str:
    """Format a count with thousands separator.

    Examples:
        format_count(1234567) -> "1,234,567"
        format_count(None) -> "-"
    """
    if value is None:
        return "-"
    return f"{value:,d}"


def percent_of(part: float, whole: float) -> Optional[float]:
    """Return *part* as a percentage of *whole*, or None when *whole* is zero."""
    if not whole:
        return None
    return part / whole * 100


def short_id(identifier: str, length: int = 8) -> str:
    """Return the last *length* characters of an identifier.

    Canton party ids end in a long fingerprint; its tail is what
    distinguishes parties on a chart axis.

    Examples:
        short_id("DSO::1220abcdef0123") -> "cdef0123"
    """
    return identifier[-length:] if length > 0 else identifier
