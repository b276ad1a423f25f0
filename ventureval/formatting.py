"""
Display helpers for amounts held in thousands (£k), as shown by valuation hosts.
"""

from .config import CURRENCY_SYMBOL


def format_value(thousands: float, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """
    >>> format_value(850)
    '£850k'
    >>> format_value(1500)
    '£1.5m'
    >>> format_value(2_400_000)
    '£2.4bn'
    """
    v = float(thousands)
    if abs(v) >= 1_000_000:
        return f"{currency_symbol}{v / 1_000_000:.1f}bn"
    if abs(v) >= 1_000:
        return f"{currency_symbol}{v / 1_000:.1f}m"
    return f"{currency_symbol}{v:.0f}k"


def format_pct(fraction: float) -> str:
    """0.2311 -> '23.1%'"""
    return f"{float(fraction) * 100:.1f}%"


def format_multiple(multiple: float) -> str:
    """10 -> '10.0x'"""
    return f"{float(multiple):.1f}x"
