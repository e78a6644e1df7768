"""Integer amount formatting.

All prices and totals are plain ints in the auction currency. No float, no Decimal.
"""

from config.settings import settings


def format_amount(amount: int) -> str:
    """Group thousands: 1234567 -> '1,234,567'."""
    return f"{amount:,}"


def mask_amount(amount: int, mask_char: str | None = None) -> str:
    """Blind display of an amount: every digit replaced, separators kept.

    1234567 -> '?,???,???'. Zero is masked too, so an empty lot and a
    contested lot look alike before close.
    """
    char = mask_char or settings.MASK_CHAR
    return "".join(char if c.isdigit() else c for c in format_amount(amount))
