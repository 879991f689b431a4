"""Display formatting for the single fixed locale (pt-BR, BRL)."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ledger.config import get_settings


CENTS = Decimal("0.01")


def format_currency(
    value: Union[Decimal, int, float],
    symbol: Optional[str] = None,
) -> str:
    """
    Render an amount the pt-BR way.

    >>> format_currency(Decimal("1234.5"))
    'R$ 1.234,50'
    >>> format_currency(-700)
    '-R$ 700,00'
    """
    symbol = symbol if symbol is not None else get_settings().app.currency_symbol
    amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    # 1,234.56 -> 1.234,56
    body = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {body}"


def format_share(share: float, decimals: int = 0) -> str:
    """Render a 0..1 fraction as a percentage (pie labels use 0 decimals)."""
    return f"{share * 100:.{decimals}f}%"
