# -*- coding: utf-8 -*-
"""Display helpers for emissions values and percentages."""


def format_number(value: float, decimals: int = 2) -> str:
    """
    Format with thousands separators and a fixed number of decimals.

    Example:
        >>> format_number(1234.5)
        '1,234.50'
    """
    return f"{value:,.{decimals}f}"


def format_signed_percentage(reduction: float, decimals: int = 1) -> str:
    """
    Render a reduction percentage the way comparison tables show it.

    A reduction (positive value) is shown with a minus sign, an increase
    with a plus sign.

    Example:
        >>> format_signed_percentage(12.34)
        '-12.3%'
        >>> format_signed_percentage(-4)
        '+4.0%'
    """
    sign = "-" if reduction > 0 else "+"
    return f"{sign}{abs(reduction):.{decimals}f}%"
