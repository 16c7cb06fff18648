"""
Formatting utilities.
"""

from typing import Optional, Union

NOT_AVAILABLE = "N/A"


def format_currency(amount: Union[int, float], currency: str = "USD") -> str:
    """
    Format an amount as currency.

    Args:
        amount: The amount in whole units (e.g., dollars, not cents).
        currency: Currency code (default USD).

    Returns:
        Formatted currency string.
    """
    symbols = {
        "USD": "$",
        "GBP": "£",
        "EUR": "€",
    }
    symbol = symbols.get(currency, currency + " ")
    if isinstance(amount, float) and not amount.is_integer():
        return f"{symbol}{amount:,.2f}"
    return f"{symbol}{int(amount):,}"


def format_optional_currency(amount: Optional[Union[int, float]], currency: str = "USD") -> str:
    """Format an amount, or N/A when it is missing."""
    if amount is None:
        return NOT_AVAILABLE
    return format_currency(amount, currency)


def format_budget_range(
    min_budget: Optional[int],
    max_budget: Optional[int],
    currency: str = "USD",
) -> str:
    """Format a buyer's budget band; an open side reads as 'Any'."""
    low = format_currency(min_budget, currency) if min_budget is not None else "Any"
    high = format_currency(max_budget, currency) if max_budget is not None else "Any"
    return f"{low} - {high}"
