"""Integer money helpers.

All amounts and balances are stored as int cents. No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '65.00', -1200 -> '-12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-{abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"{cents // 100:,}.{cents % 100:02d}"


def percent_of(part: int, whole: int) -> float:
    """part * 100 / whole, rounded to 2 places. A non-positive whole yields 0.0."""
    if whole <= 0:
        return 0.0
    return round(part * 100.0 / whole, 2)
