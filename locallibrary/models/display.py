"""Display helpers shared by model properties."""
from datetime import date
from typing import Optional

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_date_medium(value: Optional[date]) -> str:
    """Render a date as e.g. "Jan 5, 1920"; empty string for no date.

    Month names are fixed English abbreviations, independent of the locale.
    """
    if value is None:
        return ""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"
