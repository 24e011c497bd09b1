"""Date utility functions."""
import re
from datetime import date, datetime
from typing import Optional

_ISO_DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


def parse_date(date_str: str) -> date:
    """
    Parse date string in YYYY-MM-DD format.

    A trailing ISO time part ("1990-05-14T00:00:00") is accepted and ignored.

    Args:
        date_str: Date string (e.g., "1990-05-14")

    Returns:
        date object

    Raises:
        ValueError: If date format or value is invalid
    """
    match = _ISO_DATE_PATTERN.match(date_str.strip())
    if not match:
        raise ValueError(f"Date must be in YYYY-MM-DD format: {date_str}")
    return datetime.strptime(match.group(1), "%Y-%m-%d").date()


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """
    Compute age in full elapsed years.

    Args:
        birth_date: Date of birth
        today: Reference date (defaults to date.today())

    Returns:
        Number of whole years between birth_date and today
    """
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def years_before(reference: date, years: int) -> date:
    """Same calendar day `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        return reference.replace(year=reference.year - years, day=28)


def now_iso() -> str:
    """Current local time as an ISO 8601 string with offset."""
    return datetime.now().astimezone().isoformat()
