"""Date helpers."""
from datetime import date
from typing import Optional


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """
    Full years elapsed since birth_date.

    Examples:
        >>> calculate_age(date(2000, 6, 15), today=date(2024, 6, 14))
        23
        >>> calculate_age(date(2000, 6, 15), today=date(2024, 6, 15))
        24
    """
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
