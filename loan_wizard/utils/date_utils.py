"""Date manipulation utilities"""

from datetime import date


def age_on(birth_date: date, on: date) -> int:
    """Whole years between birth_date and on; one less if the birthday is still ahead this year"""
    years = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years
