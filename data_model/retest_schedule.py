"""
Retest scheduling for tested appliances.

Retest periods follow the AS/NZS 3760 in-service inspection schedule, keyed by the environment the appliance is
installed in. The schedule is regulatory and static, so it lives here as a fixed table rather than in configuration.
"""
import re
from calendar import monthrange
from datetime import date, datetime
from enum import StrEnum

from exceptions import ARDateFormatException, ARInternalException

_CANONICAL_DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


class EnvironmentClass(StrEnum):
    """
    Installation environment of a tested appliance
    """

    GALLEY_WORKSHOP_WET = 'GalleyWorkshopWet'
    DC = 'DC'
    CABINETS = 'Cabinets'
    CABINS = 'Cabins'
    CLEANING = 'Cleaning'
    PRIVATE_APPLICATION = 'PrivateApplication'

    @classmethod
    def from_str(cls, label: str) -> 'EnvironmentClass':
        return cls(label)


_RETEST_INTERVAL_MONTHS = {
    EnvironmentClass.GALLEY_WORKSHOP_WET: 6,
    EnvironmentClass.DC: 12,
    EnvironmentClass.CABINETS: 60,
    EnvironmentClass.CABINS: 24,
    EnvironmentClass.CLEANING: 6,
    EnvironmentClass.PRIVATE_APPLICATION: 36,
}


def interval_months(environment: EnvironmentClass) -> int:
    try:
        return _RETEST_INTERVAL_MONTHS[environment]
    except KeyError as e:
        # Only reachable if a caller bypasses the enum, which is a bug on our side
        raise ARInternalException(f'No retest interval defined for environment {environment!r}') from e


def compute_retest(test_date: date, environment: EnvironmentClass) -> date:
    """
    Calculate the date an appliance is next due for testing.

    Adds the environment's retest interval in calendar months, keeping the day of the month. If the target month is
    too short for that day, the result is clamped to the last day of the target month, so a test on 2023-08-31 with a
    six month interval is due on 2024-02-29.

    :param date test_date: The date the appliance was tested
    :param EnvironmentClass environment: The environment the appliance is installed in
    :return: The retest date
    """
    month_index = test_date.month - 1 + interval_months(environment)
    year = test_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(test_date.day, monthrange(year, month)[1])
    return date(year, month, day)


def parse_date(text: str) -> date:
    """
    Parse a date in the canonical YYYY-MM-DD form, with a four digit year and two digit month and day.
    """
    if not isinstance(text, str) or _CANONICAL_DATE_PATTERN.fullmatch(text) is None:
        raise ARDateFormatException(f'Invalid date: {text!r}, expected YYYY-MM-DD')
    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError as e:
        # Right shape, but not a real calendar date, like 2024-13-01
        raise ARDateFormatException(f'Invalid date: {text!r}, expected YYYY-MM-DD') from e
