"""
Utility functions for Nepali-English date conversion and fiscal year operations
"""
import logging
import re
from datetime import date, datetime, timedelta
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from django.conf import settings
from django.utils import timezone

from .calendar_data import (
    EPOCH_AD,
    MAX_BS_YEAR,
    MIN_BS_YEAR,
    NEPALI_CALENDAR_DATA,
    NEPALI_DAYS,
    NEPALI_DAYS_EN,
    NEPALI_MONTHS,
    NEPALI_MONTHS_EN,
    YEAR_TOTALS,
)
from .exceptions import DateConversionError, ErrorKind

logger = logging.getLogger(__name__)


class NepaliDate(NamedTuple):
    """A Bikram Sambat calendar date. Ordered by (year, month, day)."""
    year: int
    month: int
    day: int

    def __str__(self):
        return f"{self.year}/{self.month:02d}/{self.day:02d}"


EPOCH_BS = NepaliDate(2000, 1, 1)
DEFAULT_FALLBACK_DATE = NepaliDate(2081, 1, 1)

_BS_DATE_PATTERN = re.compile(r'^\s*(\d{4})[/-](\d{1,2})[/-](\d{1,2})\s*$')
_FISCAL_YEAR_PATTERN = re.compile(r'^(\d{4})/(\d{2})$')

BSDateLike = Union[NepaliDate, Tuple[int, int, int], Dict[str, int], str]
ADDateLike = Union[date, datetime, str]


def _as_nepali_date(value: BSDateLike) -> NepaliDate:
    """Read a NepaliDate, (year, month, day) tuple, dict or 'YYYY/MM/DD' string"""
    if isinstance(value, NepaliDate):
        return value
    if isinstance(value, str):
        return parse_bs_date(value)
    if isinstance(value, dict):
        return NepaliDate(value['year'], value['month'], value['day'])
    year, month, day = value
    return NepaliDate(year, month, day)


def _describe(value) -> str:
    try:
        year, month, day = _as_nepali_date(value)
    except (DateConversionError, KeyError, TypeError, ValueError):
        return repr(value)
    return f"{year}/{month}/{day}"


def _to_ad_date(value: ADDateLike) -> date:
    if isinstance(value, str):
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Unsupported date type: {type(value).__name__}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def get_nepali_month_name(month: int, english: bool = False) -> str:
    """Get Nepali month name from month number (1-12)"""
    if not _is_int(month) or month < 1 or month > 12:
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Invalid month",
            f"Month: {month}",
        )
    names = NEPALI_MONTHS_EN if english else NEPALI_MONTHS
    return names[month - 1]


def get_nepali_day_name(weekday: int, english: bool = False) -> str:
    """Get weekday name, 0 = Sunday ... 6 = Saturday"""
    if not _is_int(weekday) or weekday < 0 or weekday > 6:
        raise ValueError(f"Invalid weekday: {weekday}")
    names = NEPALI_DAYS_EN if english else NEPALI_DAYS
    return names[weekday]


def get_days_in_month(year: int, month: int) -> int:
    """
    Number of days in a BS month, straight from the calendar table

    Raises:
        DateConversionError (INVALID_NEPALI_DATE): year not in the table or month not in 1-12
    """
    months = NEPALI_CALENDAR_DATA.get(year) if _is_int(year) else None
    if months is None or not _is_int(month) or month < 1 or month > 12:
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Invalid year or month",
            f"Year: {year}, Month: {month}",
        )
    return months[month - 1]


def get_days_in_year(year: int) -> int:
    if not _is_int(year) or year not in YEAR_TOTALS:
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Invalid year",
            f"Year: {year}",
        )
    return YEAR_TOTALS[year]


def is_valid_nepali_date(bs_date: BSDateLike) -> bool:
    """Validate if a Nepali date is valid. Never raises."""
    try:
        year, month, day = _as_nepali_date(bs_date)
    except (DateConversionError, KeyError, TypeError, ValueError):
        return False

    if not (_is_int(year) and _is_int(month) and _is_int(day)):
        return False
    if year < MIN_BS_YEAR or year > MAX_BS_YEAR:
        return False
    if year not in NEPALI_CALENDAR_DATA:
        return False
    if month < 1 or month > 12:
        return False
    if day < 1 or day > NEPALI_CALENDAR_DATA[year][month - 1]:
        return False
    return True


def parse_bs_date(value: str) -> NepaliDate:
    """
    Parse a BS date written as YYYY/MM/DD or YYYY-MM-DD

    Raises:
        DateConversionError (INVALID_NEPALI_DATE): malformed text or a date
        that does not exist in the calendar table
    """
    match = _BS_DATE_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Malformed Nepali date",
            f"Expected YYYY/MM/DD, got {value!r}",
        )

    bs_date = NepaliDate(*(int(part) for part in match.groups()))
    if not is_valid_nepali_date(bs_date):
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Invalid Nepali date provided",
            f"Date: {bs_date.year}/{bs_date.month}/{bs_date.day}",
        )
    return bs_date


def count_days_from_epoch(year: int, month: int, day: int) -> int:
    """Count total days from 2000/01/01 BS"""
    total_days = 0

    # Add days for complete years
    for y in range(EPOCH_BS.year, year):
        if y not in YEAR_TOTALS:
            raise DateConversionError(ErrorKind.OUT_OF_RANGE, "Year not supported", f"Year: {y}")
        total_days += YEAR_TOTALS[y]

    # Add days for complete months in target year
    months = NEPALI_CALENDAR_DATA.get(year)
    if months is None:
        raise DateConversionError(ErrorKind.OUT_OF_RANGE, "Year not supported", f"Year: {year}")
    total_days += sum(months[:month - 1])

    # Add remaining days
    total_days += day - EPOCH_BS.day

    return total_days


def bs_to_ad(bs_date: BSDateLike) -> date:
    """
    Convert Bikram Sambat (BS) date to Anno Domini (AD) date

    Args:
        bs_date: NepaliDate, (year, month, day) tuple, dict or 'YYYY/MM/DD' string

    Returns:
        date object representing the AD date

    Raises:
        DateConversionError: INVALID_NEPALI_DATE if the date fails validation,
        OUT_OF_RANGE if a year on the way has no calendar data
    """
    if not is_valid_nepali_date(bs_date):
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Invalid Nepali date provided",
            f"Date: {_describe(bs_date)}",
        )

    try:
        year, month, day = _as_nepali_date(bs_date)
        days_diff = count_days_from_epoch(year, month, day)
        return EPOCH_AD + timedelta(days=days_diff)
    except DateConversionError:
        raise
    except Exception as exc:
        logger.debug("BS to AD conversion failed for %r", bs_date, exc_info=True)
        raise DateConversionError(
            ErrorKind.INVALID_NEPALI_DATE,
            "Failed to convert Nepali date to English",
            str(exc),
        ) from exc


def ad_to_bs(ad_date: ADDateLike) -> NepaliDate:
    """
    Convert Anno Domini (AD) date to Bikram Sambat (BS) date

    Args:
        ad_date: date, datetime (time of day is ignored) or 'YYYY-MM-DD' string

    Returns:
        NepaliDate

    Raises:
        DateConversionError: OUT_OF_RANGE if the date is before 1943/04/14 AD or
        past the last day of 2100 BS, INVALID_ENGLISH_DATE if the input cannot
        be read as a date
    """
    try:
        ad_date = _to_ad_date(ad_date)
        days_diff = (ad_date - EPOCH_AD).days

        if days_diff < 0:
            raise DateConversionError(
                ErrorKind.OUT_OF_RANGE,
                "Date is before supported range",
                f"Minimum supported date is {EPOCH_AD.strftime('%B %d, %Y')} AD",
            )

        year, month = EPOCH_BS.year, EPOCH_BS.month
        day = EPOCH_BS.day + days_diff

        # Skip whole years, month stays at Baisakh while doing so
        while year in YEAR_TOTALS and day > YEAR_TOTALS[year]:
            day -= YEAR_TOTALS[year]
            year += 1

        while True:
            months = NEPALI_CALENDAR_DATA.get(year)
            if months is None:
                raise DateConversionError(
                    ErrorKind.OUT_OF_RANGE,
                    "Date is beyond supported range",
                    f"Maximum supported year is {MAX_BS_YEAR} BS",
                )

            days_in_month = months[month - 1]
            if day <= days_in_month:
                break

            day -= days_in_month
            month += 1
            if month > 12:
                month = 1
                year += 1
    except DateConversionError:
        raise
    except Exception as exc:
        logger.debug("AD to BS conversion failed for %r", ad_date, exc_info=True)
        raise DateConversionError(
            ErrorKind.INVALID_ENGLISH_DATE,
            "Failed to convert English date to Nepali",
            str(exc),
        ) from exc

    return NepaliDate(year, month, day)


def format_bs_date(bs_date: BSDateLike, format: str = 'short') -> str:
    """
    Format BS date

    'short' gives 2081/08/15, 'long' gives the day, the Nepali month name and
    the year. The long form raises INVALID_NEPALI_DATE for a month outside
    1-12; nothing else is validated.
    """
    year, month, day = _as_nepali_date(bs_date)

    if format == 'short':
        return f"{year}/{month:02d}/{day:02d}"
    if format == 'long':
        return f"{day} {get_nepali_month_name(month)} {year}"
    raise ValueError(f"Unknown format: {format!r}. Use 'short' or 'long'")


def _fallback_date() -> NepaliDate:
    value = DEFAULT_FALLBACK_DATE
    if settings.configured:
        value = getattr(settings, 'BIKRAM_SAMBAT_FALLBACK_DATE', DEFAULT_FALLBACK_DATE)
    if not is_valid_nepali_date(value):
        logger.error("BIKRAM_SAMBAT_FALLBACK_DATE %r is not a valid BS date", value)
        return DEFAULT_FALLBACK_DATE
    return _as_nepali_date(value)


def local_today() -> date:
    """Today's AD date, in TIME_ZONE when USE_TZ is on"""
    if settings.configured and settings.USE_TZ:
        return timezone.localdate()
    return date.today()


def get_current_nepali_date(today: Optional[ADDateLike] = None, strict: bool = False) -> NepaliDate:
    """
    Today's date in BS

    Args:
        today: AD date to treat as today, defaults to local_today()
        strict: raise DateConversionError instead of falling back

    Returns:
        NepaliDate. With strict=False this never raises: when today cannot be
        converted the BIKRAM_SAMBAT_FALLBACK_DATE setting (2081/01/01 by
        default) is returned instead.
    """
    try:
        if today is None:
            today = local_today()
        return ad_to_bs(today)
    except Exception as exc:
        if strict:
            if isinstance(exc, DateConversionError):
                raise
            raise DateConversionError(
                ErrorKind.INVALID_ENGLISH_DATE,
                "Could not determine today's date",
                str(exc),
            ) from exc
        fallback = _fallback_date()
        logger.warning(
            "Current date %s is out of supported range, using fallback date %s: %s",
            today, fallback, exc,
        )
        return fallback


def get_nepali_weekday(bs_date: BSDateLike) -> int:
    """Day of week for a BS date, 0 = Sunday ... 6 = Saturday"""
    return (bs_to_ad(bs_date).weekday() + 1) % 7


def get_month_calendar(year: int, month: int) -> List[List[int]]:
    """
    Weeks of a BS month, Sunday first, in the shape of calendar.monthcalendar:
    days outside the month are 0.
    """
    days_in_month = get_days_in_month(year, month)
    first_weekday = get_nepali_weekday(NepaliDate(year, month, 1))

    cells = [0] * first_weekday + list(range(1, days_in_month + 1))
    cells += [0] * (-len(cells) % 7)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def shift_month(bs_date: BSDateLike, offset: int) -> NepaliDate:
    """
    Move a BS date by whole months. The result is always day 1 of the month.

    Raises:
        DateConversionError (OUT_OF_RANGE): target year has no calendar data
    """
    year, month, _ = _as_nepali_date(bs_date)
    new_year, new_month = divmod(year * 12 + (month - 1) + offset, 12)

    if new_year not in NEPALI_CALENDAR_DATA:
        raise DateConversionError(
            ErrorKind.OUT_OF_RANGE,
            f"Year {new_year} is out of supported range ({MIN_BS_YEAR}-{MAX_BS_YEAR})",
            f"From: {year}/{month}, Offset: {offset}",
        )
    return NepaliDate(new_year, new_month + 1, 1)


def is_date_in_range(bs_date: BSDateLike,
                     min_date: Optional[BSDateLike] = None,
                     max_date: Optional[BSDateLike] = None) -> bool:
    """Inclusive bounds check; a missing bound is open"""
    bs_date = _as_nepali_date(bs_date)
    if min_date is not None and bs_date < _as_nepali_date(min_date):
        return False
    if max_date is not None and bs_date > _as_nepali_date(max_date):
        return False
    return True


def get_fiscal_year(date_value, format='string'):
    """
    Get fiscal year for a given date
    Nepal fiscal year: Shrawan 1 to Ashadh end (approximately July to July)

    Args:
        date_value: AD date (date, datetime or 'YYYY-MM-DD') or BS date
            (NepaliDate, tuple or dict with year, month, day)
        format: 'string' returns "2081/82", 'dict' returns {'start_year': 2081, 'end_year': 2082}

    Returns:
        Fiscal year string or dict
    """
    if isinstance(date_value, (date, str)):
        bs_date = ad_to_bs(date_value)
    else:
        bs_date = _as_nepali_date(date_value)

    # Fiscal year starts from Shrawan (month 4)
    if bs_date.month >= 4:
        start_year = bs_date.year
    else:
        start_year = bs_date.year - 1
    end_year = start_year + 1

    if format == 'dict':
        return {'start_year': start_year, 'end_year': end_year}
    return f"{start_year}/{str(end_year)[-2:]}"


def get_fiscal_year_dates(fiscal_year_string: str) -> Tuple[date, date]:
    """
    Get start and end dates for a fiscal year

    Args:
        fiscal_year_string: String like "2081/82"

    Returns:
        Tuple of (start_date, end_date) as AD dates

    Raises:
        ValueError: label is not in the YYYY/YY form
        DateConversionError: either end of the fiscal year has no calendar data
    """
    match = _FISCAL_YEAR_PATTERN.match(fiscal_year_string.strip())
    if match is None:
        raise ValueError(f"Invalid fiscal year: {fiscal_year_string!r}. Expected format like 2081/82")

    start_year = int(match.group(1))
    end_year = start_year + 1
    if match.group(2) != str(end_year)[-2:]:
        raise ValueError(f"Invalid fiscal year: {fiscal_year_string!r}. {start_year} is followed by {end_year}")

    # Fiscal year starts on Shrawan 1 and ends on the last day of Ashadh
    start_date = bs_to_ad(NepaliDate(start_year, 4, 1))
    ashadh_days = get_days_in_month(end_year, 3)
    end_date = bs_to_ad(NepaliDate(end_year, 3, ashadh_days))

    return start_date, end_date


def get_current_fiscal_year() -> str:
    """Get current fiscal year based on today's date"""
    return get_fiscal_year(get_current_nepali_date())
