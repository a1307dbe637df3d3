"""
Bikram Sambat - Nepali (BS) <-> Gregorian (AD) date conversion for 2000-2100 BS
"""

__version__ = '1.0.0'
__author__ = 'Nepali Calendar Team'

# Import commonly used functions for easy access
from .calendar_data import (
    NEPALI_CALENDAR_DATA,
    NEPALI_DAYS,
    NEPALI_DAYS_EN,
    NEPALI_MONTHS,
    NEPALI_MONTHS_EN,
)
from .exceptions import DateConversionError, ErrorKind
from .utils import (
    NepaliDate,
    ad_to_bs,
    bs_to_ad,
    format_bs_date,
    get_current_fiscal_year,
    get_current_nepali_date,
    get_days_in_month,
    get_fiscal_year,
    get_fiscal_year_dates,
    get_month_calendar,
    get_nepali_month_name,
    get_nepali_weekday,
    is_date_in_range,
    is_valid_nepali_date,
    parse_bs_date,
    shift_month,
)

__all__ = [
    'NepaliDate',
    'DateConversionError',
    'ErrorKind',
    'ad_to_bs',
    'bs_to_ad',
    'format_bs_date',
    'get_current_fiscal_year',
    'get_current_nepali_date',
    'get_days_in_month',
    'get_fiscal_year',
    'get_fiscal_year_dates',
    'get_month_calendar',
    'get_nepali_month_name',
    'get_nepali_weekday',
    'is_date_in_range',
    'is_valid_nepali_date',
    'parse_bs_date',
    'shift_month',
    'NEPALI_CALENDAR_DATA',
    'NEPALI_MONTHS',
    'NEPALI_MONTHS_EN',
    'NEPALI_DAYS',
    'NEPALI_DAYS_EN',
]
