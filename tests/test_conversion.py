"""
Tests for BS <-> AD conversion, validation, lookup and formatting
"""
from datetime import date, datetime, timedelta

import pytest

from bikram_sambat.calendar_data import (
    EPOCH_AD,
    NEPALI_CALENDAR_DATA,
    NEPALI_DAYS,
    NEPALI_MONTHS,
    YEAR_TOTALS,
)
from bikram_sambat.exceptions import DateConversionError, ErrorKind
from bikram_sambat.utils import (
    NepaliDate,
    ad_to_bs,
    bs_to_ad,
    format_bs_date,
    get_days_in_month,
    get_days_in_year,
    get_nepali_day_name,
    get_nepali_month_name,
    is_valid_nepali_date,
    parse_bs_date,
)

LAST_AD_DATE = date(2044, 4, 16)


def _all_bs_dates():
    for year, months in NEPALI_CALENDAR_DATA.items():
        for month, days in enumerate(months, start=1):
            for day in range(1, days + 1):
                yield NepaliDate(year, month, day)


# =============================================================================
# Calendar table
# =============================================================================


class TestCalendarTable:

    def test_covers_2000_to_2100(self):
        assert sorted(NEPALI_CALENDAR_DATA) == list(range(2000, 2101))

    def test_every_year_has_twelve_plausible_months(self):
        for year, months in NEPALI_CALENDAR_DATA.items():
            assert len(months) == 12, year
            assert all(days in (29, 30, 31, 32) for days in months), year

    def test_known_rows(self):
        assert NEPALI_CALENDAR_DATA[2000] == (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31)
        assert NEPALI_CALENDAR_DATA[2081] == (31, 31, 32, 32, 31, 30, 30, 30, 29, 30, 30, 30)
        assert NEPALI_CALENDAR_DATA[2100] == (31, 32, 31, 32, 30, 31, 30, 29, 30, 29, 30, 30)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            NEPALI_CALENDAR_DATA[2101] = (30,) * 12
        with pytest.raises(TypeError):
            NEPALI_CALENDAR_DATA[2000][0] = 31

    def test_year_totals_match_rows(self):
        for year, months in NEPALI_CALENDAR_DATA.items():
            assert YEAR_TOTALS[year] == sum(months)


# =============================================================================
# Day-count lookup
# =============================================================================


class TestDaysInMonth:

    def test_matches_table_everywhere(self):
        for year, months in NEPALI_CALENDAR_DATA.items():
            for month in range(1, 13):
                assert get_days_in_month(year, month) == months[month - 1]

    def test_known_value(self):
        assert get_days_in_month(2081, 8) == 30
        assert get_days_in_month(2000, 2) == 32

    @pytest.mark.parametrize("year, month", [
        (1999, 1), (2101, 1), (2081, 0), (2081, 13), (2081, -1), ('2081', 1), (2081, None),
    ])
    def test_invalid_year_or_month(self, year, month):
        with pytest.raises(DateConversionError) as exc_info:
            get_days_in_month(year, month)
        assert exc_info.value.kind == ErrorKind.INVALID_NEPALI_DATE
        assert exc_info.value.details == f"Year: {year}, Month: {month}"

    def test_days_in_year(self):
        assert get_days_in_year(2000) == 365
        with pytest.raises(DateConversionError):
            get_days_in_year(2101)


# =============================================================================
# Validator
# =============================================================================


class TestIsValidNepaliDate:

    def test_month_boundary(self):
        assert is_valid_nepali_date(NepaliDate(2000, 1, 30)) is True
        assert is_valid_nepali_date(NepaliDate(2000, 1, 31)) is False

    def test_year_boundary(self):
        assert is_valid_nepali_date(NepaliDate(1999, 1, 1)) is False
        assert is_valid_nepali_date(NepaliDate(2101, 1, 1)) is False
        assert is_valid_nepali_date(NepaliDate(2000, 1, 1)) is True
        assert is_valid_nepali_date(NepaliDate(2100, 12, 30)) is True

    @pytest.mark.parametrize("value", [
        NepaliDate(2081, 0, 1),
        NepaliDate(2081, 13, 1),
        NepaliDate(2081, 1, 0),
        NepaliDate(2081, 1, 32),
        NepaliDate(2081, 1, -5),
    ])
    def test_out_of_bounds_parts(self, value):
        assert is_valid_nepali_date(value) is False

    def test_accepts_tuple_dict_and_string(self):
        assert is_valid_nepali_date((2081, 8, 15))
        assert is_valid_nepali_date({'year': 2081, 'month': 8, 'day': 15})
        assert is_valid_nepali_date('2081/08/15')
        assert not is_valid_nepali_date('2081/08/31')

    @pytest.mark.parametrize("value", [
        None, 2081, (2081, 8), (2081, 8, 15, 1), {'year': 2081}, 'garbage',
        (2081.0, 8, 15), (2081, True, 1), ('2081', '8', '15'),
    ])
    def test_never_raises_on_garbage(self, value):
        assert is_valid_nepali_date(value) is False


# =============================================================================
# Forward conversion (AD -> BS)
# =============================================================================


class TestAdToBs:

    def test_epoch(self):
        assert ad_to_bs(date(1943, 4, 14)) == NepaliDate(2000, 1, 1)

    def test_day_before_epoch_is_out_of_range(self):
        with pytest.raises(DateConversionError) as exc_info:
            ad_to_bs(date(1943, 4, 13))
        assert exc_info.value.kind == ErrorKind.OUT_OF_RANGE
        assert exc_info.value.message == "Date is before supported range"

    @pytest.mark.parametrize("ad_date, expected", [
        (date(1944, 4, 12), NepaliDate(2000, 12, 31)),
        (date(1944, 4, 13), NepaliDate(2001, 1, 1)),
        (date(2024, 4, 18), NepaliDate(2081, 1, 1)),
        (date(2024, 7, 20), NepaliDate(2081, 3, 32)),
        (date(2024, 11, 21), NepaliDate(2081, 8, 1)),
        (date(2024, 12, 5), NepaliDate(2081, 8, 15)),
        (LAST_AD_DATE, NepaliDate(2100, 12, 30)),
    ])
    def test_known_dates(self, ad_date, expected):
        assert ad_to_bs(ad_date) == expected

    def test_datetime_time_of_day_is_ignored(self):
        assert ad_to_bs(datetime(1943, 4, 14, 23, 59, 59)) == NepaliDate(2000, 1, 1)
        with pytest.raises(DateConversionError):
            ad_to_bs(datetime(1943, 4, 13, 23, 59, 59))

    def test_iso_string(self):
        assert ad_to_bs('2024-12-05') == NepaliDate(2081, 8, 15)

    def test_result_is_nepali_date(self):
        result = ad_to_bs(date(2024, 12, 5))
        assert isinstance(result, NepaliDate)
        assert (result.year, result.month, result.day) == (2081, 8, 15)

    def test_past_last_supported_day_is_out_of_range(self):
        with pytest.raises(DateConversionError) as exc_info:
            ad_to_bs(LAST_AD_DATE + timedelta(days=1))
        assert exc_info.value.kind == ErrorKind.OUT_OF_RANGE
        assert exc_info.value.message == "Date is beyond supported range"

    def test_walk_past_table_never_returns_partial_date(self):
        for offset in range(1, 400):
            with pytest.raises(DateConversionError) as exc_info:
                ad_to_bs(LAST_AD_DATE + timedelta(days=offset))
            assert exc_info.value.kind == ErrorKind.OUT_OF_RANGE

    def test_far_future(self):
        with pytest.raises(DateConversionError) as exc_info:
            ad_to_bs(date(9999, 12, 31))
        assert exc_info.value.kind == ErrorKind.OUT_OF_RANGE

    @pytest.mark.parametrize("value", ['2024/12/05', '2024-13-01', 'not a date', 20241205, None])
    def test_unreadable_input(self, value):
        with pytest.raises(DateConversionError) as exc_info:
            ad_to_bs(value)
        assert exc_info.value.kind == ErrorKind.INVALID_ENGLISH_DATE
        assert exc_info.value.message == "Failed to convert English date to Nepali"
        assert exc_info.value.details
        assert exc_info.value.__cause__ is not None


# =============================================================================
# Reverse conversion (BS -> AD)
# =============================================================================


class TestBsToAd:

    @pytest.mark.parametrize("bs_date, expected", [
        (NepaliDate(2000, 1, 1), EPOCH_AD),
        (NepaliDate(2000, 12, 31), date(1944, 4, 12)),
        (NepaliDate(2001, 1, 1), date(1944, 4, 13)),
        (NepaliDate(2081, 1, 1), date(2024, 4, 18)),
        (NepaliDate(2081, 8, 15), date(2024, 12, 5)),
        (NepaliDate(2100, 12, 30), LAST_AD_DATE),
    ])
    def test_known_dates(self, bs_date, expected):
        assert bs_to_ad(bs_date) == expected

    def test_returns_plain_date(self):
        result = bs_to_ad(NepaliDate(2081, 8, 15))
        assert type(result) is date

    def test_accepts_tuple_dict_and_string(self):
        expected = date(2024, 12, 5)
        assert bs_to_ad((2081, 8, 15)) == expected
        assert bs_to_ad({'year': 2081, 'month': 8, 'day': 15}) == expected
        assert bs_to_ad('2081/08/15') == expected

    @pytest.mark.parametrize("bs_date, details", [
        (NepaliDate(2000, 1, 31), "Date: 2000/1/31"),
        (NepaliDate(1999, 12, 1), "Date: 1999/12/1"),
        (NepaliDate(2101, 1, 1), "Date: 2101/1/1"),
        (NepaliDate(2081, 13, 1), "Date: 2081/13/1"),
    ])
    def test_invalid_date(self, bs_date, details):
        with pytest.raises(DateConversionError) as exc_info:
            bs_to_ad(bs_date)
        assert exc_info.value.kind == ErrorKind.INVALID_NEPALI_DATE
        assert exc_info.value.message == "Invalid Nepali date provided"
        assert exc_info.value.details == details

    def test_garbage_is_invalid_nepali_date(self):
        with pytest.raises(DateConversionError) as exc_info:
            bs_to_ad(None)
        assert exc_info.value.kind == ErrorKind.INVALID_NEPALI_DATE


# =============================================================================
# Round trips over the whole supported range
# =============================================================================


def test_every_bs_date_round_trips():
    expected_ad = EPOCH_AD
    for bs_date in _all_bs_dates():
        ad_date = bs_to_ad(bs_date)
        assert ad_date == expected_ad, bs_date
        assert ad_to_bs(ad_date) == bs_date
        expected_ad += timedelta(days=1)


def test_every_ad_date_round_trips():
    ad_date = EPOCH_AD
    while ad_date <= LAST_AD_DATE:
        assert bs_to_ad(ad_to_bs(ad_date)) == ad_date
        ad_date += timedelta(days=1)


# =============================================================================
# Formatting and names
# =============================================================================


class TestFormatBsDate:

    def test_short(self):
        assert format_bs_date(NepaliDate(2081, 8, 15), 'short') == "2081/08/15"
        assert format_bs_date(NepaliDate(2000, 1, 1)) == "2000/01/01"

    def test_long_uses_month_name_table(self):
        # month N is NEPALI_MONTHS[N - 1]: 8 is मंसिर, 7 is कार्तिक
        assert format_bs_date(NepaliDate(2081, 8, 15), 'long') == "15 मंसिर 2081"
        assert format_bs_date(NepaliDate(2081, 7, 15), 'long') == "15 कार्तिक 2081"
        assert format_bs_date((2081, 1, 1), 'long') == "1 बैशाख 2081"

    def test_long_rejects_month_outside_table(self):
        with pytest.raises(DateConversionError) as exc_info:
            format_bs_date(NepaliDate(2081, 13, 1), 'long')
        assert exc_info.value.kind == ErrorKind.INVALID_NEPALI_DATE
        with pytest.raises(DateConversionError):
            format_bs_date(NepaliDate(2081, 0, 1), 'long')

    def test_short_does_not_validate(self):
        assert format_bs_date(NepaliDate(2081, 1, 40)) == "2081/01/40"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_bs_date(NepaliDate(2081, 8, 15), 'full')

    def test_str_of_nepali_date_is_short_format(self):
        assert str(NepaliDate(2081, 8, 5)) == "2081/08/05"


class TestNames:

    def test_table_sizes(self):
        assert len(NEPALI_MONTHS) == 12
        assert len(NEPALI_DAYS) == 7

    def test_month_names(self):
        assert get_nepali_month_name(1) == 'बैशाख'
        assert get_nepali_month_name(12) == 'चैत्र'
        assert get_nepali_month_name(8, english=True) == 'Mangsir'

    def test_day_names(self):
        assert get_nepali_day_name(0) == 'आइतबार'
        assert get_nepali_day_name(6, english=True) == 'Shanibar'
        with pytest.raises(ValueError):
            get_nepali_day_name(7)


# =============================================================================
# Parsing and error type
# =============================================================================


class TestParseBsDate:

    @pytest.mark.parametrize("text", ['2081/08/15', '2081-8-15', ' 2081/8/15 '])
    def test_valid(self, text):
        assert parse_bs_date(text) == NepaliDate(2081, 8, 15)

    @pytest.mark.parametrize("text", ['2081/08', '15/08/2081', '', 'abc', '2081/08/15/01'])
    def test_malformed(self, text):
        with pytest.raises(DateConversionError) as exc_info:
            parse_bs_date(text)
        assert exc_info.value.kind == ErrorKind.INVALID_NEPALI_DATE
        assert exc_info.value.message == "Malformed Nepali date"

    def test_nonexistent_date(self):
        with pytest.raises(DateConversionError) as exc_info:
            parse_bs_date('2081/13/01')
        assert exc_info.value.message == "Invalid Nepali date provided"


class TestDateConversionError:

    def test_is_value_error(self):
        error = DateConversionError(ErrorKind.OUT_OF_RANGE, "Year not supported", "Year: 2101")
        assert isinstance(error, ValueError)

    def test_kind_accepts_plain_string(self):
        error = DateConversionError('OUT_OF_RANGE', "Year not supported")
        assert error.kind is ErrorKind.OUT_OF_RANGE
        assert error.details is None

    def test_str_and_dict(self):
        error = DateConversionError(ErrorKind.OUT_OF_RANGE, "Year not supported", "Year: 2101")
        assert str(error) == "Year not supported (Year: 2101)"
        assert error.to_dict() == {
            'kind': 'OUT_OF_RANGE',
            'message': "Year not supported",
            'details': "Year: 2101",
        }
        assert str(DateConversionError(ErrorKind.OUT_OF_RANGE, "Year not supported")) == "Year not supported"
