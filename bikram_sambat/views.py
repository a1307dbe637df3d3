import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .calendar_data import NEPALI_DAYS, NEPALI_DAYS_EN, NEPALI_MONTHS, NEPALI_MONTHS_EN
from .exceptions import DateConversionError, ErrorKind
from .utils import (
    ad_to_bs,
    bs_to_ad,
    format_bs_date,
    get_current_nepali_date,
    get_days_in_month,
    get_fiscal_year,
    get_month_calendar,
    get_nepali_month_name,
    get_nepali_weekday,
    parse_bs_date,
)

logger = logging.getLogger(__name__)


def _bs_payload(bs_date):
    weekday = get_nepali_weekday(bs_date)
    return {
        'year': bs_date.year,
        'month': bs_date.month,
        'day': bs_date.day,
        'month_name': get_nepali_month_name(bs_date.month),
        'month_name_en': get_nepali_month_name(bs_date.month, english=True),
        'weekday': weekday,
        'weekday_name': NEPALI_DAYS[weekday],
        'short': format_bs_date(bs_date, 'short'),
        'long': format_bs_date(bs_date, 'long'),
        'fiscal_year': get_fiscal_year(bs_date),
    }


def _error_response(error, status=400):
    return JsonResponse({'error': error.to_dict()}, status=status)


def conversion_errors(view):
    """Turn DateConversionError into a 400 JSON response"""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except DateConversionError as e:
            logger.info("%s %s rejected: %s", request.method, request.path, e)
            return _error_response(e)
    return wrapper


def _required_param(request, name, kind):
    value = request.GET.get(name, '').strip()
    if not value:
        raise DateConversionError(kind, f"Missing '{name}' parameter")
    return value


@require_GET
@conversion_errors
def ad_to_bs_view(request):
    """GET ?date=YYYY-MM-DD"""
    ad_date = _required_param(request, 'date', ErrorKind.INVALID_ENGLISH_DATE)
    bs_date = ad_to_bs(ad_date)
    return JsonResponse({'ad_date': ad_date, 'bs_date': _bs_payload(bs_date)})


@require_GET
@conversion_errors
def bs_to_ad_view(request):
    """GET ?date=YYYY/MM/DD"""
    bs_date = parse_bs_date(_required_param(request, 'date', ErrorKind.INVALID_NEPALI_DATE))
    ad_date = bs_to_ad(bs_date)
    return JsonResponse({'ad_date': ad_date.isoformat(), 'bs_date': _bs_payload(bs_date)})


@require_GET
@conversion_errors
def month_days_view(request, year, month):
    return JsonResponse({
        'year': year,
        'month': month,
        'days_in_month': get_days_in_month(year, month),
    })


@require_GET
@conversion_errors
def month_calendar_view(request, year, month):
    return JsonResponse({
        'year': year,
        'month': month,
        'month_name': get_nepali_month_name(month),
        'weeks': get_month_calendar(year, month),
    })


@require_GET
def today_view(request):
    bs_date = get_current_nepali_date()
    return JsonResponse({'bs_date': _bs_payload(bs_date)})


@require_GET
def names_view(request):
    return JsonResponse({
        'months': list(NEPALI_MONTHS),
        'months_en': list(NEPALI_MONTHS_EN),
        'days': list(NEPALI_DAYS),
        'days_en': list(NEPALI_DAYS_EN),
    }, json_dumps_params={'ensure_ascii': False})
