from django.contrib import admin
from django.utils.html import format_html

from .models import NepaliCalendar, FiscalYear
from .utils import format_bs_date


@admin.register(NepaliCalendar)
class NepaliCalendarAdmin(admin.ModelAdmin):
    list_display = ['bs_year', 'month_display', 'month_name_nepali', 'days_in_month', 'ad_start_date']
    list_filter = ['bs_year', 'month']
    search_fields = ['bs_year']
    ordering = ['-bs_year', 'month']
    list_per_page = 50

    def month_display(self, obj):
        return obj.get_month_display()
    month_display.short_description = 'Month'
    month_display.admin_order_field = 'month'

    def month_name_nepali(self, obj):
        return obj.month_name_nepali
    month_name_nepali.short_description = 'महिना'

    fieldsets = (
        ('Nepali Date', {
            'fields': ('bs_year', 'month', 'days_in_month')
        }),
        ('Gregorian Reference', {
            'fields': ('ad_start_date',)
        }),
    )


@admin.register(FiscalYear)
class FiscalYearAdmin(admin.ModelAdmin):
    list_display = [
        'fiscal_year',
        'bs_period',
        'ad_date_range',
        'total_days',
        'quarter',
        'status_badge',
    ]
    list_filter = ['is_current', 'bs_start_year']
    search_fields = ['fiscal_year', 'fiscal_year_english']
    ordering = ['-bs_start_year']
    readonly_fields = ['fiscal_year_english', 'bs_period', 'ad_date_range', 'total_days', 'quarter']

    def bs_period(self, obj):
        return f"{format_bs_date(obj.bs_start, 'long')} - {format_bs_date(obj.bs_end, 'long')}"
    bs_period.short_description = 'BS Period'

    def ad_date_range(self, obj):
        return obj.ad_display
    ad_date_range.short_description = 'AD Period'

    def quarter(self, obj):
        current = obj.current_quarter
        return f"Q{current}" if current else '-'
    quarter.short_description = 'Quarter'

    def status_badge(self, obj):
        if obj.is_current:
            return format_html('<strong style="color: #28a745;">{}</strong>', 'CURRENT')
        return format_html('<span style="color: #6c757d;">{}</span>', 'Inactive')
    status_badge.short_description = 'Status'

    fieldsets = (
        (None, {
            'fields': ('fiscal_year', 'fiscal_year_english', 'notes')
        }),
        ('Bikram Sambat', {
            'fields': (
                ('bs_start_year', 'bs_start_month', 'bs_start_day'),
                ('bs_end_year', 'bs_end_month', 'bs_end_day'),
                'bs_period',
            )
        }),
        ('Gregorian', {
            'fields': (('ad_start_date', 'ad_end_date'), 'ad_date_range', 'total_days', 'quarter')
        }),
    )
