from django.db import models
from django.core.exceptions import ValidationError

from .calendar_data import NEPALI_MONTHS, NEPALI_MONTHS_EN
from .utils import NepaliDate, ad_to_bs, bs_to_ad, get_days_in_month, local_today


class NepaliCalendar(models.Model):
    """Stored copy of the BS month table with the AD date each month starts on"""

    MONTH_CHOICES = [(number, name) for number, name in enumerate(NEPALI_MONTHS_EN, start=1)]

    bs_year = models.IntegerField(db_index=True, help_text="Bikram Sambat Year")
    month = models.IntegerField(choices=MONTH_CHOICES, db_index=True)
    days_in_month = models.IntegerField(help_text="Number of days in this month")
    ad_start_date = models.DateField(
        help_text="Gregorian date when this BS month starts",
        null=True,
        blank=True
    )

    class Meta:
        ordering = ['bs_year', 'month']
        unique_together = [['bs_year', 'month']]
        verbose_name = "Nepali Calendar Entry"
        verbose_name_plural = "Nepali Calendar"
        indexes = [
            models.Index(fields=['bs_year', 'month']),
        ]

    def __str__(self):
        return f"{self.get_month_display()} {self.bs_year} ({self.days_in_month} days)"

    def clean(self):
        if self.month < 1 or self.month > 12:
            raise ValidationError("Month must be between 1 and 12")
        if self.days_in_month < 29 or self.days_in_month > 32:
            raise ValidationError("Days in month must be between 29 and 32")

    @property
    def month_name(self):
        return self.get_month_display()

    @property
    def month_name_nepali(self):
        return NEPALI_MONTHS[self.month - 1]


class FiscalYear(models.Model):
    """Nepal Fiscal Year runs from Shrawan 1 to Ashadh end (July-July)"""

    fiscal_year = models.CharField(
        max_length=10,
        unique=True,
        db_index=True,
        help_text="Nepali Fiscal Year Format: 2081/82"
    )

    fiscal_year_english = models.CharField(
        max_length=10,
        db_index=True,
        help_text="English Fiscal Year Format: 2024/25",
        blank=True,
        null=True
    )

    # BS Dates
    bs_start_year = models.IntegerField()
    bs_start_month = models.IntegerField(default=4)  # Shrawan
    bs_start_day = models.IntegerField(default=1)

    bs_end_year = models.IntegerField()
    bs_end_month = models.IntegerField(default=3)  # Ashadh
    bs_end_day = models.IntegerField()  # Usually 31 or 32

    # AD Dates (converted)
    ad_start_date = models.DateField(db_index=True)
    ad_end_date = models.DateField(db_index=True)
    ad_start_year = models.IntegerField(help_text="Starting AD year", null=True, blank=True)
    ad_end_year = models.IntegerField(help_text="Ending AD year", null=True, blank=True)

    is_current = models.BooleanField(default=False, db_index=True)

    total_days = models.IntegerField(help_text="Total days in fiscal year")
    notes = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-bs_start_year']
        verbose_name = "Fiscal Year"
        verbose_name_plural = "Fiscal Years"
        indexes = [
            models.Index(fields=['-bs_start_year']),
            models.Index(fields=['ad_start_date', 'ad_end_date']),
        ]

    def __str__(self):
        return f"FY {self.fiscal_year}"

    def clean(self):
        if self.bs_start_month != 4:
            raise ValidationError("Fiscal year must start in Shrawan (month 4)")
        if self.bs_end_month != 3:
            raise ValidationError("Fiscal year must end in Ashadh (month 3)")
        if self.ad_end_date <= self.ad_start_date:
            raise ValidationError("End date must be after start date")

    def save(self, *args, **kwargs):
        if self.ad_start_date and self.ad_end_date:
            self.ad_start_year = self.ad_start_date.year
            self.ad_end_year = self.ad_end_date.year

            if self.ad_start_year == self.ad_end_year:
                self.fiscal_year_english = str(self.ad_start_year)
            else:
                self.fiscal_year_english = f"{self.ad_start_year}/{str(self.ad_end_year)[-2:]}"

        today = local_today()
        if self.ad_start_date <= today <= self.ad_end_date:
            # Only one fiscal year can be current
            FiscalYear.objects.filter(is_current=True).exclude(pk=self.pk).update(is_current=False)
            self.is_current = True
        else:
            self.is_current = False

        super().save(*args, **kwargs)

    @staticmethod
    def defaults_for(start_year):
        """
        Field values for the fiscal year starting in BS year start_year

        Raises DateConversionError when start_year or start_year + 1 has no
        calendar data.
        """
        end_year = start_year + 1
        ashadh_days = get_days_in_month(end_year, 3)
        ad_start = bs_to_ad(NepaliDate(start_year, 4, 1))
        ad_end = bs_to_ad(NepaliDate(end_year, 3, ashadh_days))

        return {
            'bs_start_year': start_year,
            'bs_start_month': 4,
            'bs_start_day': 1,
            'bs_end_year': end_year,
            'bs_end_month': 3,
            'bs_end_day': ashadh_days,
            'ad_start_date': ad_start,
            'ad_end_date': ad_end,
            'total_days': (ad_end - ad_start).days + 1,
        }

    @classmethod
    def get_current_fiscal_year(cls):
        """Get the current fiscal year"""
        return cls.objects.filter(is_current=True).first()

    @classmethod
    def get_fiscal_year_for_date(cls, date):
        """Get fiscal year for a given date"""
        return cls.objects.filter(
            ad_start_date__lte=date,
            ad_end_date__gte=date
        ).first()

    def get_quarter(self, date):
        """
        Get quarter (1-4) for a date within this fiscal year

        Quarters follow BS months: Shrawan-Ashwin, Kartik-Poush, Magh-Chaitra,
        Baisakh-Ashadh.
        """
        if not (self.ad_start_date <= date <= self.ad_end_date):
            return None

        month = ad_to_bs(date).month
        return ((month - 4) % 12) // 3 + 1

    @property
    def bs_start(self):
        return NepaliDate(self.bs_start_year, self.bs_start_month, self.bs_start_day)

    @property
    def bs_end(self):
        return NepaliDate(self.bs_end_year, self.bs_end_month, self.bs_end_day)

    @property
    def current_quarter(self):
        return self.get_quarter(local_today())

    @property
    def display_name(self):
        return f"FY {self.fiscal_year} (AD: {self.fiscal_year_english})"

    @property
    def bs_display(self):
        return f"{self.bs_start} - {self.bs_end}"

    @property
    def ad_display(self):
        return f"{self.ad_start_date.strftime('%Y-%m-%d')} to {self.ad_end_date.strftime('%Y-%m-%d')}"

    @property
    def full_display(self):
        return (
            f"BS: {self.fiscal_year} | AD: {self.fiscal_year_english} "
            f"({self.ad_start_date.strftime('%b %Y')} - {self.ad_end_date.strftime('%b %Y')})"
        )
