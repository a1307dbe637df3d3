"""
Management command to populate fiscal years
Usage: python manage.py populate_fiscal_years
"""
import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from bikram_sambat.calendar_data import MAX_BS_YEAR, MIN_BS_YEAR, NEPALI_CALENDAR_DATA
from bikram_sambat.exceptions import DateConversionError
from bikram_sambat.models import FiscalYear

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Populate Nepal fiscal year data'

    def add_arguments(self, parser):
        parser.add_argument(
            '--start-year',
            type=int,
            default=MIN_BS_YEAR,
            help=f'Starting BS year (default: {MIN_BS_YEAR})'
        )
        parser.add_argument(
            '--end-year',
            type=int,
            default=MAX_BS_YEAR - 1,
            help=f'Ending BS year (default: {MAX_BS_YEAR - 1})'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing fiscal year data before populating'
        )

    def handle(self, *args, **options):
        start_year = options['start_year']
        end_year = options['end_year']
        clear_existing = options['clear']

        if start_year > end_year:
            raise CommandError(f'--start-year {start_year} is after --end-year {end_year}')

        if clear_existing:
            self.stdout.write(self.style.WARNING('Clearing existing fiscal year data...'))
            FiscalYear.objects.all().delete()

        self.stdout.write(f'Populating fiscal years for BS {start_year}-{end_year}...')

        created_count = 0
        updated_count = 0

        with transaction.atomic():
            for year in range(start_year, end_year + 1):
                fiscal_year_str = f"{year}/{str(year + 1)[-2:]}"

                if year not in NEPALI_CALENDAR_DATA or (year + 1) not in NEPALI_CALENDAR_DATA:
                    self.stdout.write(
                        self.style.WARNING(f'Skipping FY {fiscal_year_str} - incomplete data')
                    )
                    continue

                try:
                    defaults = FiscalYear.defaults_for(year)
                except DateConversionError as e:
                    logger.error("Could not build FY %s: %s", fiscal_year_str, e)
                    self.stdout.write(
                        self.style.ERROR(f'Error creating FY {fiscal_year_str}: {e}')
                    )
                    continue

                # save() derives the English label and the current flag
                obj = FiscalYear.objects.filter(fiscal_year=fiscal_year_str).first()
                created = obj is None
                if created:
                    obj = FiscalYear(fiscal_year=fiscal_year_str)
                for field, value in defaults.items():
                    setattr(obj, field, value)
                obj.save()

                if created:
                    created_count += 1
                    status = self.style.SUCCESS('✓ Created')
                else:
                    updated_count += 1
                    status = self.style.WARNING('↻ Updated')

                current_marker = ' [CURRENT]' if obj.is_current else ''
                self.stdout.write(
                    f'{status} FY {fiscal_year_str} (AD: {obj.fiscal_year_english}): '
                    f'{obj.ad_start_date} to {obj.ad_end_date} '
                    f'({obj.total_days} days){current_marker}'
                )

        logger.info("Fiscal years populated: %d created, %d updated", created_count, updated_count)
        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully populated fiscal years!\n'
                f'Created: {created_count}\n'
                f'Updated: {updated_count}\n'
                f'Total: {FiscalYear.objects.count()}'
            )
        )

        current_fy = FiscalYear.get_current_fiscal_year()
        if current_fy:
            self.stdout.write(
                self.style.SUCCESS(
                    f'\nCurrent Fiscal Year: {current_fy.fiscal_year}\n'
                    f'Period: {current_fy.ad_start_date} to {current_fy.ad_end_date}'
                )
            )
        else:
            self.stdout.write(
                self.style.WARNING('\nNo current fiscal year found!')
            )
