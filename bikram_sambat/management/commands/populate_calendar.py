"""
Management command to populate Nepali calendar data
Usage: python manage.py populate_calendar
"""
import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.db import models

from bikram_sambat.calendar_data import MAX_BS_YEAR, MIN_BS_YEAR, NEPALI_CALENDAR_DATA
from bikram_sambat.exceptions import DateConversionError
from bikram_sambat.models import NepaliCalendar
from bikram_sambat.utils import NepaliDate, bs_to_ad

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Populate Nepali calendar data for BS years'

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
            default=MAX_BS_YEAR,
            help=f'Ending BS year (default: {MAX_BS_YEAR})'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing calendar data before populating'
        )

    def handle(self, *args, **options):
        start_year = options['start_year']
        end_year = options['end_year']
        clear_existing = options['clear']

        if start_year > end_year:
            raise CommandError(f'--start-year {start_year} is after --end-year {end_year}')

        if clear_existing:
            self.stdout.write(self.style.WARNING('Clearing existing calendar data...'))
            NepaliCalendar.objects.all().delete()

        self.stdout.write(f'Populating calendar data for BS years {start_year}-{end_year}...')

        created_count = 0
        updated_count = 0

        with transaction.atomic():
            for year in range(start_year, end_year + 1):
                if year not in NEPALI_CALENDAR_DATA:
                    self.stdout.write(
                        self.style.WARNING(f'Skipping year {year} - no data available')
                    )
                    continue

                for month, days_in_month in enumerate(NEPALI_CALENDAR_DATA[year], start=1):
                    try:
                        ad_start = bs_to_ad(NepaliDate(year, month, 1))
                    except DateConversionError as e:
                        logger.error("Could not convert %s/%s/1 BS: %s", year, month, e)
                        self.stdout.write(
                            self.style.ERROR(f'Error calculating date for {year}/{month}: {e}')
                        )
                        continue

                    obj, created = NepaliCalendar.objects.update_or_create(
                        bs_year=year,
                        month=month,
                        defaults={
                            'days_in_month': days_in_month,
                            'ad_start_date': ad_start,
                        }
                    )

                    if created:
                        created_count += 1
                    else:
                        updated_count += 1

        logger.info("Calendar populated: %d created, %d updated", created_count, updated_count)
        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully populated calendar data!\n'
                f'Created: {created_count} entries\n'
                f'Updated: {updated_count} entries'
            )
        )

        total_entries = NepaliCalendar.objects.count()
        year_range = NepaliCalendar.objects.aggregate(
            min_year=models.Min('bs_year'),
            max_year=models.Max('bs_year')
        )

        self.stdout.write(
            self.style.SUCCESS(
                f'\nCalendar Summary:\n'
                f'Total entries: {total_entries}\n'
                f'Year range: {year_range["min_year"]} - {year_range["max_year"]}'
            )
        )
