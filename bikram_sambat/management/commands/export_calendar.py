"""
Management command to export the BS month table with AD start/end dates
Usage: python manage.py export_calendar --format xlsx --output calendar.xlsx
"""
import logging
from datetime import timedelta

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from django.core.management.base import BaseCommand, CommandError

from bikram_sambat.calendar_data import (
    MAX_BS_YEAR,
    MIN_BS_YEAR,
    NEPALI_CALENDAR_DATA,
    NEPALI_MONTHS,
    NEPALI_MONTHS_EN,
)
from bikram_sambat.utils import NepaliDate, bs_to_ad

logger = logging.getLogger(__name__)

COLUMNS = [
    'BS Year', 'Month', 'Month Name', 'Month Name (Nepali)',
    'Days', 'AD Start', 'AD End',
]


def build_calendar_frame(start_year, end_year):
    """One row per BS month between start_year and end_year inclusive"""
    rows = []
    for year in range(start_year, end_year + 1):
        for month, days in enumerate(NEPALI_CALENDAR_DATA[year], start=1):
            ad_start = bs_to_ad(NepaliDate(year, month, 1))
            rows.append({
                'BS Year': year,
                'Month': month,
                'Month Name': NEPALI_MONTHS_EN[month - 1],
                'Month Name (Nepali)': NEPALI_MONTHS[month - 1],
                'Days': days,
                'AD Start': ad_start,
                'AD End': ad_start + timedelta(days=days - 1),
            })
    return pd.DataFrame(rows, columns=COLUMNS)


class Command(BaseCommand):
    help = 'Export the Nepali calendar table to CSV or Excel'

    def add_arguments(self, parser):
        parser.add_argument(
            '--format',
            choices=['csv', 'xlsx'],
            default='csv',
            help='Output file type (default: csv)'
        )
        parser.add_argument(
            '--output',
            help='Output path (default: nepali_calendar_<start>_<end>.<format>)'
        )
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

    def handle(self, *args, **options):
        start_year = options['start_year']
        end_year = options['end_year']
        file_type = options['format']

        if start_year > end_year:
            raise CommandError(f'--start-year {start_year} is after --end-year {end_year}')
        if start_year < MIN_BS_YEAR or end_year > MAX_BS_YEAR:
            raise CommandError(f'Supported years: {MIN_BS_YEAR}-{MAX_BS_YEAR}')

        output = options['output'] or f'nepali_calendar_{start_year}_{end_year}.{file_type}'
        df = build_calendar_frame(start_year, end_year)

        if file_type == 'csv':
            df.to_csv(output, index=False, encoding='utf-8')
        else:
            with pd.ExcelWriter(output, engine='openpyxl') as writer:
                df.to_excel(writer, index=False, sheet_name='Calendar')
                sheet = writer.sheets['Calendar']
                for col_idx, column in enumerate(COLUMNS, start=1):
                    sheet.cell(row=1, column=col_idx).font = Font(bold=True)
                    sheet.column_dimensions[get_column_letter(col_idx)].width = max(len(column) + 4, 12)

        logger.info("Exported %d months to %s", len(df), output)
        self.stdout.write(
            self.style.SUCCESS(f'Exported {len(df)} months ({start_year}-{end_year}) to {output}')
        )
