from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='FiscalYear',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fiscal_year', models.CharField(db_index=True, help_text='Nepali Fiscal Year Format: 2081/82', max_length=10, unique=True)),
                ('fiscal_year_english', models.CharField(blank=True, db_index=True, help_text='English Fiscal Year Format: 2024/25', max_length=10, null=True)),
                ('bs_start_year', models.IntegerField()),
                ('bs_start_month', models.IntegerField(default=4)),
                ('bs_start_day', models.IntegerField(default=1)),
                ('bs_end_year', models.IntegerField()),
                ('bs_end_month', models.IntegerField(default=3)),
                ('bs_end_day', models.IntegerField()),
                ('ad_start_date', models.DateField(db_index=True)),
                ('ad_end_date', models.DateField(db_index=True)),
                ('ad_start_year', models.IntegerField(blank=True, help_text='Starting AD year', null=True)),
                ('ad_end_year', models.IntegerField(blank=True, help_text='Ending AD year', null=True)),
                ('is_current', models.BooleanField(db_index=True, default=False)),
                ('total_days', models.IntegerField(help_text='Total days in fiscal year')),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Fiscal Year',
                'verbose_name_plural': 'Fiscal Years',
                'ordering': ['-bs_start_year'],
                'indexes': [
                    models.Index(fields=['-bs_start_year'], name='bikram_samb_bs_star_6f0c3e_idx'),
                    models.Index(fields=['ad_start_date', 'ad_end_date'], name='bikram_samb_ad_star_9b1d2a_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='NepaliCalendar',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('bs_year', models.IntegerField(db_index=True, help_text='Bikram Sambat Year')),
                ('month', models.IntegerField(choices=[(1, 'Baisakh'), (2, 'Jestha'), (3, 'Ashadh'), (4, 'Shrawan'), (5, 'Bhadra'), (6, 'Ashwin'), (7, 'Kartik'), (8, 'Mangsir'), (9, 'Poush'), (10, 'Magh'), (11, 'Falgun'), (12, 'Chaitra')], db_index=True)),
                ('days_in_month', models.IntegerField(help_text='Number of days in this month')),
                ('ad_start_date', models.DateField(blank=True, help_text='Gregorian date when this BS month starts', null=True)),
            ],
            options={
                'verbose_name': 'Nepali Calendar Entry',
                'verbose_name_plural': 'Nepali Calendar',
                'ordering': ['bs_year', 'month'],
                'indexes': [
                    models.Index(fields=['bs_year', 'month'], name='bikram_samb_bs_year_4e7a51_idx'),
                ],
                'unique_together': {('bs_year', 'month')},
            },
        ),
    ]
