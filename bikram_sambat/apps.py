from django.apps import AppConfig


class BikramSambatConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bikram_sambat'
    verbose_name = 'Bikram Sambat Calendar'
