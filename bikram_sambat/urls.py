from django.urls import path
from . import views

app_name = 'bikram_sambat'

urlpatterns = [
    path('convert/ad-to-bs/', views.ad_to_bs_view, name='ad_to_bs'),
    path('convert/bs-to-ad/', views.bs_to_ad_view, name='bs_to_ad'),
    path('month-days/<int:year>/<int:month>/', views.month_days_view, name='month_days'),
    path('month-calendar/<int:year>/<int:month>/', views.month_calendar_view, name='month_calendar'),
    path('today/', views.today_view, name='today'),
    path('names/', views.names_view, name='names'),
]
