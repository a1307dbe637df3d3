# nepali_calendar/nepali_calendar/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('calendar/', include('bikram_sambat.urls')),
]
