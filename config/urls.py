# config/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/users/', include('apps.users.urls')),
    path('api/hotels/', include('apps.hotels.urls')),
    path('api/food/', include('apps.food.urls')),
    path('api/bookings/', include('apps.bookings.urls')),
    path('api/staff/', include('apps.staff.urls')),
]
