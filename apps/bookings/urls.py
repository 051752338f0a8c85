from django.urls import path

from . import views
from .analytics import ManagerAnalyticsView

urlpatterns = [
    path('create/', views.create_booking, name='booking-create'),
    path('available-rooms/', views.available_rooms, name='available-rooms'),
    path('mine/', views.MyBookingsView.as_view(), name='my-bookings'),
    path('<int:booking_id>/summary/', views.booking_summary, name='booking-summary'),
    path('orders/create/', views.create_food_order, name='food-order-create'),
    path('orders/<int:order_id>/', views.food_order_detail, name='food-order-detail'),
    path('analytics/', ManagerAnalyticsView.as_view(), name='manager-analytics'),
]
