# apps/bookings/analytics.py
from decimal import Decimal

from django.db.models import Sum
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.money import quantize
from apps.hotels.models import Room
from apps.users.permissions import IsManager
from .models import Booking, OrderDetail

ZERO = Decimal('0.00')


def _sum(queryset, field):
    return quantize(queryset.aggregate(total=Sum(field))['total'] or ZERO)


class ManagerAnalyticsView(APIView):
    """Bookings, revenue and occupancy for the manager's hotel"""
    permission_classes = [IsAuthenticated, IsManager]

    def get(self, request):
        hotel_id = request.user.hotel_id
        if hotel_id is None:
            return Response(
                {'error': 'Manager is not assigned to a hotel'},
                status=status.HTTP_400_BAD_REQUEST
            )

        # Month boundary in TIME_ZONE, not UTC
        month_start = timezone.localtime().replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        bookings = Booking.objects.filter(hotel_id=hotel_id)
        bookings_month = bookings.filter(booking_date__gte=month_start)
        details = OrderDetail.objects.filter(order__booking__hotel_id=hotel_id)
        details_month = details.filter(order__created_at__gte=month_start)

        room_revenue = _sum(bookings, 'grand_total')
        room_revenue_month = _sum(bookings_month, 'grand_total')
        food_revenue = _sum(details, 'subtotal')
        food_revenue_month = _sum(details_month, 'subtotal')

        rooms = Room.objects.filter(hotel_id=hotel_id)
        total_rooms = rooms.count()
        occupied = rooms.filter(status=Room.STATUS_OCCUPIED).count()
        occupancy_rate = round(occupied / total_rooms * 100) if total_rooms else 0

        return Response({
            'bookings': {
                'total': bookings.count(),
                'this_month': bookings_month.count(),
            },
            'revenue': {
                'room': room_revenue,
                'room_this_month': room_revenue_month,
                'food': food_revenue,
                'food_this_month': food_revenue_month,
                'total': quantize(room_revenue + food_revenue),
                'total_this_month': quantize(room_revenue_month + food_revenue_month),
            },
            'rooms': {
                'total': total_rooms,
                'occupied': occupied,
                'occupancy_rate': occupancy_rate,
            },
        })
