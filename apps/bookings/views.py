# apps/bookings/views.py
from rest_framework import generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
import logging

from apps.core.exceptions import HotelServiceError, InvalidDates
from .serializers import (
    DATE_FIELDS,
    AvailableRoomSerializer,
    BookingSerializer,
    CreateBookingSerializer,
    CreateFoodOrderSerializer,
)
from . import services

logger = logging.getLogger(__name__)


def _validation_error(serializer):
    if any(field in serializer.errors for field in DATE_FIELDS):
        return Response(InvalidDates().to_dict(), status=status.HTTP_400_BAD_REQUEST)
    return Response(
        {'error': 'Validation failed', 'errors': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_booking(request):
    """Book a room, optionally with a food order, in one transaction"""
    serializer = CreateBookingSerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)
    data = serializer.validated_data

    try:
        booking = services.create_booking(
            request.user,
            data['hotel_id'],
            data['check_in_date'],
            data['check_out_date'],
            room_number=data.get('room_number'),
            food_items=data.get('food_items'),
        )
    except HotelServiceError as e:
        logger.info(f"Booking rejected for {request.user.email}: {e.message}")
        return Response(e.to_dict(), status=e.status_code)
    except Exception:
        logger.exception("Booking creation failed")
        return Response({'error': 'Server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({
        'message': 'Booking created successfully',
        'booking': booking,
        'next': {
            'payment': {
                'booking_id': booking['booking_id'],
                'total_payable': booking['total_payable'],
            }
        },
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([AllowAny])
def available_rooms(request):
    hotel_id = request.query_params.get('hotel_id')
    if not hotel_id or not hotel_id.isdigit():
        return Response({'error': 'hotel_id is required'}, status=status.HTTP_400_BAD_REQUEST)
    rooms = services.available_rooms(int(hotel_id))
    return Response({'data': AvailableRoomSerializer(rooms, many=True).data})


class MyBookingsView(generics.ListAPIView):
    """Bookings of the current user, newest first"""
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.user_bookings(self.request.user)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def booking_summary(request, booking_id):
    try:
        summary = services.booking_summary(request.user, booking_id)
    except HotelServiceError as e:
        return Response(e.to_dict(), status=e.status_code)
    return Response(summary)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_food_order(request):
    serializer = CreateFoodOrderSerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)

    try:
        order = services.create_food_order(
            request.user,
            serializer.validated_data['booking_id'],
            serializer.validated_data['food_items'],
        )
    except HotelServiceError as e:
        return Response(e.to_dict(), status=e.status_code)
    except Exception:
        logger.exception("Food order creation failed")
        return Response({'error': 'Server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(order, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def food_order_detail(request, order_id):
    try:
        order = services.food_order_detail(request.user, order_id)
    except HotelServiceError as e:
        return Response(e.to_dict(), status=e.status_code)
    return Response(order)
