# apps/bookings/serializers.py
from rest_framework import serializers

from apps.hotels.serializers import RoomTypeSerializer
from .models import Booking, FoodOrder

DATE_FIELDS = ('check_in_date', 'check_out_date')


class CreateBookingSerializer(serializers.Serializer):
    hotel_id = serializers.IntegerField(min_value=1)
    room_number = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    # Entries are validated by the booking service so bad lines map to its errors
    food_items = serializers.JSONField(required=False)


class CreateFoodOrderSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField(min_value=1)
    food_items = serializers.JSONField()


class BookingSerializer(serializers.ModelSerializer):
    hotel_name = serializers.ReadOnlyField(source='hotel.name')
    room_number = serializers.ReadOnlyField(source='room.room_number')
    room_type = serializers.ReadOnlyField(source='room.room_type.name')
    has_food_order = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id', 'hotel', 'hotel_name', 'room_number', 'room_type',
            'check_in_date', 'check_out_date', 'total_nights',
            'grand_total', 'booking_date', 'has_food_order',
        ]

    def get_has_food_order(self, obj):
        return FoodOrder.objects.filter(booking=obj).exists()


class AvailableRoomSerializer(serializers.Serializer):
    room_number = serializers.IntegerField()
    status = serializers.CharField()
    room_type = RoomTypeSerializer()
    nightly_rate = serializers.DecimalField(max_digits=12, decimal_places=2)
