from rest_framework import serializers
from .models import Hotel, Room, RoomType


class HotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = [
            'id', 'name', 'location', 'address', 'rating',
            'base_price_per_night', 'image_url', 'max_staff_per_shift',
        ]

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Hotel name must be 2-150 characters")
        return value


class RoomTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomType
        fields = ['id', 'name', 'price_multiplier']


class RoomSerializer(serializers.ModelSerializer):
    room_type = RoomTypeSerializer(read_only=True)

    class Meta:
        model = Room
        fields = ['room_number', 'hotel', 'room_type', 'status']


class RoomPriceSerializer(serializers.Serializer):
    base_price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
