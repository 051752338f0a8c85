from rest_framework import serializers
from .models import FoodItem, HotelFood

MAX_STOCK = 1_000_000


class FoodItemSerializer(serializers.ModelSerializer):
    hotel_price = serializers.SerializerMethodField()

    class Meta:
        model = FoodItem
        fields = ['id', 'name', 'price', 'category', 'type', 'hotel_price']

    def get_hotel_price(self, obj):
        # Only present when the list was requested for a specific hotel
        return getattr(obj, 'hotel_price', None)


class HotelFoodSerializer(serializers.ModelSerializer):
    class Meta:
        model = HotelFood
        fields = ['food_item', 'price', 'stock']


class FoodPriceSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=7, decimal_places=2)

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Price must be greater than 0")
        return value


class StockAdjustmentSerializer(serializers.Serializer):
    stock = serializers.IntegerField(required=False, min_value=0, max_value=MAX_STOCK)
    delta = serializers.IntegerField(required=False, min_value=-MAX_STOCK, max_value=MAX_STOCK)

    def validate(self, data):
        if 'stock' not in data and 'delta' not in data:
            raise serializers.ValidationError("Provide stock or delta")
        return data
