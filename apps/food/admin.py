from django.contrib import admin
from .models import FoodItem, HotelFood


@admin.register(FoodItem)
class FoodItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'category', 'type']
    list_filter = ['category', 'type']
    search_fields = ['name']


@admin.register(HotelFood)
class HotelFoodAdmin(admin.ModelAdmin):
    list_display = ['hotel', 'food_item', 'price', 'stock']
    list_filter = ['hotel']
