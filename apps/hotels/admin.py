from django.contrib import admin
from .models import Hotel, Room, RoomType


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ['room_number', 'room_type', 'status']


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'rating', 'base_price_per_night', 'max_staff_per_shift']
    search_fields = ['name', 'location']
    inlines = [RoomInline]


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'price_multiplier']


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['hotel', 'room_number', 'room_type', 'status']
    list_filter = ['status', 'hotel', 'room_type']
