from django.contrib import admin

from .models import Booking, FoodOrder, OrderDetail


class OrderDetailInline(admin.TabularInline):
    model = OrderDetail
    extra = 0


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'hotel', 'room', 'check_in_date', 'check_out_date', 'grand_total', 'booking_date')
    list_filter = ('hotel',)
    search_fields = ('user__email', 'hotel__name')


@admin.register(FoodOrder)
class FoodOrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'booking', 'status', 'created_at')
    list_filter = ('status',)
    inlines = [OrderDetailInline]
