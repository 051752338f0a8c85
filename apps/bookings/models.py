# apps/bookings/models.py

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Booking(models.Model):
    """
    One stay in one room. Created together with its optional food order in a
    single transaction and not modified afterwards.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    hotel = models.ForeignKey('hotels.Hotel', on_delete=models.CASCADE, related_name='bookings')
    room = models.ForeignKey('hotels.Room', on_delete=models.PROTECT, related_name='bookings')
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    total_nights = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # Room charge only; food is billed through the food order
    grand_total = models.DecimalField(max_digits=10, decimal_places=2)
    booking_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-booking_date']
        indexes = [
            models.Index(fields=['hotel', 'booking_date'], name='booking_hotel_date_idx'),
            models.Index(fields=['user'], name='booking_user_idx'),
        ]

    @property
    def room_number(self):
        return self.room.room_number

    def __str__(self):
        return f"Booking #{self.pk} - {self.hotel} room {self.room.room_number}"


class FoodOrder(models.Model):
    STATUS_CHOICES = (
        ('Pending', 'Pending'),
        ('Preparing', 'Preparing'),
        ('Delivered', 'Delivered'),
        ('Cancelled', 'Cancelled'),
    )

    booking = models.OneToOneField(Booking, on_delete=models.CASCADE, related_name='food_order')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Pending')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Order #{self.pk} for booking #{self.booking_id}"


class OrderDetail(models.Model):
    order = models.ForeignKey(FoodOrder, on_delete=models.CASCADE, related_name='details')
    food_item = models.ForeignKey('food.FoodItem', on_delete=models.PROTECT, related_name='order_details')
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    subtotal = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['order', 'food_item'], name='unique_order_line'),
        ]

    def __str__(self):
        return f"{self.food_item} x {self.quantity}"
