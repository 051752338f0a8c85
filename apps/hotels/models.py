from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class Hotel(models.Model):
    name = models.CharField(max_length=150, unique=True)
    location = models.CharField(max_length=100)
    address = models.TextField(blank=True, null=True)
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal('0.0'),
        validators=[MinValueValidator(Decimal('0.0')), MaxValueValidator(Decimal('5.0'))],
    )
    base_price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    image_url = models.CharField(max_length=255, blank=True, null=True)
    max_staff_per_shift = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Active task cap per shift; falls back to STAFF_PER_SHIFT_DEFAULT",
    )

    class Meta:
        ordering = ['-id']

    def __str__(self):
        return self.name


class RoomType(models.Model):
    name = models.CharField(max_length=50, unique=True)
    price_multiplier = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal('1.00'),
        validators=[MinValueValidator(Decimal('0.01'))],
    )

    def __str__(self):
        return f"{self.name} (x{self.price_multiplier})"


class Room(models.Model):
    STATUS_VACANT = 'Vacant'
    STATUS_OCCUPIED = 'Occupied'
    STATUS_CLEANING = 'Cleaning'
    STATUS_CHOICES = (
        (STATUS_VACANT, 'Vacant'),
        (STATUS_OCCUPIED, 'Occupied'),
        (STATUS_CLEANING, 'Cleaning'),
    )

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name='rooms')
    room_number = models.PositiveIntegerField()
    room_type = models.ForeignKey(RoomType, on_delete=models.PROTECT, related_name='rooms')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_VACANT)

    class Meta:
        ordering = ['hotel', 'room_number']
        constraints = [
            models.UniqueConstraint(fields=['hotel', 'room_number'], name='unique_room_per_hotel'),
        ]
        indexes = [
            models.Index(fields=['hotel', 'status'], name='room_hotel_status_idx'),
        ]

    @property
    def nightly_rate(self):
        return self.hotel.base_price_per_night * self.room_type.price_multiplier

    def __str__(self):
        return f"{self.hotel.name} #{self.room_number}"
