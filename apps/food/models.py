from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models


class FoodItem(models.Model):
    CATEGORY_CHOICES = (
        ('Breakfast', 'Breakfast'),
        ('Lunch', 'Lunch'),
        ('Dinner', 'Dinner'),
        ('Beverages', 'Beverages'),
    )
    TYPE_CHOICES = (
        ('Veg', 'Veg'),
        ('Non-Veg', 'Non-Veg'),
        ('General', 'General'),
    )

    name = models.CharField(max_length=100, unique=True)
    price = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='General')

    class Meta:
        ordering = ['-id']

    def __str__(self):
        return self.name


class HotelFood(models.Model):
    """
    Per-hotel override for a food item. A null price means the item's base
    price applies; a null stock means the hotel does not track inventory for it.
    """
    hotel = models.ForeignKey('hotels.Hotel', on_delete=models.CASCADE, related_name='food_overrides')
    food_item = models.ForeignKey(FoodItem, on_delete=models.CASCADE, related_name='hotel_overrides')
    price = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    stock = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['hotel', 'food_item'], name='unique_hotel_food'),
        ]

    def __str__(self):
        return f"{self.hotel} / {self.food_item}"
