# apps/food/services.py
from django.conf import settings
from django.db import transaction
import logging

from apps.core.exceptions import AccessDenied, FeatureUnavailable, NotFound, ValidationFailed
from .models import FoodItem, HotelFood

logger = logging.getLogger(__name__)


def _manager_hotel_id(manager):
    if manager.role != 'manager' or not manager.hotel_id:
        raise AccessDenied('Unauthorized for this operation')
    return manager.hotel_id


def set_hotel_price(manager, food_item_id, price):
    """Set the manager's hotel price override for a food item."""
    hotel_id = _manager_hotel_id(manager)
    with transaction.atomic():
        try:
            food_item = FoodItem.objects.get(pk=food_item_id)
        except FoodItem.DoesNotExist:
            raise NotFound('Food item not found')

        override, _ = HotelFood.objects.select_for_update().get_or_create(
            hotel_id=hotel_id, food_item=food_item
        )
        old_price = override.price if override.price is not None else food_item.price
        override.price = price
        override.save(update_fields=['price'])

    logger.info(f"Hotel {hotel_id} price for food item {food_item.pk}: {old_price} -> {price}")
    return {
        'food_item_id': food_item.pk,
        'name': food_item.name,
        'old_price': old_price,
        'new_price': price,
    }


def adjust_stock(manager, food_item_id, stock=None, delta=None):
    """
    Set (``stock``) or shift (``delta``) the manager's hotel stock for a food
    item. A shift never takes stock below zero.
    """
    if not settings.HOTEL_FOOD_INVENTORY_ENABLED:
        raise FeatureUnavailable('Hotel food inventory is disabled; stock feature unavailable')
    hotel_id = _manager_hotel_id(manager)
    if stock is None and delta is None:
        raise ValidationFailed('Provide stock or delta')
    if stock is not None and stock < 0:
        raise ValidationFailed('Stock cannot be negative')

    with transaction.atomic():
        if not FoodItem.objects.filter(pk=food_item_id).exists():
            raise NotFound('Food item not found')
        override, _ = HotelFood.objects.select_for_update().get_or_create(
            hotel_id=hotel_id, food_item_id=food_item_id, defaults={'stock': 0}
        )
        current = override.stock or 0
        new_stock = stock if stock is not None else max(0, current + delta)
        override.stock = new_stock
        override.save(update_fields=['stock'])

    logger.info(f"Hotel {hotel_id} stock for food item {food_item_id}: {current} -> {new_stock}")
    return {'hotel_id': hotel_id, 'food_item_id': int(food_item_id), 'stock': new_stock}
