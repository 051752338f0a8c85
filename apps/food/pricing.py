# apps/food/pricing.py
"""
Food order lines shared by booking creation and stand-alone food orders.

All functions expect to run inside ``transaction.atomic()``; stock rows are
locked with ``select_for_update()`` and decremented with a guarded update so
recorded stock never drops below zero.
"""
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db.models import F

from apps.core.exceptions import FoodItemNotFound, InsufficientStock, InvalidFoodItem
from apps.core.money import quantize
from .models import FoodItem, HotelFood

# Per item and request; keeps price * quantity within OrderDetail.subtotal
MAX_QUANTITY = 1000
MAX_ID = 2 ** 63 - 1


def _positive_int(value):
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite() or number != number.to_integral_value() or number <= 0:
        return None
    return int(number)


def normalize_food_items(food_items):
    """
    Validate ``[{food_item_id, quantity}, ...]`` and merge repeated items.

    Returns a dict of food item id -> total quantity in request order.
    """
    if not isinstance(food_items, (list, tuple)):
        raise InvalidFoodItem()

    quantities = {}
    for entry in food_items:
        if not isinstance(entry, dict):
            raise InvalidFoodItem()
        food_item_id = _positive_int(entry.get('food_item_id'))
        quantity = _positive_int(entry.get('quantity'))
        if food_item_id is None or quantity is None:
            raise InvalidFoodItem()
        total = quantities.get(food_item_id, 0) + quantity
        if total > MAX_QUANTITY:
            raise InvalidFoodItem()
        quantities[food_item_id] = total
    return quantities


def load_food_items(food_item_ids):
    # Ids past the BigAutoField range cannot exist and would overflow the query
    items = FoodItem.objects.in_bulk([pk for pk in food_item_ids if pk <= MAX_ID])
    for food_item_id in food_item_ids:
        if food_item_id not in items:
            raise FoodItemNotFound(food_item_id)
    return items


def unit_price(food_item, override=None):
    if override is not None and override.price is not None:
        return override.price
    return food_item.price


def build_lines(hotel, quantities, lock=True):
    """
    Price each requested item for ``hotel``.

    Returns ``(lines, food_total)`` where each line is a dict with
    ``food_item``, ``quantity``, ``unit_price``, ``subtotal`` and the
    hotel override (if any).
    """
    items = load_food_items(quantities.keys())
    overrides = HotelFood.objects.filter(hotel=hotel, food_item_id__in=list(quantities))
    if lock:
        overrides = overrides.select_for_update()
    overrides = {override.food_item_id: override for override in overrides}

    lines = []
    food_total = Decimal('0.00')
    for food_item_id, quantity in quantities.items():
        food_item = items[food_item_id]
        override = overrides.get(food_item_id)
        price = unit_price(food_item, override)
        subtotal = quantize(price * quantity)
        food_total += subtotal
        lines.append({
            'food_item': food_item,
            'override': override,
            'quantity': quantity,
            'unit_price': quantize(price),
            'subtotal': subtotal,
        })
    return lines, quantize(food_total)


def tracks_stock(override):
    return (
        settings.HOTEL_FOOD_INVENTORY_ENABLED
        and override is not None
        and override.stock is not None
    )


def reserve_stock(lines):
    """Check every line against stock, then decrement. Raises InsufficientStock."""
    for line in lines:
        override = line['override']
        if tracks_stock(override) and line['quantity'] > override.stock:
            raise InsufficientStock(line['food_item'])

    for line in lines:
        override = line['override']
        if not tracks_stock(override):
            continue
        updated = HotelFood.objects.filter(
            pk=override.pk, stock__gte=line['quantity']
        ).update(stock=F('stock') - line['quantity'])
        if not updated:
            raise InsufficientStock(line['food_item'])
