# apps/bookings/services.py
"""
Booking creation and the read paths around it.

``create_booking`` runs room selection, pricing, the optional food order,
stock decrements and the room status flip inside one ``transaction.atomic()``
block: any error raised in there rolls back every write made so far. The
confirmation email is registered with ``transaction.on_commit`` so it is
never sent for a booking that a caller's outer transaction rolls back.
"""
from decimal import Decimal

from django.conf import settings
from django.db import transaction
import logging

from apps.core.exceptions import (
    AccessDenied,
    BookingNotFound,
    InvalidDates,
    InvalidFoodItem,
    NotFound,
    OrderAlreadyExists,
    RoomNotAvailable,
)
from apps.core.money import quantize
from apps.food.pricing import build_lines, normalize_food_items, reserve_stock
from apps.hotels.models import Hotel, Room
from .models import Booking, FoodOrder, OrderDetail
from .notifications import send_booking_confirmation

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def calculate_nights(check_in, check_out):
    """Whole nights between two dates, rounding a partial day up."""
    try:
        delta = check_out - check_in
    except TypeError:
        raise InvalidDates()
    nights = delta.days + (1 if (delta.seconds or delta.microseconds) else 0)
    if nights <= 0:
        raise InvalidDates()
    return nights


def calculate_room_total(base_price, multiplier, nights):
    return quantize(base_price * multiplier * nights)


def select_room(hotel_id, room_number=None):
    """
    Lock and return a Vacant room: the requested one, or the lowest numbered.
    Must be called inside a transaction.
    """
    rooms = Room.objects.select_related('hotel', 'room_type').filter(
        hotel_id=hotel_id, status=Room.STATUS_VACANT
    )
    if room_number is not None:
        room = rooms.select_for_update(of=('self',)).filter(room_number=room_number).first()
    else:
        # Another request may hold the lowest room; take the next free one
        room = rooms.select_for_update(skip_locked=True, of=('self',)).order_by('room_number').first()
    if room is None:
        raise RoomNotAvailable()
    return room


def _create_order_lines(order, lines):
    OrderDetail.objects.bulk_create([
        OrderDetail(
            order=order,
            food_item=line['food_item'],
            quantity=line['quantity'],
            subtotal=line['subtotal'],
        )
        for line in lines
    ])


def create_booking(user, hotel_id, check_in_date, check_out_date, room_number=None, food_items=None):
    """
    Book a room (and optionally food) for ``user``.

    Returns the booking result dict; raises a ``HotelServiceError`` subclass
    when the request is rejected, in which case nothing has been written.
    """
    if not Hotel.objects.filter(pk=hotel_id).exists():
        raise NotFound('Hotel not found')

    with transaction.atomic():
        room = select_room(hotel_id, room_number)
        hotel = room.hotel
        total_nights = calculate_nights(check_in_date, check_out_date)
        room_total = calculate_room_total(
            hotel.base_price_per_night, room.room_type.price_multiplier, total_nights
        )

        lines, food_total = [], ZERO
        if food_items:
            quantities = normalize_food_items(food_items)
            lines, food_total = build_lines(hotel, quantities)
            reserve_stock(lines)

        booking = Booking.objects.create(
            user=user,
            hotel=hotel,
            room=room,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            total_nights=total_nights,
            grand_total=room_total,
        )

        if lines:
            order = FoodOrder.objects.create(booking=booking)
            _create_order_lines(order, lines)

        room.status = Room.STATUS_OCCUPIED
        room.save(update_fields=['status'])

    total_payable = quantize(room_total + food_total)
    logger.info(
        f"Booking {booking.pk} created: hotel {hotel.pk} room {room.room_number}, "
        f"{total_nights} nights, total {total_payable}"
    )

    if settings.BOOKING_CONFIRMATION_EMAILS:
        # Runs now in autocommit mode, or once an enclosing transaction commits
        transaction.on_commit(lambda: send_booking_confirmation(
            user, booking, room, lines, room_total, food_total, total_payable
        ))

    return {
        'booking_id': booking.pk,
        'hotel_name': hotel.name,
        'room_number': room.room_number,
        'check_in_date': booking.check_in_date.isoformat(),
        'check_out_date': booking.check_out_date.isoformat(),
        'total_nights': total_nights,
        'room_total': room_total,
        'food_total': food_total,
        'total_payable': total_payable,
    }


def available_rooms(hotel_id):
    return (
        Room.objects.select_related('hotel', 'room_type')
        .filter(hotel_id=hotel_id, status=Room.STATUS_VACANT)
        .order_by('room_number')
    )


def user_bookings(user):
    return (
        Booking.objects.select_related('hotel', 'room', 'room__room_type')
        .filter(user=user)
        .order_by('-booking_date')
    )


def _order_lines(order):
    return [
        {
            'food_item_id': detail.food_item_id,
            'name': detail.food_item.name,
            'quantity': detail.quantity,
            'subtotal': detail.subtotal,
        }
        for detail in order.details.select_related('food_item').order_by('pk')
    ]


def booking_summary(user, booking_id):
    try:
        booking = Booking.objects.select_related('hotel', 'room').get(pk=booking_id, user=user)
    except Booking.DoesNotExist:
        raise BookingNotFound()

    room_total = booking.grand_total
    food_total = ZERO
    food_order = None
    order = FoodOrder.objects.filter(booking=booking).first()
    if order is not None:
        items = _order_lines(order)
        food_total = quantize(sum((item['subtotal'] for item in items), ZERO))
        food_order = {'order_id': order.pk, 'status': order.status, 'items': items}

    return {
        'booking': {
            'booking_id': booking.pk,
            'hotel_id': booking.hotel_id,
            'hotel': booking.hotel.name,
            'room_number': booking.room.room_number,
            'check_in_date': booking.check_in_date.isoformat(),
            'check_out_date': booking.check_out_date.isoformat(),
            'total_nights': booking.total_nights,
            'room_total': room_total,
        },
        'food_order': food_order,
        'totals': {
            'room_total': room_total,
            'food_total': food_total,
            'total_payable': quantize(room_total + food_total),
        },
    }


def create_food_order(user, booking_id, food_items):
    """Attach a food order to one of ``user``'s bookings that has none yet."""
    quantities = normalize_food_items(food_items) if food_items else {}
    if not quantities:
        raise InvalidFoodItem()

    with transaction.atomic():
        booking = (
            Booking.objects.select_for_update(of=('self',))
            .select_related('hotel')
            .filter(pk=booking_id, user=user)
            .first()
        )
        if booking is None:
            raise BookingNotFound()
        if FoodOrder.objects.filter(booking=booking).exists():
            raise OrderAlreadyExists()

        lines, total_amount = build_lines(booking.hotel, quantities)
        reserve_stock(lines)
        order = FoodOrder.objects.create(booking=booking)
        _create_order_lines(order, lines)

    logger.info(f"Food order {order.pk} created for booking {booking.pk}: {total_amount}")
    return {
        'order_id': order.pk,
        'booking_id': booking.pk,
        'status': order.status,
        'total_amount': total_amount,
        'items': [
            {
                'food_item_id': line['food_item'].pk,
                'name': line['food_item'].name,
                'quantity': line['quantity'],
                'unit_price': line['unit_price'],
                'subtotal': line['subtotal'],
            }
            for line in lines
        ],
    }


def food_order_detail(user, order_id):
    try:
        order = FoodOrder.objects.select_related('booking', 'booking__hotel').get(pk=order_id)
    except FoodOrder.DoesNotExist:
        raise NotFound('Order not found')

    booking = order.booking
    is_owner = booking.user_id == user.pk
    works_at_hotel = user.role in ('manager', 'staff') and user.hotel_id == booking.hotel_id
    if not (is_owner or works_at_hotel):
        raise AccessDenied('Access denied for this order')

    items = _order_lines(order)
    return {
        'order_id': order.pk,
        'booking_id': booking.pk,
        'hotel': booking.hotel.name,
        'status': order.status,
        'created_at': order.created_at,
        'items': items,
        'total_amount': quantize(sum((item['subtotal'] for item in items), ZERO)),
    }
