# apps/bookings/notifications.py
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
import logging

logger = logging.getLogger(__name__)


def send_booking_confirmation(user, booking, room, lines, room_total, food_total, total_payable):
    """
    Email the booking confirmation. Best effort: a send failure is logged
    and reported as ``False``, never raised.
    """
    context = {
        'user': user,
        'booking': booking,
        'hotel': booking.hotel,
        'room': room,
        'lines': lines,
        'room_total': room_total,
        'food_total': food_total,
        'total_payable': total_payable,
    }
    subject = f"Booking confirmed - {booking.hotel.name}"
    text = (
        f"Booking #{booking.pk} at {booking.hotel.name}, room {room.room_number}, "
        f"{booking.check_in_date} to {booking.check_out_date} "
        f"({booking.total_nights} nights). Total payable: {total_payable}"
    )
    try:
        html = render_to_string('bookings/booking_confirmation.html', context)
        send_mail(subject, text, settings.DEFAULT_FROM_EMAIL, [user.email], html_message=html)
    except Exception as e:
        logger.warning(f"Booking confirmation email for booking {booking.pk} failed: {e}")
        return False
    return True
