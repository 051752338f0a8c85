# apps/core/exceptions.py
from rest_framework import status


class HotelServiceError(Exception):
    """Base class for errors raised by the booking, food and staff services.

    Views render these with ``Response(err.to_dict(), status=err.status_code)``.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Request could not be processed'

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self):
        data = {'error': self.message}
        data.update(self.extra)
        return data


class ValidationFailed(HotelServiceError):
    default_message = 'Validation failed'


class AccessDenied(HotelServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Access denied'


class NotFound(HotelServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class Conflict(HotelServiceError):
    default_message = 'Request conflicts with current state'


class FeatureUnavailable(HotelServiceError):
    default_message = 'Feature unavailable'


class RoomNotAvailable(Conflict):
    default_message = 'Room not available'


class InvalidDates(ValidationFailed):
    default_message = 'Invalid dates'


class InvalidFoodItem(ValidationFailed):
    default_message = 'Invalid food item or quantity'


class FoodItemNotFound(ValidationFailed):
    def __init__(self, food_item_id):
        super().__init__(f'Food item {food_item_id} not found', food_item_id=food_item_id)


class InsufficientStock(Conflict):
    def __init__(self, food_item):
        super().__init__(f'Insufficient stock for {food_item.name}', food_item_id=food_item.pk)


class BookingNotFound(NotFound):
    default_message = 'Booking not found'


class OrderAlreadyExists(Conflict):
    default_message = 'Order already exists for this booking'
