# apps/staff/services.py
from django.conf import settings
from django.db import transaction
import logging

from apps.core.exceptions import AccessDenied, NotFound, ValidationFailed
from apps.hotels.models import Hotel
from apps.users.models import CustomUser
from .models import StaffAssignment

logger = logging.getLogger(__name__)


def shift_limit(hotel):
    return hotel.max_staff_per_shift or settings.STAFF_PER_SHIFT_DEFAULT


def _manager_hotel_id(manager):
    if not manager.hotel_id:
        raise AccessDenied('Manager is not assigned to a hotel')
    return manager.hotel_id


def assign_task(manager, staff_email, title, description=None, due_date=None,
                shift=StaffAssignment.SHIFT_MORNING):
    """Create a Pending task for a staff member of the manager's hotel."""
    hotel_id = _manager_hotel_id(manager)
    staff = CustomUser.objects.filter(
        email__iexact=staff_email.strip(), role=CustomUser.ROLE_STAFF
    ).first()
    if staff is None:
        raise NotFound('Staff user not found')
    if staff.hotel_id != hotel_id:
        raise AccessDenied('Staff does not belong to your hotel')

    with transaction.atomic():
        # Serializes concurrent assignments for the same hotel
        hotel = Hotel.objects.select_for_update().get(pk=hotel_id)
        limit = shift_limit(hotel)
        active = StaffAssignment.objects.filter(
            hotel=hotel, shift=shift, status__in=StaffAssignment.ACTIVE_STATUSES
        ).count()
        if active >= limit:
            raise ValidationFailed(f'Max {limit} staff allowed on {shift} shift')

        task = StaffAssignment.objects.create(
            staff=staff,
            hotel=hotel,
            title=title,
            details=description or None,
            due_date=due_date,
            shift=shift,
        )
    logger.info(f"Task {task.pk} assigned to {staff.email} on {shift} shift")
    return task


def tasks_for_staff(manager, staff_email):
    hotel_id = _manager_hotel_id(manager)
    staff = CustomUser.objects.filter(email__iexact=staff_email.strip()).first()
    if staff is None:
        return StaffAssignment.objects.none()
    if staff.hotel_id != hotel_id:
        raise AccessDenied('Unauthorized for this staff')
    return StaffAssignment.objects.filter(staff=staff)


def _get_task(task_id):
    try:
        return StaffAssignment.objects.select_related('staff').get(pk=task_id)
    except StaffAssignment.DoesNotExist:
        raise NotFound('Task not found')


def update_task_status(user, task_id, new_status):
    """
    Managers may update any task of their hotel, staff only their own.
    """
    task = _get_task(task_id)
    if user.role == CustomUser.ROLE_MANAGER:
        if task.hotel_id != user.hotel_id:
            raise AccessDenied('Unauthorized for this task')
    elif task.staff_id != user.pk:
        raise AccessDenied('Unauthorized for this task')

    task.status = new_status
    task.save(update_fields=['status'])
    logger.info(f"Task {task.pk} moved to {new_status} by {user.email}")
    return task


def hotel_staff(manager):
    hotel_id = _manager_hotel_id(manager)
    return CustomUser.objects.filter(role=CustomUser.ROLE_STAFF, hotel_id=hotel_id).order_by('name')
