# apps/staff/models.py
"""
Tasks a hotel manager assigns to the staff of the same hotel.
"""

from django.conf import settings
from django.db import models


class StaffAssignment(models.Model):
    SHIFT_MORNING = 'Morning'
    SHIFT_EVENING = 'Evening'
    SHIFT_NIGHT = 'Night'
    SHIFT_CHOICES = [
        (SHIFT_MORNING, 'Morning'),
        (SHIFT_EVENING, 'Evening'),
        (SHIFT_NIGHT, 'Night'),
    ]

    STATUS_PENDING = 'Pending'
    STATUS_IN_PROGRESS = 'In Progress'
    STATUS_COMPLETE = 'Complete'
    STATUS_OVERDUE = 'Overdue'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETE, 'Complete'),
        (STATUS_OVERDUE, 'Overdue'),
    ]
    # Count against the per-shift cap
    ACTIVE_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS)

    staff = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='assignments')
    hotel = models.ForeignKey('hotels.Hotel', on_delete=models.CASCADE, related_name='staff_assignments')
    title = models.CharField(max_length=150)
    details = models.TextField(blank=True, null=True)
    due_date = models.DateField(blank=True, null=True)
    shift = models.CharField(max_length=16, choices=SHIFT_CHOICES, default=SHIFT_MORNING)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-assigned_at', '-id']
        indexes = [
            models.Index(fields=['hotel', 'shift', 'status'], name='assignment_shift_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} -> {self.staff} ({self.shift})"
