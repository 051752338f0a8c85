from django.contrib import admin

from .models import StaffAssignment


@admin.register(StaffAssignment)
class StaffAssignmentAdmin(admin.ModelAdmin):
    list_display = ('title', 'staff', 'hotel', 'shift', 'status', 'due_date', 'assigned_at')
    list_filter = ('hotel', 'shift', 'status')
    search_fields = ('title', 'staff__email')
