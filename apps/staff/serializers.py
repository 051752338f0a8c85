from rest_framework import serializers

from apps.users.models import CustomUser
from .models import StaffAssignment


class StaffAssignmentSerializer(serializers.ModelSerializer):
    staff_email = serializers.ReadOnlyField(source='staff.email')
    staff_name = serializers.ReadOnlyField(source='staff.name')

    class Meta:
        model = StaffAssignment
        fields = [
            'id', 'staff', 'staff_email', 'staff_name', 'hotel', 'title',
            'details', 'due_date', 'shift', 'status', 'assigned_at',
        ]
        read_only_fields = fields


class AssignTaskSerializer(serializers.Serializer):
    staff_email = serializers.EmailField()
    title = serializers.CharField(max_length=150)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)
    shift = serializers.ChoiceField(
        choices=StaffAssignment.SHIFT_CHOICES, default=StaffAssignment.SHIFT_MORNING
    )


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=StaffAssignment.STATUS_CHOICES)


class StaffMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ['id', 'name', 'email', 'hotel']
