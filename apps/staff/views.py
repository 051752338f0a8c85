# apps/staff/views.py
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import HotelServiceError
from apps.users.permissions import IsManager, IsStaffMember
from .serializers import (
    AssignTaskSerializer,
    StaffAssignmentSerializer,
    StaffMemberSerializer,
    TaskStatusSerializer,
)
from . import services


def _invalid(serializer):
    return Response(
        {'error': 'Validation failed', 'errors': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


class ManagerTaskView(APIView):
    """Assign tasks and list the tasks of one staff member"""
    permission_classes = [IsAuthenticated, IsManager]

    def get(self, request):
        staff_email = request.query_params.get('staff_email')
        if not staff_email:
            return Response({'error': 'staff_email is required'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            tasks = services.tasks_for_staff(request.user, staff_email)
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response({'data': StaffAssignmentSerializer(tasks, many=True).data})

    def post(self, request):
        serializer = AssignTaskSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid(serializer)
        try:
            task = services.assign_task(request.user, **serializer.validated_data)
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response(
            {'message': 'Task assigned', 'data': StaffAssignmentSerializer(task).data},
            status=status.HTTP_201_CREATED
        )


class TaskStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, task_id):
        if not (request.user.is_manager or request.user.is_hotel_staff):
            return Response({'error': 'Unauthorized'}, status=status.HTTP_403_FORBIDDEN)
        serializer = TaskStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': 'Invalid status'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            task = services.update_task_status(request.user, task_id, serializer.validated_data['status'])
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response({'message': 'Task updated', 'data': StaffAssignmentSerializer(task).data})


class MyTasksView(APIView):
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get(self, request):
        tasks = request.user.assignments.all()
        return Response({'data': StaffAssignmentSerializer(tasks, many=True).data})


class HotelStaffView(APIView):
    permission_classes = [IsAuthenticated, IsManager]

    def get(self, request):
        try:
            staff = services.hotel_staff(request.user)
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response({'data': StaffMemberSerializer(staff, many=True).data})
