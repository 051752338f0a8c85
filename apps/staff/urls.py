from django.urls import path

from .views import HotelStaffView, ManagerTaskView, MyTasksView, TaskStatusView

urlpatterns = [
    path('tasks/', ManagerTaskView.as_view(), name='staff-tasks'),
    path('tasks/mine/', MyTasksView.as_view(), name='staff-my-tasks'),
    path('tasks/<int:task_id>/status/', TaskStatusView.as_view(), name='staff-task-status'),
    path('members/', HotelStaffView.as_view(), name='hotel-staff'),
]
