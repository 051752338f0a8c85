# apps/users/permissions.py

from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsManager(BasePermission):
    """Only hotel managers can access"""
    message = 'Access denied. Manager role required.'

    def has_permission(self, request, view):
        return request.user.is_authenticated and getattr(request.user, "role", None) == 'manager'


class IsStaffMember(BasePermission):
    message = 'Access denied. Staff role required.'

    def has_permission(self, request, view):
        return request.user.is_authenticated and getattr(request.user, "role", None) == 'staff'


class IsManagerOrReadOnly(BasePermission):
    """Managers can create/update, everyone else can only view."""
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return request.user.is_authenticated and getattr(request.user, "role", None) == 'manager'


class IsAccountAdmin(BasePermission):
    """Site administrators (``is_staff``) manage every account"""
    message = 'Access denied. Admin access required.'

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_staff


class IsAccountAdminOrSelf(BasePermission):
    message = 'Access denied. You can only access your own profile.'

    def has_permission(self, request, view):
        return request.user.is_authenticated

    def has_object_permission(self, request, view, obj):
        return request.user.is_staff or obj.pk == request.user.pk
