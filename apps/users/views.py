from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db.models import Count
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
import logging

from .filters import UserFilter
from .models import CustomUser
from .permissions import IsAccountAdmin, IsAccountAdminOrSelf
from .serializers import (
    ChangePasswordSerializer,
    CustomTokenObtainPairSerializer,
    ForgotPasswordSerializer,
    ManagedUserSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UserSerializer,
)
from .tokens import reset_tokens

logger = logging.getLogger(__name__)


def issue_tokens(user):
    refresh = CustomTokenObtainPairSerializer.get_token(user)
    return {'refresh': str(refresh), 'access': str(refresh.access_token)}


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer
    permission_classes = [AllowAny]


class RegisterView(APIView):
    """Customer self-registration"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        user = serializer.save()
        logger.info(f"Registered customer {user.email}")
        return Response({
            'message': 'User registered successfully',
            'user': UserSerializer(user).data,
            'tokens': issue_tokens(user),
        }, status=status.HTTP_201_CREATED)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'user': UserSerializer(request.user).data})

    def put(self, request):
        return self._update(request, partial=False)

    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        user = serializer.save()
        return Response({'message': 'Profile updated successfully', 'user': UserSerializer(user).data})


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):
        user = request.user
        serializer = ChangePasswordSerializer(data=request.data, context={'user': user})
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        if not user.check_password(serializer.validated_data['current_password']):
            return Response(
                {'error': 'Current password is incorrect'},
                status=status.HTTP_400_BAD_REQUEST
            )
        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password'])
        logger.info(f"Password changed for {user.email}")
        return Response({'message': 'Password changed successfully'})


class UserViewSet(viewsets.ModelViewSet):
    """Account administration; non-admins may only read and edit themselves."""
    queryset = CustomUser.objects.select_related('hotel').order_by('-date_joined', '-pk')
    serializer_class = ManagedUserSerializer
    filterset_class = UserFilter
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'put', 'patch', 'delete', 'head', 'options']

    def get_permissions(self):
        if self.action in ('list', 'destroy', 'statistics'):
            return [IsAccountAdmin()]
        return [IsAccountAdminOrSelf()]

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        user = self.get_object()
        # Role, hotel and activation are admin-only
        serializer_class = ManagedUserSerializer if request.user.is_staff else ProfileUpdateSerializer
        serializer = serializer_class(user, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        serializer.save()
        logger.info(f"User {user.email} updated by {request.user.email}")
        return Response({'message': 'User updated successfully', 'user': ManagedUserSerializer(user).data})

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.is_superuser:
            return Response({'error': 'Cannot delete admin user'}, status=status.HTTP_400_BAD_REQUEST)
        if user.pk == request.user.pk:
            return Response({'error': 'Cannot delete your own account'}, status=status.HTTP_400_BAD_REQUEST)
        email = user.email
        user.delete()
        logger.info(f"User {email} deleted by {request.user.email}")
        return Response({'message': 'User deleted successfully'})

    @action(detail=False, methods=['get'])
    def statistics(self, request):
        users = CustomUser.objects.all()
        active = users.filter(is_active=True).count()
        inactive = users.filter(is_active=False).count()
        since = timezone.now() - timedelta(days=30)
        by_role = {role: 0 for role, _ in CustomUser.ROLE_CHOICES}
        for row in users.values('role').annotate(count=Count('pk')):
            by_role[row['role']] = row['count']
        return Response({
            'total_users': active + inactive,
            'active_users': active,
            'inactive_users': inactive,
            'new_users': users.filter(date_joined__gte=since).count(),
            'by_role': by_role,
        })


class LogoutView(APIView):
    """Handle user logout by blacklisting refresh token"""
    permission_classes = [AllowAny]

    def post(self, request):
        refresh_token = request.data.get("refresh")
        if not refresh_token:
            return Response(
                {"error": "Refresh token required."},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError:
            return Response(
                {"error": "Invalid token or already logged out"},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response({"message": "Logout successful"}, status=status.HTTP_200_OK)


class ForgotPasswordView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        email = serializer.validated_data['email'].strip().lower()
        try:
            user = CustomUser.objects.get(email=email)
        except CustomUser.DoesNotExist:
            return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

        token = reset_tokens.issue(user)
        reset_url = request.build_absolute_uri(f'/api/users/reset-password/{token}/')
        minutes = max(1, reset_tokens.ttl // 60)
        html = (
            "<h2>Password Reset</h2>"
            "<p>You requested a password reset. Click the link below to reset your password:</p>"
            f'<a href="{reset_url}">Reset Password</a>'
            f"<p>This link will expire in {minutes} minutes.</p>"
            "<p>If you didn't request this, please ignore this email.</p>"
        )

        sent = True
        try:
            send_mail(
                'Password Reset', f'Reset your password: {reset_url}',
                settings.DEFAULT_FROM_EMAIL, [user.email], html_message=html,
            )
        except Exception as e:
            sent = False
            logger.warning(f"Password reset email to {user.email} failed: {e}")

        data = {'message': 'Password reset email sent successfully'}
        if settings.DEBUG:
            data.update({'reset_token': token, 'reset_url': reset_url, 'email_sent': sent})
        return Response(data)


class ResetPasswordView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, token):
        serializer = ResetPasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        user_id = reset_tokens.consume(token)
        user = CustomUser.objects.filter(pk=user_id).first() if user_id is not None else None
        if user is None:
            return Response(
                {'error': 'Invalid or expired reset token'},
                status=status.HTTP_400_BAD_REQUEST
            )

        user.set_password(serializer.validated_data['password'])
        user.save(update_fields=['password'])
        logger.info(f"Password reset for {user.email}")
        return Response({'message': 'Password reset successfully'})
