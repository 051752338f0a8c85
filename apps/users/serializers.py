from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from .models import CustomUser

PHONE_PATTERN = r'^[0-9+\-()\s]{8,}$'


def phone_field():
    return serializers.RegexField(
        PHONE_PATTERN, required=False, allow_null=True,
        error_messages={'invalid': 'Please provide a valid phone number'},
    )


def clean_name(value):
    value = value.strip()
    if not 2 <= len(value) <= 100:
        raise serializers.ValidationError("Name must be 2-100 characters")
    return value


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        try:
            data = super().validate(attrs)
        except AuthenticationFailed:
            raise AuthenticationFailed(detail="Invalid email or password.")
        data['user'] = UserSerializer(self.user).data
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        token['name'] = user.name
        token['role'] = user.role
        token['hotel_id'] = user.hotel_id
        return token


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ['id', 'name', 'email', 'role', 'phone_number', 'hotel', 'is_active']
        read_only_fields = ['role', 'hotel', 'is_active']


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)
    phone_number = phone_field()

    class Meta:
        model = CustomUser
        fields = ['id', 'name', 'email', 'password', 'phone_number']

    def validate_name(self, value):
        return clean_name(value)

    def validate_email(self, value):
        value = value.strip().lower()
        if CustomUser.objects.filter(email=value).exists():
            raise serializers.ValidationError("User already exists with this email")
        return value

    def create(self, validated_data):
        return CustomUser.objects.create_user(role=CustomUser.ROLE_CUSTOMER, **validated_data)


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(min_length=6)

    def validate_password(self, value):
        validate_password(value)
        return value


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own account"""
    phone_number = phone_field()

    class Meta:
        model = CustomUser
        fields = ['name', 'phone_number']

    def validate_name(self, value):
        return clean_name(value)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField(min_length=6)

    def validate_new_password(self, value):
        validate_password(value, user=self.context.get('user'))
        return value


class ManagedUserSerializer(serializers.ModelSerializer):
    """Account view and update used by site administrators"""
    phone_number = phone_field()

    class Meta:
        model = CustomUser
        fields = [
            'id', 'name', 'email', 'role', 'phone_number', 'hotel',
            'is_active', 'is_staff', 'date_joined', 'last_login',
        ]
        read_only_fields = ['email', 'is_staff', 'date_joined', 'last_login']

    def validate_name(self, value):
        return clean_name(value)

    def validate(self, attrs):
        if 'role' not in attrs and 'hotel' not in attrs:
            return attrs
        role = attrs.get('role', self.instance.role if self.instance else CustomUser.ROLE_CUSTOMER)
        hotel = attrs['hotel'] if 'hotel' in attrs else getattr(self.instance, 'hotel', None)
        if role in (CustomUser.ROLE_MANAGER, CustomUser.ROLE_STAFF) and hotel is None:
            raise serializers.ValidationError({'hotel': 'Managers and staff must be assigned to a hotel'})
        return attrs
