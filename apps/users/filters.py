# apps/users/filters.py
import django_filters
from django.db.models import Q

from .models import CustomUser


class UserFilter(django_filters.FilterSet):
    role = django_filters.ChoiceFilter(choices=CustomUser.ROLE_CHOICES)
    is_active = django_filters.BooleanFilter()
    search = django_filters.CharFilter(method='filter_search')
    sort = django_filters.OrderingFilter(
        fields=(
            ('name', 'name'),
            ('email', 'email'),
            ('date_joined', 'joined'),
        )
    )

    class Meta:
        model = CustomUser
        fields = ['role', 'is_active']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(email__icontains=value) | Q(phone_number__icontains=value)
        )
