# apps/hotels/filters.py
import django_filters
from django.db.models import Q

from .models import Hotel


class HotelFilter(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name='location', lookup_expr='icontains')
    min_price = django_filters.NumberFilter(field_name='base_price_per_night', lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name='base_price_per_night', lookup_expr='lte')
    rating = django_filters.NumberFilter(field_name='rating', lookup_expr='gte')
    search = django_filters.CharFilter(method='filter_search')
    sort = django_filters.OrderingFilter(
        fields=(
            ('base_price_per_night', 'price'),
            ('rating', 'rating'),
            ('name', 'name'),
        )
    )

    class Meta:
        model = Hotel
        fields = ['city', 'min_price', 'max_price', 'rating']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(location__icontains=value))
