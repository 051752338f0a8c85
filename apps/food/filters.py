# apps/food/filters.py
import django_filters

from .models import FoodItem


class FoodItemFilter(django_filters.FilterSet):
    category = django_filters.ChoiceFilter(choices=FoodItem.CATEGORY_CHOICES)
    subcategory = django_filters.ChoiceFilter(field_name='type', choices=FoodItem.TYPE_CHOICES)
    min_price = django_filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = django_filters.NumberFilter(field_name='price', lookup_expr='lte')
    search = django_filters.CharFilter(field_name='name', lookup_expr='icontains')
    sort = django_filters.OrderingFilter(
        fields=(
            ('price', 'price'),
            ('name', 'name'),
            ('id', 'food_item_id'),
        )
    )

    class Meta:
        model = FoodItem
        fields = ['category', 'subcategory', 'min_price', 'max_price']
