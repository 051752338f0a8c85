# apps/food/views.py
from django.db.models import DecimalField, OuterRef, ProtectedError, Subquery
from django.db.models.functions import Coalesce
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.core.exceptions import HotelServiceError
from apps.users.permissions import IsManager, IsManagerOrReadOnly
from .filters import FoodItemFilter
from .models import FoodItem, HotelFood
from .serializers import (
    FoodItemSerializer,
    FoodPriceSerializer,
    HotelFoodSerializer,
    StockAdjustmentSerializer,
)
from .services import adjust_stock, set_hotel_price


def _hotel_id_param(request):
    hotel_id = request.query_params.get('hotel_id')
    if hotel_id is None:
        return None
    try:
        return int(hotel_id)
    except (TypeError, ValueError):
        return None


class FoodItemViewSet(viewsets.ModelViewSet):
    serializer_class = FoodItemSerializer
    permission_classes = [IsManagerOrReadOnly]
    filterset_class = FoodItemFilter
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        queryset = FoodItem.objects.all()
        hotel_id = _hotel_id_param(self.request)
        if hotel_id is not None:
            override_price = HotelFood.objects.filter(
                hotel_id=hotel_id, food_item=OuterRef('pk')
            ).values('price')[:1]
            queryset = queryset.annotate(
                hotel_price=Coalesce(
                    Subquery(override_price), 'price',
                    output_field=DecimalField(max_digits=10, decimal_places=2),
                )
            )
        return queryset

    def destroy(self, request, *args, **kwargs):
        food_item = self.get_object()
        try:
            food_item.delete()
        except ProtectedError:
            return Response(
                {'error': 'Cannot delete a food item that has been ordered'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response({'message': 'Food item deleted successfully'})

    @action(detail=True, methods=['put'], url_path='price', permission_classes=[IsManager])
    def set_price(self, request, pk=None):
        """Hotel-scoped price override for the manager's hotel"""
        serializer = FoodPriceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            food_item = set_hotel_price(request.user, pk, serializer.validated_data['price'])
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response({
            'message': 'Food item price updated for this hotel',
            'scope': 'hotel',
            'food_item': food_item,
        })

    @action(detail=True, methods=['put'], url_path='stock', permission_classes=[IsManager])
    def update_stock(self, request, pk=None):
        serializer = StockAdjustmentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            data = adjust_stock(
                request.user, pk,
                stock=serializer.validated_data.get('stock'),
                delta=serializer.validated_data.get('delta'),
            )
        except HotelServiceError as e:
            return Response(e.to_dict(), status=e.status_code)
        return Response({'message': 'Stock updated', 'data': data})

    @action(detail=False, methods=['get'], url_path='stock', permission_classes=[IsAuthenticated])
    def hotel_stock(self, request):
        """Price and stock overrides recorded for one hotel"""
        hotel_id = _hotel_id_param(request)
        if hotel_id is None:
            return Response({'error': 'hotel_id is required'}, status=status.HTTP_400_BAD_REQUEST)
        overrides = HotelFood.objects.filter(hotel_id=hotel_id).order_by('food_item_id')
        return Response({'data': HotelFoodSerializer(overrides, many=True).data})
