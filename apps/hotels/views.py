# apps/hotels/views.py
from django.db import transaction
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
import logging

from apps.users.permissions import IsManager, IsManagerOrReadOnly
from .filters import HotelFilter
from .models import Hotel
from .serializers import HotelSerializer, RoomPriceSerializer

logger = logging.getLogger(__name__)


class HotelViewSet(viewsets.ModelViewSet):
    """Public hotel listing; managers maintain their own hotel."""
    queryset = Hotel.objects.all()
    serializer_class = HotelSerializer
    permission_classes = [IsManagerOrReadOnly]
    filterset_class = HotelFilter
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    def update(self, request, *args, **kwargs):
        hotel = self.get_object()
        if request.user.hotel_id != hotel.pk:
            return Response(
                {'error': 'Access denied. You are not authorized to manage this hotel.'},
                status=status.HTTP_403_FORBIDDEN
            )
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Delete the manager's hotel once it has no current or upcoming stays"""
        hotel = self.get_object()
        if request.user.hotel_id != hotel.pk:
            return Response(
                {'error': 'Access denied. You are not authorized to manage this hotel.'},
                status=status.HTTP_403_FORBIDDEN
            )
        with transaction.atomic():
            active = hotel.bookings.filter(
                check_out_date__gte=timezone.localdate()
            )
            if active.exists():
                return Response(
                    {'error': 'Cannot delete hotel with active bookings'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            # Past bookings hold protected references to the hotel's rooms
            hotel.bookings.all().delete()
            hotel.delete()

        logger.info(f"Hotel {kwargs.get('pk')} deleted by {request.user.email}")
        return Response({'message': 'Hotel deleted successfully'})

    @action(detail=True, methods=['put'], url_path='room-price', permission_classes=[IsManager])
    def room_price(self, request, pk=None):
        """Change the base nightly price of the manager's hotel"""
        serializer = RoomPriceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Validation failed', 'errors': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        if str(request.user.hotel_id) != str(pk):
            return Response({'error': 'Unauthorized for this hotel'}, status=status.HTTP_403_FORBIDDEN)

        new_price = serializer.validated_data['base_price_per_night']
        with transaction.atomic():
            try:
                hotel = Hotel.objects.select_for_update().get(pk=pk)
            except Hotel.DoesNotExist:
                return Response({'error': 'Hotel not found'}, status=status.HTTP_404_NOT_FOUND)
            old_price = hotel.base_price_per_night
            hotel.base_price_per_night = new_price
            hotel.save(update_fields=['base_price_per_night'])

        logger.info(f"Hotel {hotel.pk} base price {old_price} -> {new_price}")
        return Response({
            'message': 'Hotel room price updated successfully',
            'hotel': {
                'id': hotel.pk,
                'name': hotel.name,
                'old_price': old_price,
                'new_price': new_price,
            }
        })
