from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.models import FoodOrder, OrderDetail
from apps.bookings.services import create_booking, create_food_order
from apps.food.models import HotelFood
from apps.users.models import CustomUser

CREATE_URL = '/api/bookings/orders/create/'


@pytest.fixture
def booking(customer, hotel, rooms):
    return create_booking(customer, hotel.pk, date(2024, 2, 1), date(2024, 2, 3))


def order_lines(food_items):
    return [
        {'food_item_id': food_items['paneer'].pk, 'quantity': 2},
        {'food_item_id': food_items['tea'].pk, 'quantity': 1},
    ]


@pytest.mark.django_db
class TestCreateFoodOrder:
    def test_creates_order(self, customer_client, booking, food_items):
        response = customer_client.post(CREATE_URL, {
            'booking_id': booking['booking_id'],
            'food_items': order_lines(food_items),
        }, format='json')

        assert response.status_code == 201
        assert response.data['booking_id'] == booking['booking_id']
        assert response.data['status'] == 'Pending'
        assert response.data['total_amount'] == Decimal('250.00')
        assert len(response.data['items']) == 2
        assert OrderDetail.objects.filter(order_id=response.data['order_id']).count() == 2

    def test_second_order_is_rejected(self, customer_client, booking, food_items):
        payload = {'booking_id': booking['booking_id'], 'food_items': order_lines(food_items)}
        assert customer_client.post(CREATE_URL, payload, format='json').status_code == 201

        response = customer_client.post(CREATE_URL, payload, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Order already exists for this booking'
        assert FoodOrder.objects.count() == 1

    def test_other_users_booking(self, api_client, other_customer, booking, food_items):
        api_client.force_authenticate(user=other_customer)
        response = api_client.post(CREATE_URL, {
            'booking_id': booking['booking_id'],
            'food_items': order_lines(food_items),
        }, format='json')
        assert response.status_code == 404
        assert FoodOrder.objects.count() == 0

    def test_empty_order_is_rejected(self, customer_client, booking):
        response = customer_client.post(
            CREATE_URL, {'booking_id': booking['booking_id'], 'food_items': []}, format='json'
        )
        assert response.status_code == 400
        assert response.data['error'] == 'Invalid food item or quantity'

    def test_insufficient_stock_writes_nothing(self, customer_client, booking, hotel, food_items):
        stock = HotelFood.objects.create(hotel=hotel, food_item=food_items['tea'], stock=0)
        response = customer_client.post(CREATE_URL, {
            'booking_id': booking['booking_id'],
            'food_items': order_lines(food_items),
        }, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Insufficient stock for Masala Tea'
        assert FoodOrder.objects.count() == 0
        stock.refresh_from_db()
        assert stock.stock == 0


@pytest.mark.django_db
class TestFoodOrderDetail:
    @pytest.fixture
    def order_id(self, customer, booking, food_items):
        return create_food_order(customer, booking['booking_id'], order_lines(food_items))['order_id']

    def test_owner_can_view(self, customer_client, order_id):
        response = customer_client.get(f'/api/bookings/orders/{order_id}/')
        assert response.status_code == 200
        assert response.data['total_amount'] == Decimal('250.00')
        assert len(response.data['items']) == 2

    def test_hotel_manager_can_view(self, manager_client, order_id):
        response = manager_client.get(f'/api/bookings/orders/{order_id}/')
        assert response.status_code == 200

    def test_staff_of_another_hotel_cannot_view(self, api_client, other_hotel, order_id):
        outsider = CustomUser.objects.create_user(
            email='outsider@example.com', password='outsiderpass1',
            role=CustomUser.ROLE_STAFF, hotel=other_hotel,
        )
        api_client.force_authenticate(user=outsider)
        response = api_client.get(f'/api/bookings/orders/{order_id}/')
        assert response.status_code == 403

    def test_missing_order(self, customer_client):
        response = customer_client.get('/api/bookings/orders/9999/')
        assert response.status_code == 404
        assert response.data == {'error': 'Order not found'}
