from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest import mock
from zoneinfo import ZoneInfo

import pytest
from django.utils import timezone

from apps.bookings.models import Booking
from apps.bookings.services import create_booking, create_food_order
from apps.hotels.models import Room


@pytest.fixture
def booking_with_food(customer, hotel, rooms, food_items):
    return create_booking(
        customer, hotel.pk, date(2024, 2, 1), date(2024, 2, 3),
        food_items=[
            {'food_item_id': food_items['paneer'].pk, 'quantity': 2},
            {'food_item_id': food_items['tea'].pk, 'quantity': 1},
        ],
    )


@pytest.fixture
def room_only_booking(customer, hotel, rooms):
    return create_booking(customer, hotel.pk, date(2024, 3, 10), date(2024, 3, 11), room_number=102)


@pytest.mark.django_db
class TestAvailableRooms:
    def test_lists_vacant_rooms_in_order(self, api_client, hotel, rooms):
        Room.objects.filter(pk=rooms[101].pk).update(status=Room.STATUS_CLEANING)
        response = api_client.get('/api/bookings/available-rooms/', {'hotel_id': hotel.pk})

        assert response.status_code == 200
        data = response.data['data']
        assert [room['room_number'] for room in data] == [102]
        assert data[0]['room_type']['name'] == 'Standard'
        assert data[0]['nightly_rate'] == Decimal('1000.00')

    def test_order_is_by_room_number(self, api_client, hotel, rooms, standard):
        Room.objects.create(hotel=hotel, room_number=9, room_type=standard)
        response = api_client.get('/api/bookings/available-rooms/', {'hotel_id': hotel.pk})
        assert [room['room_number'] for room in response.data['data']] == [9, 101, 102]

    def test_hotel_id_required(self, api_client):
        response = api_client.get('/api/bookings/available-rooms/')
        assert response.status_code == 400
        assert response.data['error'] == 'hotel_id is required'

    def test_unknown_hotel_has_no_rooms(self, api_client, rooms):
        response = api_client.get('/api/bookings/available-rooms/', {'hotel_id': 9999})
        assert response.status_code == 200
        assert response.data['data'] == []


@pytest.mark.django_db
class TestBookingSummary:
    def test_summary_with_food(self, customer_client, booking_with_food, food_items):
        booking_id = booking_with_food['booking_id']
        response = customer_client.get(f'/api/bookings/{booking_id}/summary/')

        assert response.status_code == 200
        assert response.data['booking']['booking_id'] == booking_id
        assert response.data['booking']['room_number'] == 101
        assert response.data['booking']['total_nights'] == 2
        items = response.data['food_order']['items']
        assert {item['name'] for item in items} == {'Paneer Tikka', 'Masala Tea'}
        assert response.data['totals'] == {
            'room_total': Decimal('3000.00'),
            'food_total': Decimal('250.00'),
            'total_payable': Decimal('3250.00'),
        }

    def test_summary_without_food(self, customer_client, room_only_booking):
        response = customer_client.get(f"/api/bookings/{room_only_booking['booking_id']}/summary/")
        assert response.status_code == 200
        assert response.data['food_order'] is None
        assert response.data['totals']['food_total'] == Decimal('0.00')
        assert response.data['totals']['total_payable'] == Decimal('1000.00')

    def test_other_users_booking_is_not_found(self, api_client, other_customer, booking_with_food):
        api_client.force_authenticate(user=other_customer)
        response = api_client.get(f"/api/bookings/{booking_with_food['booking_id']}/summary/")
        assert response.status_code == 404
        assert response.data == {'error': 'Booking not found'}


@pytest.mark.django_db
class TestMyBookings:
    def test_lists_only_own_bookings(
        self, api_client, customer, other_customer, booking_with_food, room_only_booking
    ):
        api_client.force_authenticate(user=customer)
        response = api_client.get('/api/bookings/mine/')
        assert response.status_code == 200
        assert response.data['count'] == 2
        ids = {row['id'] for row in response.data['results']}
        assert ids == {booking_with_food['booking_id'], room_only_booking['booking_id']}
        with_food = next(r for r in response.data['results'] if r['id'] == booking_with_food['booking_id'])
        assert with_food['has_food_order'] is True
        assert with_food['hotel_name'] == 'Sea View Residency'

        api_client.force_authenticate(user=other_customer)
        response = api_client.get('/api/bookings/mine/')
        assert response.data['count'] == 0


@pytest.mark.django_db
class TestManagerAnalytics:
    def test_totals_and_occupancy(self, manager_client, booking_with_food):
        response = manager_client.get('/api/bookings/analytics/')

        assert response.status_code == 200
        assert response.data['bookings'] == {'total': 1, 'this_month': 1}
        revenue = response.data['revenue']
        assert revenue['room'] == Decimal('3000.00')
        assert revenue['food'] == Decimal('250.00')
        assert revenue['total'] == Decimal('3250.00')
        assert revenue['total_this_month'] == Decimal('3250.00')
        # 201 was already occupied, 101 was just booked
        assert response.data['rooms'] == {'total': 3, 'occupied': 2, 'occupancy_rate': 67}

    def test_no_rooms(self, manager_client):
        response = manager_client.get('/api/bookings/analytics/')
        assert response.status_code == 200
        assert response.data['rooms']['occupancy_rate'] == 0
        assert response.data['revenue']['total'] == Decimal('0.00')

    def test_customers_are_rejected(self, customer_client):
        response = customer_client.get('/api/bookings/analytics/')
        assert response.status_code == 403

    def test_month_starts_in_local_time(self, manager_client, room_only_booking):
        ist = ZoneInfo('Asia/Kolkata')
        # 02:00 on the 1st in Kolkata is still the previous month in UTC
        Booking.objects.update(booking_date=datetime(2024, 3, 1, 2, 0, tzinfo=ist))

        with mock.patch('django.utils.timezone.now', return_value=datetime(2024, 3, 1, 10, 0, tzinfo=ist)):
            response = manager_client.get('/api/bookings/analytics/')

        assert response.status_code == 200
        assert response.data['bookings'] == {'total': 1, 'this_month': 1}
        assert response.data['revenue']['room_this_month'] == Decimal('1000.00')

    def test_food_this_month_follows_order_date(self, manager_client, customer, room_only_booking, food_items):
        Booking.objects.update(booking_date=timezone.now() - timedelta(days=40))
        create_food_order(
            customer,
            room_only_booking['booking_id'],
            [{'food_item_id': food_items['tea'].pk, 'quantity': 5}],
        )

        response = manager_client.get('/api/bookings/analytics/')

        assert response.data['bookings']['this_month'] == 0
        revenue = response.data['revenue']
        assert revenue['room_this_month'] == Decimal('0.00')
        assert revenue['food_this_month'] == Decimal('250.00')
        assert revenue['total_this_month'] == Decimal('250.00')
