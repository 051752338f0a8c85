from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.food.models import FoodItem
from apps.hotels.models import Hotel, Room, RoomType
from apps.users.models import CustomUser


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def hotel(db):
    return Hotel.objects.create(
        name='Sea View Residency',
        location='Goa',
        address='Calangute Beach Road',
        rating=Decimal('4.5'),
        base_price_per_night=Decimal('1000.00'),
    )


@pytest.fixture
def other_hotel(db):
    return Hotel.objects.create(
        name='Hill Top Inn',
        location='Manali',
        rating=Decimal('3.8'),
        base_price_per_night=Decimal('2500.00'),
    )


@pytest.fixture
def standard(db):
    return RoomType.objects.create(name='Standard', price_multiplier=Decimal('1.00'))


@pytest.fixture
def deluxe(db):
    return RoomType.objects.create(name='Deluxe', price_multiplier=Decimal('1.50'))


@pytest.fixture
def rooms(hotel, standard, deluxe):
    """101 and 102 are free, 201 is occupied."""
    return {
        101: Room.objects.create(hotel=hotel, room_number=101, room_type=deluxe),
        102: Room.objects.create(hotel=hotel, room_number=102, room_type=standard),
        201: Room.objects.create(
            hotel=hotel, room_number=201, room_type=deluxe, status=Room.STATUS_OCCUPIED
        ),
    }


@pytest.fixture
def food_items(db):
    return {
        'paneer': FoodItem.objects.create(
            name='Paneer Tikka', price=Decimal('100.00'), category='Dinner', type='Veg'
        ),
        'tea': FoodItem.objects.create(
            name='Masala Tea', price=Decimal('50.00'), category='Beverages', type='Veg'
        ),
        'chicken': FoodItem.objects.create(
            name='Butter Chicken', price=Decimal('320.00'), category='Dinner', type='Non-Veg'
        ),
    }


@pytest.fixture
def customer(db):
    return CustomUser.objects.create_user(
        email='guest@example.com', password='guestpass123', name='Asha Guest'
    )


@pytest.fixture
def other_customer(db):
    return CustomUser.objects.create_user(
        email='other@example.com', password='otherpass123', name='Ravi Other'
    )


@pytest.fixture
def manager(hotel):
    return CustomUser.objects.create_user(
        email='manager@example.com', password='managerpass123', name='Meera Manager',
        role=CustomUser.ROLE_MANAGER, hotel=hotel,
    )


@pytest.fixture
def staff_member(hotel):
    return CustomUser.objects.create_user(
        email='staff@example.com', password='staffpass123', name='Sunil Staff',
        role=CustomUser.ROLE_STAFF, hotel=hotel,
    )


@pytest.fixture
def customer_client(api_client, customer):
    api_client.force_authenticate(user=customer)
    return api_client


@pytest.fixture
def manager_client(api_client, manager):
    api_client.force_authenticate(user=manager)
    return api_client


@pytest.fixture
def staff_client(api_client, staff_member):
    api_client.force_authenticate(user=staff_member)
    return api_client
