from datetime import timedelta
from unittest import mock

import pytest
from django.core import mail
from django.core.cache import cache
from django.utils import timezone

from apps.users.models import CustomUser
from apps.users.tokens import PasswordResetTokenStore


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.mark.django_db
class TestRegistrationAndLogin:
    def test_register_customer(self, api_client):
        response = api_client.post('/api/users/register/', {
            'name': 'New Guest',
            'email': 'New.Guest@Example.com',
            'password': 'secret123',
        }, format='json')

        assert response.status_code == 201
        assert response.data['user']['role'] == 'customer'
        assert response.data['user']['email'] == 'new.guest@example.com'
        assert {'access', 'refresh'} <= set(response.data['tokens'])

    def test_duplicate_email(self, api_client, customer):
        response = api_client.post('/api/users/register/', {
            'name': 'Again', 'email': customer.email, 'password': 'secret123',
        }, format='json')
        assert response.status_code == 400
        assert 'email' in response.data['errors']

    def test_token_carries_role(self, api_client, manager):
        response = api_client.post('/api/users/token/', {
            'email': manager.email, 'password': 'managerpass123',
        }, format='json')
        assert response.status_code == 200
        assert response.data['user']['role'] == 'manager'
        assert response.data['user']['hotel'] == manager.hotel_id

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = api_client.get('/api/users/me/')
        assert me.status_code == 200
        assert me.data['user']['email'] == manager.email

    def test_inactive_user_cannot_authenticate(self, api_client, customer):
        login = api_client.post('/api/users/token/', {
            'email': customer.email, 'password': 'guestpass123',
        }, format='json')
        CustomUser.objects.filter(pk=customer.pk).update(is_active=False)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        assert api_client.get('/api/users/me/').status_code == 401

    def test_me_requires_auth(self, api_client):
        assert api_client.get('/api/users/me/').status_code == 401

    def test_logout_blacklists_refresh_token(self, api_client, customer):
        login = api_client.post('/api/users/token/', {
            'email': customer.email, 'password': 'guestpass123',
        }, format='json')
        refresh = login.data['refresh']

        assert api_client.post('/api/users/logout/', {'refresh': refresh}, format='json').status_code == 200
        assert api_client.post('/api/users/logout/', {'refresh': refresh}, format='json').status_code == 400
        assert api_client.post('/api/users/token/refresh/', {'refresh': refresh}, format='json').status_code == 401


@pytest.mark.django_db
class TestPasswordReset:
    def test_forgot_and_reset(self, api_client, customer):
        response = api_client.post('/api/users/forgot-password/', {'email': customer.email}, format='json')
        assert response.status_code == 200
        assert 'reset_token' not in response.data
        assert len(mail.outbox) == 1

        reset_url = mail.outbox[0].body.split(': ', 1)[1]
        token = reset_url.rstrip('/').rsplit('/', 1)[1]
        response = api_client.post(
            f'/api/users/reset-password/{token}/', {'password': 'BrandNewPass77'}, format='json'
        )
        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.check_password('BrandNewPass77')

        # Tokens are single use
        response = api_client.post(
            f'/api/users/reset-password/{token}/', {'password': 'AnotherPass88'}, format='json'
        )
        assert response.status_code == 400
        assert response.data['error'] == 'Invalid or expired reset token'

    def test_debug_echoes_token(self, settings, api_client, customer):
        settings.DEBUG = True
        response = api_client.post('/api/users/forgot-password/', {'email': customer.email}, format='json')
        assert response.status_code == 200
        assert response.data['email_sent'] is True
        assert response.data['reset_url'].endswith(f"{response.data['reset_token']}/")

    def test_unknown_email(self, api_client):
        response = api_client.post('/api/users/forgot-password/', {'email': 'ghost@example.com'}, format='json')
        assert response.status_code == 404

    def test_bogus_token(self, api_client):
        response = api_client.post('/api/users/reset-password/nope/', {'password': 'BrandNewPass77'}, format='json')
        assert response.status_code == 400


@pytest.mark.django_db
class TestPasswordResetTokenStore:
    def test_lookup_and_consume(self, customer):
        store = PasswordResetTokenStore(ttl=600)
        token = store.issue(customer)
        assert store.lookup(token) == customer.pk
        assert store.consume(token) == customer.pk
        assert store.lookup(token) is None

    def test_expired_token(self, customer):
        store = PasswordResetTokenStore(ttl=600)
        token = store.issue(customer)
        later = timezone.now() + timedelta(minutes=11)
        with mock.patch('apps.users.tokens.timezone.now', return_value=later):
            assert store.lookup(token) is None
        assert store.lookup(token) is None

    def test_tokens_are_unique(self, customer):
        store = PasswordResetTokenStore(ttl=600)
        assert store.issue(customer) != store.issue(customer)


@pytest.fixture
def site_admin(db):
    return CustomUser.objects.create_superuser(
        email='admin@example.com', password='adminpass123', name='Site Admin'
    )


@pytest.fixture
def account_admin(db):
    return CustomUser.objects.create_user(
        email='accounts@example.com', password='accountspass123', name='Kiran Accounts', is_staff=True
    )


@pytest.mark.django_db
class TestProfile:
    def test_update_own_profile(self, customer_client, customer):
        response = customer_client.patch(
            '/api/users/me/', {'name': '  Asha G  ', 'phone_number': '+91 98765 43210'}, format='json'
        )
        assert response.status_code == 200
        assert response.data['user']['name'] == 'Asha G'
        customer.refresh_from_db()
        assert customer.phone_number == '+91 98765 43210'

    def test_role_cannot_be_self_assigned(self, customer_client, customer, hotel):
        response = customer_client.put(
            '/api/users/me/', {'name': 'Asha Guest', 'role': 'manager', 'hotel': hotel.pk}, format='json'
        )
        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.role == 'customer'
        assert customer.hotel is None

    def test_invalid_phone(self, customer_client):
        response = customer_client.patch('/api/users/me/', {'phone_number': 'abc'}, format='json')
        assert response.status_code == 400
        assert 'phone_number' in response.data['errors']


@pytest.mark.django_db
class TestChangePassword:
    url = '/api/users/change-password/'

    def test_change_password(self, customer_client, customer):
        response = customer_client.put(self.url, {
            'current_password': 'guestpass123', 'new_password': 'BrandNewPass77',
        }, format='json')
        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.check_password('BrandNewPass77')

    def test_wrong_current_password(self, customer_client, customer):
        response = customer_client.put(self.url, {
            'current_password': 'not-my-password', 'new_password': 'BrandNewPass77',
        }, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Current password is incorrect'
        customer.refresh_from_db()
        assert customer.check_password('guestpass123')

    def test_new_password_too_short(self, customer_client):
        response = customer_client.put(self.url, {
            'current_password': 'guestpass123', 'new_password': 'abc',
        }, format='json')
        assert response.status_code == 400
        assert 'new_password' in response.data['errors']

    def test_requires_auth(self, api_client):
        assert api_client.put(self.url, {}, format='json').status_code == 401


@pytest.mark.django_db
class TestUserAdministration:
    def test_admin_lists_and_filters(self, api_client, site_admin, customer, manager):
        CustomUser.objects.filter(pk=customer.pk).update(phone_number='+91 98765 43210')
        api_client.force_authenticate(user=site_admin)

        response = api_client.get('/api/users/')
        assert response.status_code == 200
        assert response.data['count'] == 3

        response = api_client.get('/api/users/', {'role': 'customer'})
        assert [u['email'] for u in response.data['results']] == [customer.email]

        response = api_client.get('/api/users/', {'search': '98765'})
        assert [u['email'] for u in response.data['results']] == [customer.email]

        response = api_client.get('/api/users/', {'search': 'meera'})
        assert [u['email'] for u in response.data['results']] == [manager.email]

        response = api_client.get('/api/users/', {'sort': 'name'})
        assert [u['name'] for u in response.data['results']] == ['Asha Guest', 'Meera Manager', 'Site Admin']

    def test_inactive_filter(self, api_client, site_admin, customer, other_customer):
        CustomUser.objects.filter(pk=other_customer.pk).update(is_active=False)
        api_client.force_authenticate(user=site_admin)
        response = api_client.get('/api/users/', {'is_active': 'false'})
        assert [u['email'] for u in response.data['results']] == [other_customer.email]

    def test_list_requires_admin(self, manager_client):
        response = manager_client.get('/api/users/')
        assert response.status_code == 403

    def test_user_reads_only_self(self, customer_client, customer, other_customer):
        response = customer_client.get(f'/api/users/{customer.pk}/')
        assert response.status_code == 200
        assert response.data['email'] == customer.email

        response = customer_client.get(f'/api/users/{other_customer.pk}/')
        assert response.status_code == 403

    def test_admin_updates_role_and_status(self, api_client, account_admin, customer, hotel):
        api_client.force_authenticate(user=account_admin)
        response = api_client.patch(f'/api/users/{customer.pk}/', {
            'role': 'staff', 'hotel': hotel.pk, 'is_active': False,
        }, format='json')

        assert response.status_code == 200
        assert response.data['user']['role'] == 'staff'
        customer.refresh_from_db()
        assert customer.role == 'staff'
        assert customer.hotel == hotel
        assert not customer.is_active

    def test_hotel_roles_need_a_hotel(self, api_client, account_admin, customer):
        api_client.force_authenticate(user=account_admin)
        response = api_client.patch(f'/api/users/{customer.pk}/', {'role': 'manager'}, format='json')
        assert response.status_code == 400
        assert 'hotel' in response.data['errors']
        customer.refresh_from_db()
        assert customer.role == 'customer'

    def test_user_cannot_change_own_status(self, customer_client, customer):
        response = customer_client.patch(
            f'/api/users/{customer.pk}/', {'name': 'Asha Updated', 'is_active': False}, format='json'
        )
        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.name == 'Asha Updated'
        assert customer.is_active

    def test_user_cannot_update_others(self, customer_client, other_customer):
        response = customer_client.patch(f'/api/users/{other_customer.pk}/', {'name': 'Hacked'}, format='json')
        assert response.status_code == 403
        other_customer.refresh_from_db()
        assert other_customer.name == 'Ravi Other'

    def test_admin_deletes_user(self, api_client, account_admin, customer):
        api_client.force_authenticate(user=account_admin)
        response = api_client.delete(f'/api/users/{customer.pk}/')
        assert response.status_code == 200
        assert not CustomUser.objects.filter(pk=customer.pk).exists()

    def test_superuser_cannot_be_deleted(self, api_client, account_admin, site_admin):
        api_client.force_authenticate(user=account_admin)
        response = api_client.delete(f'/api/users/{site_admin.pk}/')
        assert response.status_code == 400
        assert response.data['error'] == 'Cannot delete admin user'
        assert CustomUser.objects.filter(pk=site_admin.pk).exists()

    def test_admin_cannot_delete_self(self, api_client, account_admin):
        api_client.force_authenticate(user=account_admin)
        response = api_client.delete(f'/api/users/{account_admin.pk}/')
        assert response.status_code == 400
        assert CustomUser.objects.filter(pk=account_admin.pk).exists()

    def test_customer_cannot_delete(self, customer_client, other_customer):
        response = customer_client.delete(f'/api/users/{other_customer.pk}/')
        assert response.status_code == 403

    def test_statistics(self, api_client, site_admin, customer, other_customer, manager):
        CustomUser.objects.filter(pk=other_customer.pk).update(
            is_active=False, date_joined=timezone.now() - timedelta(days=60)
        )
        api_client.force_authenticate(user=site_admin)

        response = api_client.get('/api/users/statistics/')

        assert response.status_code == 200
        assert response.data == {
            'total_users': 4,
            'active_users': 3,
            'inactive_users': 1,
            'new_users': 3,
            'by_role': {'customer': 2, 'staff': 0, 'manager': 2},
        }

    def test_statistics_requires_admin(self, customer_client):
        assert customer_client.get('/api/users/statistics/').status_code == 403
