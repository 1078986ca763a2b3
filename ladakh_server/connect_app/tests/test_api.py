"""End-to-end tests through the REST endpoints"""
import tempfile
from decimal import Decimal
from io import BytesIO
from unittest.mock import patch

from django.contrib.auth.models import User
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from wallet.models import EscrowHold
from ..utils.cache_keys import CacheKeys
from ..utils.constants import TripStatus
from .helpers import make_passenger, make_owner, make_reference_data, make_offer


class AuthApiTest(APITestCase):
    def setUp(self):
        cache.clear()

    @patch('connect_app.services.auth_service.send_otp_via_twilio', return_value={'status': 'success', 'sid': 'SM1'})
    def test_otp_login_then_complete_profile(self, mock_sms):
        response = self.client.post('/api/mobile-login/request-otp/', {'mobile_number': '9876543210'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('otp_code', response.data)

        otp = cache.get(CacheKeys.otp('919876543210'))
        response = self.client.post('/api/mobile-login/verify-otp/',
                                    {'mobile_number': '9876543210', 'otp_code': otp}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['profile_complete'])
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.post('/api/profile/complete/',
                                    {'role': 'passenger', 'full_name': 'Dolma Angmo'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['wallet_balance']), Decimal('15000.00'))

        response = self.client.get('/api/profile/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['full_name'], 'Dolma Angmo')

    def test_wrong_otp(self):
        cache.set(CacheKeys.otp('919876543210'), '123456', timeout=60)
        response = self.client.post('/api/mobile-login/verify-otp/',
                                    {'mobile_number': '919876543210', 'otp_code': '654321'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_owner_profile_needs_vehicle_number(self):
        user = User.objects.create(username='919876543210')
        self.client.force_authenticate(user)
        response = self.client.post('/api/profile/complete/',
                                    {'role': 'owner', 'full_name': 'Tenzin Norbu'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_update_rejects_non_image(self):
        user = make_passenger()
        self.client.force_authenticate(user)
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        response = self.client.patch('/api/profile/update/', {'profile_image': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_update_rejects_relabelled_file(self):
        user = make_passenger()
        self.client.force_authenticate(user)
        upload = SimpleUploadedFile('avatar.png', b'not really a png', content_type='image/png')
        response = self.client.patch('/api/profile/update/', {'profile_image': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('profile_image', response.data)

    def test_profile_update_accepts_real_image(self):
        user = make_passenger()
        self.client.force_authenticate(user)
        buffer = BytesIO()
        Image.new('RGB', (8, 8), 'orange').save(buffer, format='PNG')
        upload = SimpleUploadedFile('avatar.png', buffer.getvalue(), content_type='image/png')

        with override_settings(MEDIA_ROOT=tempfile.mkdtemp()):
            response = self.client.patch('/api/profile/update/', {'profile_image': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['profile_image'])


class MarketplaceApiTest(APITestCase):
    def setUp(self):
        self.leh, self.srinagar = make_reference_data()
        self.passenger = make_passenger()
        self.owner = make_owner()
        self.offer = make_offer(self.owner, self.leh, self.srinagar, booked_seats=[1])

    def test_reference_data_is_public(self):
        response = self.client.get('/api/city-list/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['name'] for c in response.data], ['Leh', 'Srinagar'])

        response = self.client.get('/api/vehicle-types/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_search_and_seat_map(self):
        self.client.force_authenticate(self.passenger)
        response = self.client.get('/api/ride-offers/', {
            'from_city': 'Leh', 'to_city': 'Srinagar', 'date': self.offer.departure_date.isoformat(),
            'time_of_day': 'Morning,Evening', 'ordering': 'price',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['driver_name'], 'Tenzin Norbu')
        self.assertEqual(response.data[0]['available_seats'], 5)

        response = self.client.get(f'/api/ride-offers/{self.offer.id}/seats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['rows'][0][0]['status'], 'booked')

    def test_search_requires_route_and_date(self):
        self.client.force_authenticate(self.passenger)
        response = self.client.get('/api/ride-offers/', {'from_city': 'Leh'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_owner_publishes_ride(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post('/api/ride-offers/', {
            'from_city': 'Leh', 'to_city': 'Srinagar',
            'departure_date': self.offer.departure_date.isoformat(), 'departure_time': '07:30 AM',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['price_per_seat'], 3600)
        self.assertEqual(response.data['total_seats'], 6)

        response = self.client.get('/api/ride-offers/mine/')
        self.assertEqual(len(response.data), 2)

    def test_passenger_cannot_publish(self):
        self.client.force_authenticate(self.passenger)
        response = self.client.post('/api/ride-offers/', {
            'from_city': 'Leh', 'to_city': 'Srinagar',
            'departure_date': self.offer.departure_date.isoformat(), 'departure_time': '07:30',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class TripApiTest(APITestCase):
    def setUp(self):
        self.leh, self.srinagar = make_reference_data()
        self.passenger = make_passenger()
        self.owner = make_owner()
        self.offer = make_offer(self.owner, self.leh, self.srinagar, booked_seats=[1])

    def _book(self, seats):
        self.client.force_authenticate(self.passenger)
        return self.client.post('/api/trips/', {'offer': self.offer.id, 'seats': seats}, format='json')

    def test_full_trip_lifecycle(self):
        response = self._book([2, 3])
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        trip_id = response.data['id']
        self.assertEqual(response.data['status'], TripStatus.BOOKED)
        self.assertEqual(response.data['booking_reference'], f'LC{trip_id}')

        response = self.client.get(f'/api/trips/{trip_id}/documents/ticket/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(f'LadakhConnect_Ticket_{trip_id}.txt', response['Content-Disposition'])

        self.client.force_authenticate(self.owner)
        for next_status in (TripStatus.EN_ROUTE, TripStatus.ARRIVED):
            response = self.client.post(f'/api/trips/{trip_id}/status/', {'status': next_status}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.force_authenticate(self.passenger)
        response = self.client.post(f'/api/trips/{trip_id}/confirm-arrival/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], TripStatus.COMPLETED)
        self.assertEqual(response.data['payment_status'], 'released')

        response = self.client.post(f'/api/trips/{trip_id}/rate/', {'rating': 5}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.post(f'/api/trips/{trip_id}/rate/', {'rating': 4}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(f'/api/trips/{trip_id}/documents/invoice/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(b'PAID (Funds Released)', response.content)

        self.client.force_authenticate(self.owner)
        response = self.client.get('/api/driver-dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_earnings'], 7000)
        self.assertEqual(len(response.data['completed_trips']), 1)

    def test_double_booking_conflict(self):
        self.assertEqual(self._book([2]).status_code, status.HTTP_201_CREATED)
        response = self._book([2, 4])
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('error', response.data)

    def test_owner_cannot_book(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post('/api/trips/', {'offer': self.offer.id, 'seats': [2]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_cancel_booking(self):
        trip_id = self._book([2]).data['id']
        response = self.client.post(f'/api/trips/{trip_id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], TripStatus.CANCELLED)
        self.assertEqual(response.data['payment_status'], 'refunded')

    def test_passenger_cannot_drive_trip(self):
        trip_id = self._book([2]).data['id']
        response = self.client.post(f'/api/trips/{trip_id}/status/', {'status': TripStatus.EN_ROUTE}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_outsider_cannot_see_trip(self):
        trip_id = self._book([2]).data['id']
        self.client.force_authenticate(make_passenger(username='9191000009'))
        self.assertEqual(self.client.get(f'/api/trips/{trip_id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.get(f'/api/trips/{trip_id}/messages/').status_code, status.HTTP_404_NOT_FOUND)

    def test_chat(self):
        trip_id = self._book([2]).data['id']
        response = self.client.post(f'/api/trips/{trip_id}/messages/', {'text': 'Hello Tenzin'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self.client.force_authenticate(self.owner)
        response = self.client.get(f'/api/trips/{trip_id}/messages/')
        self.assertEqual([m['text'] for m in response.data], ['Hello Tenzin'])
        self.assertEqual(response.data[0]['sender_name'], 'Dolma Angmo')

        response = self.client.get(f'/api/trips/{trip_id}/messages/', {'since': 'yesterday'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class WalletApiTest(APITestCase):
    def setUp(self):
        self.passenger = make_passenger()

    def test_balance_and_top_up(self):
        self.client.force_authenticate(self.passenger)
        response = self.client.get('/api/wallet/balance/')
        self.assertEqual(Decimal(response.data['balance']), Decimal('15000.00'))

        response = self.client.post('/api/wallet/balance/add-funds/', {'amount': '250.50'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data['balance']), Decimal('15250.50'))

        response = self.client.get('/api/wallet/transactions/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['title'] for t in response.data], ['Wallet top-up', 'Welcome balance'])

    def test_vault_is_staff_only(self):
        self.client.force_authenticate(self.passenger)
        self.assertEqual(self.client.get('/api/wallet/vault/').status_code, status.HTTP_403_FORBIDDEN)

        staff = User.objects.create(username='admin', is_staff=True)
        self.client.force_authenticate(staff)
        response = self.client.get('/api/wallet/vault/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data['balance']), EscrowHold.vault_balance())
