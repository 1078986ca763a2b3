"""Tests for trip lifecycle, rating and chat"""
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.utils import timezone

from wallet.models import EscrowHold, Wallet
from ..models import Profile, RideOffer
from ..services.booking_service import BookingService
from ..services.trip_service import (
    TripService, TripPermissionError, InvalidStatusTransitionError, RatingError, ChatError,
)
from ..utils.constants import TripStatus, EscrowStatus
from .helpers import make_passenger, make_owner, make_cities, make_offer


class TripLifecycleTest(TestCase):
    def setUp(self):
        self.service = TripService()
        self.passenger = make_passenger()
        self.owner = make_owner()
        self.leh, self.srinagar = make_cities()
        self.offer = make_offer(self.owner, self.leh, self.srinagar)
        self.trip = BookingService().book_trip(self.passenger, self.offer.id, [2, 3])

    def _drive_to_arrival(self):
        self.service.update_status(self.trip.id, self.owner, TripStatus.EN_ROUTE)
        return self.service.update_status(self.trip.id, self.owner, TripStatus.ARRIVED)

    def test_driver_advances_one_step_at_a_time(self):
        trip = self.service.update_status(self.trip.id, self.owner, TripStatus.EN_ROUTE)
        self.assertEqual(trip.status, TripStatus.EN_ROUTE)

        trip = self.service.update_status(self.trip.id, self.owner, TripStatus.ARRIVED)
        self.assertEqual(trip.status, TripStatus.ARRIVED)

    def test_skipping_a_step_rejected(self):
        with self.assertRaises(InvalidStatusTransitionError):
            self.service.update_status(self.trip.id, self.owner, TripStatus.ARRIVED)

    def test_driver_cannot_complete(self):
        self._drive_to_arrival()
        with self.assertRaises(InvalidStatusTransitionError):
            self.service.update_status(self.trip.id, self.owner, TripStatus.COMPLETED)

    def test_passenger_cannot_update_status(self):
        with self.assertRaises(TripPermissionError):
            self.service.update_status(self.trip.id, self.passenger, TripStatus.EN_ROUTE)

    def test_confirm_arrival_releases_funds(self):
        self._drive_to_arrival()

        trip = self.service.confirm_arrival(self.trip.id, self.passenger)

        self.assertEqual(trip.status, TripStatus.COMPLETED)
        self.assertIsNotNone(trip.completed_at)
        self.assertEqual(Wallet.objects.get(user=self.owner).balance, Decimal('9500.00'))
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('8000.00'))
        escrow = EscrowHold.objects.get(trip=trip)
        self.assertEqual(escrow.status, EscrowStatus.RELEASED)
        self.assertEqual(escrow.payee.user, self.owner)
        self.assertEqual(EscrowHold.vault_balance(), Decimal('0.00'))

    def test_confirm_arrival_before_arrival_rejected(self):
        self.service.update_status(self.trip.id, self.owner, TripStatus.EN_ROUTE)
        with self.assertRaises(InvalidStatusTransitionError):
            self.service.confirm_arrival(self.trip.id, self.passenger)
        self.assertEqual(EscrowHold.objects.get(trip=self.trip).status, EscrowStatus.HELD)

    def test_driver_cannot_confirm_arrival(self):
        self._drive_to_arrival()
        with self.assertRaises(TripPermissionError):
            self.service.confirm_arrival(self.trip.id, self.owner)

    def test_rate_completed_trip_updates_averages(self):
        self._drive_to_arrival()
        self.service.confirm_arrival(self.trip.id, self.passenger)

        trip = self.service.rate_trip(self.trip.id, self.passenger, 4)

        self.assertEqual(trip.user_rating, 4)
        profile = Profile.objects.get(user=self.owner)
        self.assertEqual(profile.driver_rating, Decimal('4.00'))
        self.assertEqual(profile.total_reviews, 1)
        self.assertEqual(RideOffer.objects.get(id=self.offer.id).rating, Decimal('4.00'))

    def test_rate_twice_rejected(self):
        self._drive_to_arrival()
        self.service.confirm_arrival(self.trip.id, self.passenger)
        self.service.rate_trip(self.trip.id, self.passenger, 5)

        with self.assertRaises(RatingError):
            self.service.rate_trip(self.trip.id, self.passenger, 3)

    def test_rate_out_of_range_rejected(self):
        self._drive_to_arrival()
        self.service.confirm_arrival(self.trip.id, self.passenger)

        for rating in (0, 6, True, '5'):
            with self.assertRaises(RatingError):
                self.service.rate_trip(self.trip.id, self.passenger, rating)

    def test_rate_open_trip_rejected(self):
        with self.assertRaises(RatingError):
            self.service.rate_trip(self.trip.id, self.passenger, 5)

    def test_trips_for_each_role(self):
        self.assertEqual(list(self.service.trips_for(self.passenger)), [self.trip])
        self.assertEqual(list(self.service.trips_for(self.owner)), [self.trip])
        other = make_passenger(username='9191000009')
        self.assertEqual(list(self.service.trips_for(other)), [])

    def test_driver_summary(self):
        self._drive_to_arrival()
        self.service.confirm_arrival(self.trip.id, self.passenger)

        summary = self.service.driver_summary(self.owner)

        self.assertEqual(summary['total_earnings'], 7000)
        self.assertEqual(summary['balance'], Decimal('9500.00'))
        self.assertEqual(list(summary['completed_trips']), [self.trip])
        self.assertEqual(list(summary['active_trips']), [])


@patch('connect_app.services.notification_service.send_sms_via_twilio', return_value={'status': 'success', 'sid': 'SM1'})
class StatusNotificationTest(TestCase):
    def setUp(self):
        self.service = TripService()
        self.passenger = make_passenger()
        self.owner = make_owner()
        leh, srinagar = make_cities()
        offer = make_offer(self.owner, leh, srinagar)
        self.trip = BookingService().book_trip(self.passenger, offer.id, [2])

    def test_passenger_told_each_step(self, mock_sms):
        with self.captureOnCommitCallbacks(execute=True):
            self.service.update_status(self.trip.id, self.owner, TripStatus.EN_ROUTE)
        mock_sms.assert_called_once_with(
            '9191000001', 'Tenzin Norbu has started your trip from Leh to Srinagar.'
        )

        with self.captureOnCommitCallbacks(execute=True):
            self.service.update_status(self.trip.id, self.owner, TripStatus.ARRIVED)
        self.assertEqual(
            mock_sms.call_args.args,
            ('9191000001', 'You have arrived at Srinagar. Please confirm arrival to release payment to Tenzin Norbu.'),
        )

        with self.assertLogs('connect_app.services.notification_service', level='INFO') as logs:
            with self.captureOnCommitCallbacks(execute=True):
                self.service.confirm_arrival(self.trip.id, self.passenger)
        self.assertEqual(
            mock_sms.call_args.args,
            ('9191000001', f'Trip LC{self.trip.id} completed. Thank you for choosing Ladakh Connect!'),
        )
        self.assertIn(f'[NOTIFY] LC{self.trip.id}', logs.output[0])
        self.assertEqual(mock_sms.call_count, 3)

    def test_nothing_sent_when_update_rejected(self, mock_sms):
        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(InvalidStatusTransitionError):
                self.service.update_status(self.trip.id, self.owner, TripStatus.ARRIVED)
        mock_sms.assert_not_called()

    def test_sms_failure_is_logged(self, mock_sms):
        mock_sms.return_value = {'status': 'error', 'message': 'unreachable'}
        with self.assertLogs('connect_app.services.notification_service', level='WARNING'):
            with self.captureOnCommitCallbacks(execute=True):
                trip = self.service.update_status(self.trip.id, self.owner, TripStatus.EN_ROUTE)
        self.assertEqual(trip.status, TripStatus.EN_ROUTE)


class TripChatTest(TestCase):
    def setUp(self):
        self.service = TripService()
        self.passenger = make_passenger()
        self.owner = make_owner()
        leh, srinagar = make_cities()
        offer = make_offer(self.owner, leh, srinagar)
        self.trip = BookingService().book_trip(self.passenger, offer.id, [2])

    def test_participants_can_chat(self):
        self.service.send_message(self.trip.id, self.passenger, '  Where do we meet?  ')
        self.service.send_message(self.trip.id, self.owner, 'Near the main market')

        messages = list(self.service.messages(self.trip.id, self.passenger))
        self.assertEqual([m.text for m in messages], ['Where do we meet?', 'Near the main market'])

    def test_outsider_cannot_chat(self):
        outsider = make_passenger(username='9191000009')
        with self.assertRaises(TripPermissionError):
            self.service.send_message(self.trip.id, outsider, 'Hello')
        with self.assertRaises(TripPermissionError):
            self.service.messages(self.trip.id, outsider)

    def test_empty_and_long_messages_rejected(self):
        with self.assertRaises(ChatError):
            self.service.send_message(self.trip.id, self.passenger, '   ')
        with self.assertRaises(ChatError):
            self.service.send_message(self.trip.id, self.passenger, 'x' * 1001)

    def test_chat_closed_after_cancellation(self):
        BookingService().cancel_booking(self.trip.id, self.passenger)
        with self.assertRaises(ChatError):
            self.service.send_message(self.trip.id, self.passenger, 'Hello')

    def test_messages_since(self):
        first = self.service.send_message(self.trip.id, self.passenger, 'First')
        first.timestamp = timezone.now() - timedelta(minutes=5)
        first.save(update_fields=['timestamp'])
        self.service.send_message(self.trip.id, self.owner, 'Second')

        since = timezone.now() - timedelta(minutes=1)
        messages = list(self.service.messages(self.trip.id, self.owner, since=since))
        self.assertEqual([m.text for m in messages], ['Second'])
