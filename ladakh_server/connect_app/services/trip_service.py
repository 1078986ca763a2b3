"""Trip service - business logic for trip operations"""
import logging

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from wallet.services import WalletService
from ..models import Trip, ChatMessage
from ..utils.constants import TripStatus, UserRole, BusinessRules
from .escrow_service import EscrowService
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class TripPermissionError(Exception):
    """Raised when a user acts on a trip they are not part of"""
    pass


class InvalidStatusTransitionError(Exception):
    """Raised when a trip cannot move to the requested status"""
    pass


class RatingError(Exception):
    """Raised when a trip cannot be rated"""
    pass


class ChatError(Exception):
    """Raised when a message cannot be posted"""
    pass


class TripService:
    """Service for trip operations"""

    def trips_for(self, user):
        """Bookings for passengers, assignments for owners"""
        profile = getattr(user, 'profile', None)
        trips = Trip.objects.select_related('from_city', 'to_city', 'offer')
        if profile is not None and profile.role == UserRole.OWNER:
            return trips.filter(driver=user)
        return trips.filter(passenger=user)

    @transaction.atomic
    def update_status(self, trip_id, user, status):
        """Driver moves the trip one step along BOOKED -> EN_ROUTE -> ARRIVED"""
        trip = Trip.objects.select_for_update().get(id=trip_id)

        if trip.driver_id != user.id:
            raise TripPermissionError('Only the assigned driver can update this trip')

        expected = TripStatus.DRIVER_TRANSITIONS.get(trip.status)
        if status != expected:
            if status == TripStatus.COMPLETED:
                raise InvalidStatusTransitionError('Trips are completed when the passenger confirms arrival')
            raise InvalidStatusTransitionError(f'Cannot move trip from {trip.status} to {status}')

        previous = trip.status
        trip.status = status
        trip.save(update_fields=['status', 'updated_at'])

        logger.info(f'[TRIP] {trip.booking_reference} {previous} -> {status} by {user.username}')
        transaction.on_commit(lambda: NotificationService().send_status_update(trip))
        return trip

    @transaction.atomic
    def confirm_arrival(self, trip_id, user):
        """Passenger confirms arrival; vault funds go to the driver and the trip completes"""
        trip = Trip.objects.select_for_update(of=('self',)).select_related('passenger', 'driver').get(id=trip_id)

        if trip.passenger_id != user.id:
            raise TripPermissionError('Only the passenger can confirm arrival')

        if trip.status != TripStatus.ARRIVED:
            raise InvalidStatusTransitionError(f'Cannot confirm arrival for a trip that is {trip.status}')

        EscrowService().release(trip)

        trip.status = TripStatus.COMPLETED
        trip.completed_at = timezone.now()
        trip.save(update_fields=['status', 'completed_at', 'updated_at'])

        logger.info(f'[TRIP] {trip.booking_reference} completed, funds released')
        transaction.on_commit(lambda: NotificationService().send_status_update(trip))
        return trip

    @transaction.atomic
    def rate_trip(self, trip_id, user, rating):
        trip = Trip.objects.select_for_update().get(id=trip_id)

        if trip.passenger_id != user.id:
            raise TripPermissionError('Only the passenger can rate this trip')
        if trip.status != TripStatus.COMPLETED:
            raise RatingError('Can only rate completed trips')
        if trip.user_rating is not None:
            raise RatingError('Trip already rated')
        if isinstance(rating, bool) or not isinstance(rating, int) or not BusinessRules.MIN_RATING <= rating <= BusinessRules.MAX_RATING:
            raise RatingError(f'Rating must be between {BusinessRules.MIN_RATING} and {BusinessRules.MAX_RATING}')

        trip.user_rating = rating
        # signals recompute the driver and offer averages on this save
        trip.save(update_fields=['user_rating', 'updated_at'])
        return trip

    def send_message(self, trip_id, user, text):
        trip = Trip.objects.get(id=trip_id)

        if not trip.is_participant(user):
            raise TripPermissionError('You are not part of this trip')
        if trip.status == TripStatus.CANCELLED:
            raise ChatError('Chat is closed for cancelled trips')

        text = (text or '').strip()
        if not text:
            raise ChatError('Message cannot be empty')
        if len(text) > BusinessRules.MAX_MESSAGE_LENGTH:
            raise ChatError(f'Message cannot exceed {BusinessRules.MAX_MESSAGE_LENGTH} characters')

        return ChatMessage.objects.create(trip=trip, sender=user, text=text)

    def messages(self, trip_id, user, since=None):
        trip = Trip.objects.get(id=trip_id)
        if not trip.is_participant(user):
            raise TripPermissionError('You are not part of this trip')

        messages = trip.messages.select_related('sender__profile')
        if since is not None:
            messages = messages.filter(timestamp__gt=since)
        return messages

    def driver_summary(self, user):
        """Owner dashboard: balance, earnings and trip buckets"""
        trips = Trip.objects.filter(driver=user).select_related('from_city', 'to_city')
        completed = trips.filter(status=TripStatus.COMPLETED)
        total_earnings = completed.aggregate(total=Sum('cost'))['total'] or 0

        return {
            'balance': WalletService().get_wallet(user).balance,
            'total_earnings': total_earnings,
            'active_trips': trips.filter(status__in=TripStatus.OPEN),
            'completed_trips': completed,
        }
