"""Booking service - business logic for booking operations"""
import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from ..models import RideOffer, Trip
from ..utils.constants import TripStatus, UserRole, BusinessRules
from .escrow_service import EscrowService
from .payment_service import PaymentService

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Raised when a booking request is invalid"""
    pass


class SeatUnavailableError(BookingError):
    """Raised when a requested seat is already taken"""
    pass


class InvalidSeatError(BookingError):
    """Raised when a requested seat does not exist on the vehicle"""
    pass


class BookingNotCancellableError(BookingError):
    """Raised when a trip is past the point where it can be cancelled"""
    pass


class CancellationWindowClosedError(BookingNotCancellableError):
    """Raised when cancelling less than the allowed window before departure"""
    pass


class BookingService:
    """Service for booking operations"""

    @transaction.atomic
    def book_trip(self, user, offer_id, seats):
        """
        Book seats on a ride offer and pay into the vault

        The offer row is locked for the duration so concurrent bookings
        cannot claim the same seat. Any failure, including insufficient
        wallet balance, leaves seats and balances untouched.

        Args:
            user: Passenger making the booking
            offer_id: RideOffer ID
            seats: List of seat numbers (1-based)

        Returns:
            Trip object

        Raises:
            BookingError: If the request is invalid
            SeatUnavailableError: If any seat is already booked
            InsufficientFundsError: If the wallet cannot cover the cost
        """
        profile = getattr(user, 'profile', None)
        if profile is None or profile.role != UserRole.PASSENGER:
            raise BookingError('Only passengers can book trips')

        offer = RideOffer.objects.select_for_update(of=('self',)).select_related('from_city', 'to_city').get(id=offer_id)

        if not offer.is_active:
            raise BookingError('This ride is no longer available')
        if offer.driver_id == user.id:
            raise BookingError('You cannot book your own ride')

        seats = self._validate_seats(offer, seats)

        taken = offer.unavailable_seats(seats)
        if taken:
            raise SeatUnavailableError(f"Seats already booked: {', '.join(map(str, taken))}")

        trip = Trip.objects.create(
            offer=offer,
            passenger=user,
            driver=offer.driver,
            from_city=offer.from_city,
            to_city=offer.to_city,
            travel_date=offer.departure_date,
            seats=seats,
            cost=len(seats) * offer.price_per_seat,
            status=TripStatus.BOOKED,
            driver_name=offer.driver_name,
            vehicle_no=offer.vehicle_no or BusinessRules.PLACEHOLDER_VEHICLE_NO,
            vehicle_type=offer.vehicle_type,
        )

        PaymentService().pay_for_trip(trip)

        offer.booked_seats = sorted(offer.booked_seats + seats)
        offer.save(update_fields=['booked_seats'])

        logger.info(f'[BOOKING] {user.username} booked seats {seats} on offer {offer.id} as {trip.booking_reference}')
        return trip

    @transaction.atomic
    def cancel_booking(self, trip_id, user):
        """Cancel a booked trip, refund the vault payment and free its seats"""
        trip = Trip.objects.select_for_update(of=('self',)).select_related('offer').get(id=trip_id)

        if trip.passenger_id != user.id:
            raise BookingError('Only the passenger can cancel this booking')

        if trip.status != TripStatus.BOOKED:
            raise BookingNotCancellableError(f'Cannot cancel a trip that is {trip.status}')

        offer = None
        if trip.offer_id:
            offer = RideOffer.objects.select_for_update().get(id=trip.offer_id)
            cutoff = offer.departure_datetime() - timedelta(hours=BusinessRules.CANCELLATION_WINDOW_HOURS)
            if timezone.now() > cutoff:
                raise CancellationWindowClosedError(
                    f'Bookings can only be cancelled until {BusinessRules.CANCELLATION_WINDOW_HOURS} hours before departure'
                )

        EscrowService().refund(trip)

        if offer is not None:
            released = set(trip.seats)
            offer.booked_seats = [s for s in offer.booked_seats if s not in released]
            offer.save(update_fields=['booked_seats'])

        trip.status = TripStatus.CANCELLED
        trip.cancelled_at = timezone.now()
        trip.save(update_fields=['status', 'cancelled_at', 'updated_at'])

        logger.info(f'[BOOKING] {trip.booking_reference} cancelled by {user.username}')
        return trip

    def _validate_seats(self, offer, seats):
        if not seats:
            raise InvalidSeatError('Select at least one seat')

        try:
            seats = [int(s) for s in seats]
        except (TypeError, ValueError):
            raise InvalidSeatError('Seat numbers must be integers')

        if len(set(seats)) != len(seats):
            raise InvalidSeatError('The same seat was selected twice')

        invalid = [s for s in seats if s < 1 or s > offer.total_seats]
        if invalid:
            raise InvalidSeatError(
                f"Seats {', '.join(map(str, invalid))} do not exist on this {offer.total_seats}-seat vehicle"
            )

        return sorted(seats)
