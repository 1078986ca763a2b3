"""Services package - business logic layer"""

from .auth_service import AuthService
from .escrow_service import EscrowService, EscrowError
from .payment_service import PaymentService
from .ride_service import RideService, RidePublishError
from .booking_service import (
    BookingService, BookingError, SeatUnavailableError, InvalidSeatError,
    BookingNotCancellableError, CancellationWindowClosedError,
)
from .trip_service import TripService, TripPermissionError, InvalidStatusTransitionError, RatingError, ChatError
from .document_service import DocumentService, DocumentNotAvailableError
from .notification_service import NotificationService

__all__ = [
    'AuthService',
    'EscrowService',
    'EscrowError',
    'PaymentService',
    'RideService',
    'RidePublishError',
    'BookingService',
    'BookingError',
    'SeatUnavailableError',
    'InvalidSeatError',
    'BookingNotCancellableError',
    'CancellationWindowClosedError',
    'TripService',
    'TripPermissionError',
    'InvalidStatusTransitionError',
    'RatingError',
    'ChatError',
    'DocumentService',
    'DocumentNotAvailableError',
    'NotificationService',
]
