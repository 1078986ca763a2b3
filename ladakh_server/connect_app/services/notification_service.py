"""Notification service for SMS updates to passengers"""
import logging

from ..utils.constants import TripStatus
from ..utils.twilio_otp import send_sms_via_twilio

logger = logging.getLogger(__name__)


STATUS_MESSAGES = {
    TripStatus.EN_ROUTE: "{driver} has started your trip from {origin} to {destination}.",
    TripStatus.ARRIVED: "You have arrived at {destination}. Please confirm arrival to release payment to {driver}.",
    TripStatus.COMPLETED: "Trip {reference} completed. Thank you for choosing Ladakh Connect!",
}


class NotificationService:
    def send_status_update(self, trip):
        """Tell the passenger their trip moved to a new status"""
        template = STATUS_MESSAGES.get(trip.status)
        if template is None:
            return None

        message = template.format(
            driver=trip.driver_name,
            origin=trip.from_city,
            destination=trip.to_city,
            reference=trip.booking_reference,
        )
        logger.info(f'[NOTIFY] {trip.booking_reference} -> {trip.passenger.username}: {message}')

        profile = getattr(trip.passenger, 'profile', None)
        if profile is None or not profile.mobile_number:
            return None

        result = send_sms_via_twilio(profile.mobile_number, message)
        if result['status'] != 'success':
            logger.warning(f'[NOTIFY] SMS not delivered for {trip.booking_reference}: {result.get("message")}')
        return result
