"""Document service - printable tickets and invoices for trips"""
from django.utils import timezone

from ..utils.constants import TripStatus, DocumentType


class DocumentNotAvailableError(Exception):
    """Raised when a document cannot be issued for the trip's status"""
    pass


DOCUMENT_TEMPLATE = """LADAKH CONNECT - {title}
-------------------------------------
Date: {issued}
Trip ID: #{trip_id}
Booking ID: {reference}

Passenger: {passenger}
Driver: {driver}
Vehicle: {vehicle_type} ({vehicle_no})

Route: {origin} -> {destination}
Travel Date: {travel_date}

Seats: {seats}
Total Amount: ₹{cost}
Payment Status: {payment_status}

-------------------------------------
Thank you for choosing Ladakh Connect.
Safe Travels!
"""

PAYMENT_STATUS = {
    DocumentType.TICKET: 'PAID (Held in Vault)',
    DocumentType.INVOICE: 'PAID (Funds Released)',
}


class DocumentService:
    def render(self, trip, doc_type):
        """
        Render a plain-text ticket or invoice

        Returns:
            (filename, content) tuple

        Raises:
            DocumentNotAvailableError: For cancelled trips, or invoices before completion
        """
        if doc_type not in PAYMENT_STATUS:
            raise DocumentNotAvailableError(f'Unknown document type: {doc_type}')
        if trip.status == TripStatus.CANCELLED:
            raise DocumentNotAvailableError('No documents are issued for cancelled trips')
        if doc_type == DocumentType.INVOICE and trip.status != TripStatus.COMPLETED:
            raise DocumentNotAvailableError('Invoices are issued once the trip is completed')

        content = DOCUMENT_TEMPLATE.format(
            title=doc_type.upper(),
            issued=timezone.localdate().strftime('%a %b %d %Y'),
            trip_id=trip.id,
            reference=trip.booking_reference,
            passenger=trip.passenger_name,
            driver=trip.driver_name,
            vehicle_type=trip.vehicle_type,
            vehicle_no=trip.vehicle_no,
            origin=trip.from_city,
            destination=trip.to_city,
            travel_date=trip.travel_date.isoformat(),
            seats=', '.join(str(s) for s in trip.seats),
            cost=trip.cost,
            payment_status=PAYMENT_STATUS[doc_type],
        )
        filename = f'LadakhConnect_{doc_type}_{trip.id}.txt'
        return filename, content
