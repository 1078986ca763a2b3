"""Escrow service - moves trip payments through the app vault"""
import logging

from django.db import transaction
from django.utils import timezone

from wallet.models import EscrowHold
from wallet.services import WalletService
from ..utils.constants import EscrowStatus

logger = logging.getLogger(__name__)


class EscrowError(Exception):
    """Raised when an escrow hold is missing or already settled"""
    pass


class EscrowService:
    """
    Passenger payments are parked in the vault when a trip is booked.

    A hold is settled exactly once: released to the driver when the
    passenger confirms arrival, or refunded when the booking is cancelled.
    """

    def __init__(self, wallet_service=None):
        self.wallets = wallet_service or WalletService()

    @transaction.atomic
    def hold(self, trip):
        """Debit the passenger and park the trip cost in the vault"""
        payer = self.wallets.get_wallet(trip.passenger)
        self.wallets.debit(
            payer, trip.cost,
            title='Trip payment',
            reference_id=trip.booking_reference,
            description=f'{trip.from_city} to {trip.to_city} on {trip.travel_date}',
        )
        escrow = EscrowHold.objects.create(trip=trip, payer=payer, amount=trip.cost)
        logger.info(f'[ESCROW] Holding {escrow.amount} for trip {trip.booking_reference}')
        return escrow

    @transaction.atomic
    def release(self, trip):
        """Pay the held amount out to the driver"""
        escrow = self._get_held(trip)
        if trip.driver is None:
            raise EscrowError('Trip has no driver to release funds to')

        payee = self.wallets.get_wallet(trip.driver)
        self.wallets.credit(
            payee, escrow.amount,
            title='Trip earnings',
            reference_id=trip.booking_reference,
            description=f'Released from vault for {trip.from_city} to {trip.to_city}',
        )
        escrow.payee = payee
        escrow.status = EscrowStatus.RELEASED
        escrow.settled_at = timezone.now()
        escrow.save(update_fields=['payee', 'status', 'settled_at'])
        logger.info(f'[ESCROW] Released {escrow.amount} to {trip.driver.username} for {trip.booking_reference}')
        return escrow

    @transaction.atomic
    def refund(self, trip):
        """Return the held amount to the passenger"""
        escrow = self._get_held(trip)
        self.wallets.credit(
            escrow.payer, escrow.amount,
            title='Trip refund',
            reference_id=trip.booking_reference,
            description='Booking cancelled',
        )
        escrow.status = EscrowStatus.REFUNDED
        escrow.settled_at = timezone.now()
        escrow.save(update_fields=['status', 'settled_at'])
        logger.info(f'[ESCROW] Refunded {escrow.amount} for {trip.booking_reference}')
        return escrow

    def vault_balance(self):
        return EscrowHold.vault_balance()

    def _get_held(self, trip):
        try:
            escrow = EscrowHold.objects.select_for_update().get(trip=trip)
        except EscrowHold.DoesNotExist:
            raise EscrowError(f'No vault payment found for trip {trip.booking_reference}')
        if escrow.status != EscrowStatus.HELD:
            raise EscrowError(f'Vault payment already {escrow.status}')
        return escrow
