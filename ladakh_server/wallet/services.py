"""Wallet service - balance movements with a transaction ledger"""
import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from connect_app.utils.constants import TransactionType, UserRole, BusinessRules
from .models import Wallet, WalletTransaction

logger = logging.getLogger(__name__)


class InvalidAmountError(Exception):
    """Raised when an amount is not a positive number"""
    pass


class InsufficientFundsError(Exception):
    """Raised when a wallet cannot cover a debit"""
    pass


def to_amount(value):
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f'Invalid amount: {value!r}')
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError('Amount must be greater than 0')
    return amount.quantize(Decimal('0.01'))


class WalletService:
    """Service for wallet operations"""

    def get_wallet(self, user):
        wallet, _ = Wallet.objects.get_or_create(user=user)
        return wallet

    def open_wallet(self, user, role):
        """Open a wallet with the simulated starting balance for the role"""
        initial = (BusinessRules.INITIAL_OWNER_BALANCE if role == UserRole.OWNER
                   else BusinessRules.INITIAL_PASSENGER_BALANCE)
        wallet, created = Wallet.objects.get_or_create(user=user)
        if created and initial:
            self.credit(wallet, initial, title='Welcome balance', reference_id='welcome')
        return wallet

    @transaction.atomic
    def deposit(self, user, amount, reference_id='deposit', description=''):
        """Top up a user's wallet"""
        wallet = self.get_wallet(user)
        return self.credit(wallet, amount, title='Wallet top-up', reference_id=reference_id,
                           description=description)

    @transaction.atomic
    def credit(self, wallet, amount, title, reference_id='unknown', description=''):
        amount = to_amount(amount)
        wallet = Wallet.objects.select_for_update().get(pk=wallet.pk)
        wallet.balance += amount
        wallet.save(update_fields=['balance'])

        WalletTransaction.objects.create(
            wallet=wallet,
            transaction_type=TransactionType.CREDIT,
            amount=amount,
            title=title,
            description=description,
            reference_id=reference_id,
        )
        logger.info(f'[WALLET] Credited {amount} to {wallet.user.username} ({title})')
        return wallet

    @transaction.atomic
    def debit(self, wallet, amount, title, reference_id='unknown', description=''):
        amount = to_amount(amount)
        wallet = Wallet.objects.select_for_update().get(pk=wallet.pk)
        if wallet.balance < amount:
            raise InsufficientFundsError('Insufficient wallet balance')
        wallet.balance -= amount
        wallet.save(update_fields=['balance'])

        WalletTransaction.objects.create(
            wallet=wallet,
            transaction_type=TransactionType.DEBIT,
            amount=amount,
            title=title,
            description=description,
            reference_id=reference_id,
        )
        logger.info(f'[WALLET] Debited {amount} from {wallet.user.username} ({title})')
        return wallet
