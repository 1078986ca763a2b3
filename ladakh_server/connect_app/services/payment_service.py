"""Payment service - orchestrates payment gateways"""
import logging

from django.contrib.auth.models import User
from django.db import transaction

from wallet.models import Wallet, WalletTransaction
from wallet.services import WalletService, InvalidAmountError, to_amount
from ..utils.constants import TopUpMethod

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for payment operations"""

    def pay_for_trip(self, trip):
        """Move the trip cost from the passenger wallet into the vault"""
        from ..payment_gateways.vault_payment_gateway import VaultPaymentGateway

        gateway = VaultPaymentGateway()
        return gateway.initiate_payment({'trip': trip, 'amount': trip.cost})

    def top_up(self, user, amount, method=TopUpMethod.SIMULATED):
        """Add money to a wallet, directly or through Stripe Checkout"""
        amount = to_amount(amount)

        if method == TopUpMethod.SIMULATED:
            wallet = WalletService().deposit(user, amount)
            return {'success': True, 'requires_redirect': False, 'balance': wallet.balance}

        elif method == TopUpMethod.STRIPE:
            from ..payment_gateways.stripe_payment_gateway import StripePaymentGateway
            payment_url = StripePaymentGateway().initiate_payment({'user': user, 'amount': amount})
            return {'success': True, 'requires_redirect': True, 'payment_url': payment_url}

        else:
            raise ValueError(f'Unsupported top-up method: {method}')

    @transaction.atomic
    def handle_successful_payment(self, session):
        """Credit the wallet for a completed Stripe Checkout session, once per session"""
        metadata = session.get('metadata') or {}
        try:
            user = User.objects.get(id=int(metadata['user_id']))
        except (KeyError, ValueError, User.DoesNotExist):
            logger.warning(f'[STRIPE] Session {session.get("id")} has no matching user')
            return None

        session_id = session.get('id', 'stripe')
        wallet_service = WalletService()
        # repeated deliveries of a session queue on the wallet row before the ledger check
        wallet = Wallet.objects.select_for_update().get(pk=wallet_service.get_wallet(user).pk)
        if WalletTransaction.objects.filter(wallet=wallet, reference_id=session_id).exists():
            logger.info(f'[STRIPE] Session {session_id} already credited')
            return None

        try:
            return wallet_service.credit(
                wallet, metadata.get('amount'),
                title='Wallet top-up',
                reference_id=session_id,
                description='Stripe Checkout top-up',
            )
        except InvalidAmountError as e:
            logger.error(f'[STRIPE] Session {session_id} not credited: {e}')
            return None
