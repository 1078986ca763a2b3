from .payment_gateway import PaymentGateway
from ..services.escrow_service import EscrowService


class VaultPaymentGateway(PaymentGateway):
    """Pays for a trip from the passenger wallet into the app vault"""

    def __init__(self, escrow_service=None):
        self.escrow = escrow_service or EscrowService()

    def initiate_payment(self, payment_details):
        trip = payment_details['trip']
        self.escrow.hold(trip)
        return "vault_payment_success"

    def handle_webhook(self, request):
        # Vault payments settle synchronously
        return None
