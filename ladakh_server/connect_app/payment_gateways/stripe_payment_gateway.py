import json
import logging

import stripe
from django.conf import settings

from .payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class StripePaymentGateway(PaymentGateway):
    """Wallet top-ups through Stripe Checkout"""

    def initiate_payment(self, payment_details):
        stripe.api_key = settings.STRIPE_SECRET_KEY
        user = payment_details['user']

        session = stripe.checkout.Session.create(
            payment_method_types=['card'],
            line_items=[
                {
                    'price_data': {
                        'currency': settings.STRIPE_CURRENCY,
                        'unit_amount': int(payment_details['amount'] * 100),
                        'product_data': {
                            'name': 'Ladakh Connect wallet top-up',
                        },
                    },
                    'quantity': 1,
                }
            ],
            mode='payment',
            metadata={"user_id": user.id, "amount": str(payment_details['amount'])},
            success_url=f'{settings.FRONTEND_URL}/wallet/success?session_id={{CHECKOUT_SESSION_ID}}',
            cancel_url=f'{settings.FRONTEND_URL}/wallet/cancel',
            customer_email=user.email or None,
        )
        logger.info(f'[STRIPE] Checkout session {session.id} created for {user.username}')
        return session.url

    def handle_webhook(self, request):
        """Verify the webhook signature and return the completed session, if any"""
        payload = request.body
        sig_header = request.META.get('HTTP_STRIPE_SIGNATURE', '')
        stripe.Webhook.construct_event(payload, sig_header, settings.STRIPE_WEBHOOK_SECRET)

        event = json.loads(payload)
        if event.get("type") == "checkout.session.completed":
            return event["data"]["object"]
        return None
