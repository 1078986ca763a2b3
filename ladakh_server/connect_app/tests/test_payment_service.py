"""Tests for wallet top-ups and the Stripe webhook"""
import json
from decimal import Decimal
from unittest.mock import patch, MagicMock

from django.db import connection
from django.test import TestCase, override_settings, skipUnlessDBFeature
from django.test.utils import CaptureQueriesContext
from django.urls import reverse

from wallet.models import Wallet, WalletTransaction
from wallet.services import InvalidAmountError
from ..services.payment_service import PaymentService
from ..utils.constants import TopUpMethod
from .helpers import make_passenger


class TopUpTest(TestCase):
    def setUp(self):
        self.service = PaymentService()
        self.passenger = make_passenger()

    def test_simulated_top_up(self):
        result = self.service.top_up(self.passenger, '500', TopUpMethod.SIMULATED)

        self.assertFalse(result['requires_redirect'])
        self.assertEqual(result['balance'], Decimal('15500.00'))
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15500.00'))

    def test_invalid_amount(self):
        for amount in ('0', '-10', 'abc'):
            with self.assertRaises(InvalidAmountError):
                self.service.top_up(self.passenger, amount)

    @patch('connect_app.payment_gateways.stripe_payment_gateway.stripe.checkout.Session.create')
    def test_stripe_top_up_returns_checkout_url(self, mock_create):
        mock_create.return_value = MagicMock(id='cs_test_1', url='https://checkout.stripe.com/pay/cs_test_1')

        result = self.service.top_up(self.passenger, '1000', TopUpMethod.STRIPE)

        self.assertTrue(result['requires_redirect'])
        self.assertEqual(result['payment_url'], 'https://checkout.stripe.com/pay/cs_test_1')
        metadata = mock_create.call_args.kwargs['metadata']
        self.assertEqual(metadata['user_id'], self.passenger.id)
        # nothing is credited until the webhook confirms payment
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15000.00'))

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            self.service.top_up(self.passenger, '100', 'cash')


@override_settings(STRIPE_WEBHOOK_SECRET='whsec_test')
class StripeWebhookTest(TestCase):
    def setUp(self):
        self.passenger = make_passenger()
        self.url = reverse('stripe-webhook')
        self.event = {
            'type': 'checkout.session.completed',
            'data': {'object': {
                'id': 'cs_test_1',
                'metadata': {'user_id': str(self.passenger.id), 'amount': '1000.00'},
            }},
        }

    def _post(self, event):
        return self.client.post(self.url, data=json.dumps(event), content_type='application/json',
                                HTTP_STRIPE_SIGNATURE='t=1,v1=sig')

    @patch('connect_app.payment_gateways.stripe_payment_gateway.stripe.Webhook.construct_event')
    def test_completed_session_credits_wallet_once(self, mock_construct):
        self.assertEqual(self._post(self.event).status_code, 200)
        self.assertEqual(self._post(self.event).status_code, 200)

        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('16000.00'))
        self.assertEqual(WalletTransaction.objects.filter(reference_id='cs_test_1').count(), 1)

    @patch('connect_app.payment_gateways.stripe_payment_gateway.stripe.Webhook.construct_event')
    def test_other_events_ignored(self, mock_construct):
        self.event['type'] = 'payment_intent.created'
        self.assertEqual(self._post(self.event).status_code, 200)
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15000.00'))

    @patch('connect_app.payment_gateways.stripe_payment_gateway.stripe.Webhook.construct_event',
           side_effect=ValueError('Invalid payload'))
    def test_invalid_payload_rejected(self, mock_construct):
        self.assertEqual(self._post(self.event).status_code, 400)
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15000.00'))

    @patch('connect_app.payment_gateways.stripe_payment_gateway.stripe.Webhook.construct_event')
    def test_session_without_amount_is_not_credited(self, mock_construct):
        del self.event['data']['object']['metadata']['amount']

        with self.assertLogs('connect_app.services.payment_service', level='ERROR'):
            response = self._post(self.event)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15000.00'))
        self.assertFalse(WalletTransaction.objects.filter(reference_id='cs_test_1').exists())


class StripeSessionCreditTest(TestCase):
    def setUp(self):
        self.service = PaymentService()
        self.passenger = make_passenger()
        self.session = {
            'id': 'cs_test_2',
            'metadata': {'user_id': str(self.passenger.id), 'amount': '750.00'},
        }

    def test_credit_once_per_session(self):
        wallet = self.service.handle_successful_payment(self.session)
        self.assertEqual(wallet.balance, Decimal('15750.00'))

        self.assertIsNone(self.service.handle_successful_payment(self.session))
        self.assertEqual(Wallet.objects.get(user=self.passenger).balance, Decimal('15750.00'))

    def test_unknown_user_ignored(self):
        self.session['metadata']['user_id'] = '9999'
        self.assertIsNone(self.service.handle_successful_payment(self.session))

    @skipUnlessDBFeature('has_select_for_update')
    def test_wallet_locked_before_ledger_check(self):
        with CaptureQueriesContext(connection) as ctx:
            self.service.handle_successful_payment(self.session)

        sqls = [q['sql'] for q in ctx.captured_queries]
        lock = next(i for i, sql in enumerate(sqls) if 'FOR UPDATE' in sql and 'wallet_wallet' in sql)
        check = next(i for i, sql in enumerate(sqls) if 'wallet_wallettransaction' in sql and 'cs_test_2' in sql)
        self.assertLess(lock, check)
