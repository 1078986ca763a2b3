import logging

import stripe
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from connect_app.services import PaymentService
from connect_app.payment_gateways.stripe_payment_gateway import StripePaymentGateway
from connect_app.utils.constants import EscrowStatus
from .models import EscrowHold, WalletTransaction
from .serializers import WalletSerializer, WalletTransactionSerializer, TopUpSerializer, EscrowHoldSerializer
from .services import WalletService, InvalidAmountError

logger = logging.getLogger(__name__)


class WalletView(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def list(self, request):
        wallet = WalletService().get_wallet(request.user)
        return Response(WalletSerializer(wallet).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['POST'], url_path='add-funds')
    def add_funds(self, request):
        serializer = TopUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = PaymentService().top_up(
                request.user,
                serializer.validated_data['amount'],
                serializer.validated_data['method'],
            )
        except InvalidAmountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except stripe.StripeError as e:
            logger.error(f'[STRIPE] Checkout session failed for {request.user.username}: {e}')
            return Response({'error': 'Payment provider unavailable'}, status=status.HTTP_502_BAD_GATEWAY)

        if result['requires_redirect']:
            return Response({'payment_url': result['payment_url']}, status=status.HTTP_202_ACCEPTED)
        return Response({'message': 'Funds added successfully', 'balance': result['balance']},
                        status=status.HTTP_200_OK)


class WalletTransactionView(viewsets.ReadOnlyModelViewSet):
    serializer_class = WalletTransactionSerializer
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def get_queryset(self):
        return WalletTransaction.objects.filter(wallet__user=self.request.user.id)


class VaultView(viewsets.ViewSet):
    """Platform escrow: money paid for trips that have not completed yet"""
    permission_classes = [IsAdminUser]
    authentication_classes = [JWTAuthentication]

    def list(self, request):
        holds = EscrowHold.objects.filter(status=EscrowStatus.HELD).select_related('trip', 'payer__user')
        return Response({
            'balance': EscrowHold.vault_balance(),
            'holds': EscrowHoldSerializer(holds, many=True).data,
        }, status=status.HTTP_200_OK)


@csrf_exempt
def stripe_webhook(request):
    try:
        session = StripePaymentGateway().handle_webhook(request)
    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except stripe.SignatureVerificationError as e:
        return JsonResponse({'error': str(e)}, status=400)

    if session is not None:
        PaymentService().handle_successful_payment(session)

    return JsonResponse({'status': 'success'}, status=200)
